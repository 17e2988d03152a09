import json

import pytest

from privacy_news.schema import parse_news_response


def _article(idx, category, tag, tag_color, **overrides):
    base = {
        "id": idx,
        "category": category,
        "tag": tag,
        "tagColor": tag_color,
        "headline": f"Headline {idx}",
        "summary": f"Summary for story {idx}.",
        "date": "March 2025",
        "sourceLabel": f"Outlet {idx}",
        "sourceUrl": f"https://example.com/story-{idx}",
    }
    base.update(overrides)
    return base


def _sample_data():
    return {
        "articles": [
            _article(1, "california", "California Laws", "purple"),
            _article(2, "minors", "Teen & Minors", "green"),
            _article(3, "breaches", "Data Breaches", "navy"),
            _article(4, "bigtech", "Big Tech", "red"),
            _article(5, "california", "California Laws", "purple"),
            _article(6, "minors", "Teen & Minors", "green"),
        ],
        "debates": [
            {"num": f"0{n}", "title": f"Debate {n}", "summary": f"Debate summary {n}."}
            for n in range(1, 5)
        ],
    }


@pytest.fixture
def sample_data():
    return _sample_data()


@pytest.fixture
def sample_response_text():
    return json.dumps(_sample_data())


@pytest.fixture
def sample_payload(sample_response_text):
    return parse_news_response(sample_response_text)
