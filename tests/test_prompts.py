import json
from datetime import date

import pytest

from privacy_news.prompts import LIVE, STATIC, build_prompt, format_long_date


def _skeleton(prompt: str) -> dict:
    start = prompt.index("{")
    end = prompt.rindex("}") + 1
    return json.loads(prompt[start:end])


def test_format_long_date_has_no_leading_zero():
    assert format_long_date(date(2025, 4, 5)) == "April 5, 2025"
    assert format_long_date(date(2024, 12, 31)) == "December 31, 2024"


def test_live_prompt_numbers_articles_and_omits_border_colors():
    prompt = build_prompt(date(2025, 4, 5), LIVE)

    assert prompt.startswith("Today is April 5, 2025.")
    assert "as of April 5, 2025" in prompt
    skeleton = _skeleton(prompt)
    assert [a["id"] for a in skeleton["articles"]] == [1, 2, 3, 4, 5, 6]
    assert [d["num"] for d in skeleton["debates"]] == ["01", "02", "03", "04"]
    assert all("borderColor" not in d for d in skeleton["debates"])


def test_static_prompt_requests_border_colors_without_ids():
    skeleton = _skeleton(build_prompt(date(2025, 4, 5), STATIC))

    assert all("id" not in a for a in skeleton["articles"])
    assert [d["borderColor"] for d in skeleton["debates"]] == [
        "var(--purple)",
        "var(--navy)",
        "var(--green)",
        "#c0392b",
    ]


@pytest.mark.parametrize("variant", [LIVE, STATIC])
def test_prompt_injects_category_slots_in_order(variant):
    skeleton = _skeleton(build_prompt(date(2025, 4, 5), variant))

    assert [(a["category"], a["tag"], a["tagColor"]) for a in skeleton["articles"]] == [
        ("california", "California Laws", "purple"),
        ("minors", "Teen & Minors", "green"),
        ("breaches", "Data Breaches", "navy"),
        ("bigtech", "Big Tech", "red"),
        ("california", "California Laws", "purple"),
        ("minors", "Teen & Minors", "green"),
    ]


def test_prompt_targets_teen_audience_and_raw_json():
    prompt = build_prompt(date(2025, 4, 5))

    assert "16-year-old" in prompt
    assert "California teenagers" in prompt
    assert "no code fences" in prompt
    assert "just raw JSON" in prompt


def test_unknown_variant_is_rejected():
    with pytest.raises(ValueError):
        build_prompt(date(2025, 4, 5), "email")
