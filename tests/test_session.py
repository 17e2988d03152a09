from datetime import date, datetime

import pytest

from privacy_news.config import Settings
from privacy_news.models import Article
from privacy_news.schema import ParseError, parse_news_response
from privacy_news.session import NewsSession, build_live_session, filter_articles
from privacy_news.workflow import GenerationError

FIXED_NOW = datetime(2025, 4, 5, 15, 30)


class FakeFetch:
    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _session(*outcomes) -> tuple[NewsSession, FakeFetch]:
    fetch = FakeFetch(*outcomes)
    return NewsSession(fetch, clock=lambda: FIXED_NOW), fetch


def test_filter_all_returns_full_list_in_order(sample_payload):
    articles = sample_payload.articles
    result = filter_articles(articles, "all")
    assert result == articles
    assert result is not articles


def test_filter_category_returns_matching_subset_in_order(sample_payload):
    result = filter_articles(sample_payload.articles, "california")
    assert [a.id for a in result] == [1, 5]


def test_filter_with_no_matches_is_empty():
    assert filter_articles([Article(category="weather")], "bigtech") == []


def test_filter_rejects_unknown_token(sample_payload):
    with pytest.raises(ValueError):
        filter_articles(sample_payload.articles, "weather")


def test_open_view_loads_once(sample_payload):
    session, fetch = _session(sample_payload)

    state = session.open_view()
    session.open_view()

    assert fetch.calls == 1
    assert state.loaded is True
    assert len(state.articles) == 6
    assert len(state.debates) == 4
    assert state.last_updated == FIXED_NOW
    assert state.loading is False
    assert state.error is False


def test_refresh_refetches_unconditionally(sample_payload):
    session, fetch = _session(sample_payload)
    session.open_view()
    assert session.refresh() is True
    assert fetch.calls == 2


def test_refresh_marks_loading_while_in_flight(sample_payload):
    seen = []
    session = NewsSession(lambda: seen.append(session.state.loading) or sample_payload)

    session.refresh()

    assert seen == [True]
    assert session.state.loading is False


@pytest.mark.parametrize(
    "failure", [ParseError("bad json"), GenerationError("network down")]
)
def test_failed_refresh_keeps_previous_content(sample_payload, failure):
    session, _ = _session(sample_payload, failure)
    session.open_view()

    assert session.refresh() is False

    state = session.state
    assert state.error is True
    assert state.loading is False
    assert state.loaded is True
    assert len(state.articles) == 6
    assert state.last_updated == FIXED_NOW


def test_failed_first_load_retries_on_next_visit(sample_payload):
    session, fetch = _session(GenerationError("down"), sample_payload)

    state = session.open_view()
    assert state.loaded is False
    assert state.error is True
    assert state.articles == []

    state = session.open_view()
    assert fetch.calls == 2
    assert state.loaded is True
    assert state.error is False


def test_failure_detail_is_logged(sample_payload, caplog):
    session, _ = _session(ParseError("Response is not valid JSON"))
    with caplog.at_level("ERROR", logger="privacy_news.session"):
        session.refresh()
    assert "Response is not valid JSON" in caplog.text


def test_unexpected_errors_propagate():
    session, _ = _session(KeyError("bug"))
    with pytest.raises(KeyError):
        session.refresh()
    assert session.state.loading is False


def test_select_filter_is_idempotent_and_survives_refresh(sample_payload):
    session, _ = _session(sample_payload)
    session.open_view()

    first = session.select_filter("breaches")
    second = session.select_filter("breaches")
    assert [a.id for a in first] == [a.id for a in second] == [3]

    session.refresh()
    assert session.state.current_filter == "breaches"
    assert [a.id for a in session.state.visible_articles()] == [3]


def test_refresh_replaces_state_wholesale(sample_payload):
    smaller = parse_news_response('{"articles": [{"category": "bigtech"}]}')
    session, _ = _session(sample_payload, smaller)
    session.open_view()
    before = session.state

    session.refresh()

    assert session.state is not before
    assert len(session.state.articles) == 1
    assert session.state.debates == []


def test_snapshot_uses_json_field_names(sample_payload):
    session, _ = _session(sample_payload)
    session.open_view()

    snapshot = session.state.snapshot()

    assert snapshot["loaded"] is True
    assert snapshot["current_filter"] == "all"
    assert snapshot["articles"][0]["tagColor"] == "purple"
    assert snapshot["articles"][0]["sourceUrl"] == "https://example.com/story-1"
    assert snapshot["last_updated"] == FIXED_NOW.isoformat()


def test_build_live_session_uses_live_prompt(monkeypatch, sample_response_text):
    prompts = []

    def fake_make_generator(provider, settings):
        assert provider == "openai"

        def _generate(prompt):
            prompts.append(prompt)
            return f"```json\n{sample_response_text}\n```"

        return _generate

    monkeypatch.setattr("privacy_news.session.make_generator", fake_make_generator)

    session = build_live_session(Settings(_env_file=None), today=lambda: date(2025, 4, 5))
    state = session.open_view()

    assert len(state.articles) == 6
    assert prompts[0].startswith("Today is April 5, 2025.")
    assert '"id": 1' in prompts[0]
