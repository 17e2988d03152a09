"""View state and fetch lifecycle for the live news view."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from .catalog import ALL_FILTER, validate_filter
from .config import Settings, get_settings
from .models import Article, Debate, NewsPayload
from .prompts import LIVE, build_prompt
from .schema import ParseError
from .workflow import GenerationError, fetch_news, make_generator

logger = logging.getLogger(__name__)

FetchFn = Callable[[], NewsPayload]


def filter_articles(articles: List[Article], token: str) -> List[Article]:
    """Return the articles matching ``token`` in their original order."""
    validate_filter(token)
    if token == ALL_FILTER:
        return list(articles)
    return [article for article in articles if article.category == token]


@dataclass
class NewsViewState:
    """Everything the live view renders; owned by a single NewsSession."""

    articles: List[Article] = field(default_factory=list)
    debates: List[Debate] = field(default_factory=list)
    current_filter: str = ALL_FILTER
    loaded: bool = False
    loading: bool = False
    error: bool = False
    last_updated: Optional[datetime] = None

    def visible_articles(self) -> List[Article]:
        return filter_articles(self.articles, self.current_filter)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "articles": [a.model_dump(by_alias=True, exclude_none=True) for a in self.articles],
            "debates": [d.model_dump(by_alias=True, exclude_none=True) for d in self.debates],
            "current_filter": self.current_filter,
            "loaded": self.loaded,
            "loading": self.loading,
            "error": self.error,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
        }


class NewsSession:
    """
    Drives fetches for one live view.

    A successful fetch replaces the state wholesale; a failed one only flags
    the error and keeps whatever was loaded before. Concurrent refreshes are
    not serialized, so the last one to finish wins.
    """

    def __init__(
        self,
        fetch: FetchFn,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._fetch = fetch
        self._clock = clock
        self.state = NewsViewState()

    def open_view(self) -> NewsViewState:
        """Fetch on the first visit; later visits reuse the loaded data."""
        if not self.state.loaded:
            self.refresh()
        return self.state

    def refresh(self) -> bool:
        """Fetch unconditionally. Returns False when the fetch failed."""
        current = self.state
        current.loading = True
        current.error = False
        try:
            payload = self._fetch()
        except (GenerationError, ParseError) as exc:
            logger.error("News fetch error: %s", exc)
            current.error = True
            return False
        finally:
            current.loading = False

        self.state = replace(
            current,
            articles=list(payload.articles),
            debates=list(payload.debates),
            loaded=True,
            loading=False,
            error=False,
            last_updated=self._clock(),
        )
        return True

    def select_filter(self, token: str) -> List[Article]:
        """Set the active filter and return the articles it shows."""
        self.state.current_filter = validate_filter(token)
        return self.state.visible_articles()


def build_live_session(
    settings: Optional[Settings] = None,
    *,
    today: Callable[[], date] = date.today,
) -> NewsSession:
    """Create a session that fetches with the configured live provider."""
    active = settings or get_settings()
    generate_fn = make_generator(active.live_provider, active)

    def _fetch() -> NewsPayload:
        return fetch_news(build_prompt(today(), LIVE), generate_fn)

    return NewsSession(_fetch)
