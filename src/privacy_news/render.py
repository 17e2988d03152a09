"""HTML rendering for article cards, debate cards and both page variants.

Every model-sourced field is inserted through Jinja2 autoescaping; the
generated text is never trusted as markup.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from .catalog import (
    EMPTY_FILTER_MESSAGE,
    FILTER_LABELS,
    FILTER_TOKENS,
    debate_accent,
    tag_color_class,
)
from .models import Article, Debate, NewsPayload
from .session import NewsViewState, filter_articles

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

REFRESH_LABEL = "↻ Refresh"
LOADING_LABEL = "↻ Loading…"


def is_outbound_url(value: Optional[str]) -> bool:
    """Only http(s) URLs become links; anything else renders as no link."""
    if not value:
        return False
    return value.strip().lower().startswith(("http://", "https://"))


def _build_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["tag_class"] = tag_color_class
    env.filters["debate_accent"] = debate_accent
    env.filters["is_outbound_url"] = is_outbound_url
    return env


_ENV = _build_environment()


def _filters() -> List[tuple[str, str]]:
    return [(token, FILTER_LABELS[token]) for token in FILTER_TOKENS]


def _cards():
    return _ENV.get_template("cards.html").module


def render_article_card(article: Article) -> Markup:
    return _cards().article_card(article)


def render_article_grid(articles: Sequence[Article], current_filter: str = "all") -> Markup:
    """Render the filtered article list, or the placeholder when nothing matches."""
    visible = filter_articles(list(articles), current_filter)
    return _cards().article_grid(visible, EMPTY_FILTER_MESSAGE)


def render_debates(debates: Sequence[Debate]) -> Markup:
    """Render debate cards with positional accents; empty input renders nothing."""
    return _cards().debate_list(list(debates))


def format_updated_time(value: datetime) -> str:
    return value.strftime("%I:%M %p")


def render_news_view(state: NewsViewState, *, year: Optional[int] = None) -> str:
    """Render the live host document for the current view state."""
    template = _ENV.get_template("news_view.html")
    return template.render(
        state=state,
        articles=state.visible_articles(),
        filters=_filters(),
        empty_message=EMPTY_FILTER_MESSAGE,
        refresh_label=LOADING_LABEL if state.loading else REFRESH_LABEL,
        updated_at=format_updated_time(state.last_updated) if state.last_updated else None,
        year=year or datetime.now().year,
    )


def render_news_page(
    payload: NewsPayload, generated_on: str, *, year: Optional[int] = None
) -> str:
    """Render the complete static news document."""
    template = _ENV.get_template("news_page.html")
    return template.render(
        articles=payload.articles,
        debates=payload.debates,
        generated_on=generated_on,
        filters=_filters(),
        empty_message=EMPTY_FILTER_MESSAGE,
        year=year or datetime.now().year,
    )
