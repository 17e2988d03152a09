"""Fixed categories, prompt slots and style lookup tables shared by both views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Category:
    token: str
    tag: str
    tag_color: str


CATEGORIES: Tuple[Category, ...] = (
    Category("california", "California Laws", "purple"),
    Category("minors", "Teen & Minors", "green"),
    Category("breaches", "Data Breaches", "navy"),
    Category("bigtech", "Big Tech", "red"),
)

CATEGORY_BY_TOKEN = {category.token: category for category in CATEGORIES}

ALL_FILTER = "all"
FILTER_TOKENS: Tuple[str, ...] = (ALL_FILTER,) + tuple(c.token for c in CATEGORIES)
FILTER_LABELS = {ALL_FILTER: "All Topics", **{c.token: c.tag for c in CATEGORIES}}

# Article slots requested from the model, in order.
ARTICLE_SLOTS: Tuple[Category, ...] = (
    CATEGORY_BY_TOKEN["california"],
    CATEGORY_BY_TOKEN["minors"],
    CATEGORY_BY_TOKEN["breaches"],
    CATEGORY_BY_TOKEN["bigtech"],
    CATEGORY_BY_TOKEN["california"],
    CATEGORY_BY_TOKEN["minors"],
)


@dataclass(frozen=True)
class DebateSlot:
    num: str
    border_color: str


DEBATE_SLOTS: Tuple[DebateSlot, ...] = (
    DebateSlot("01", "var(--purple)"),
    DebateSlot("02", "var(--navy)"),
    DebateSlot("03", "var(--green)"),
    DebateSlot("04", "#c0392b"),
)

TAG_COLOR_CLASSES = {
    "purple": "purple",
    "navy": "navy",
    "green": "green",
    "red": "red",
}
DEFAULT_TAG_COLOR_CLASS = "purple"

# Position 0 keeps the stylesheet's default accent.
DEBATE_ACCENTS = {
    1: "var(--navy)",
    2: "var(--green)",
    3: "#c0392b",
}

EMPTY_FILTER_MESSAGE = "No articles for this filter yet. Try refreshing."


def tag_color_class(tag_color: Optional[str]) -> str:
    """Map a model-provided tagColor to a CSS class; unknown values fall back to purple."""
    return TAG_COLOR_CLASSES.get(tag_color or "", DEFAULT_TAG_COLOR_CLASS)


def debate_accent(index: int) -> Optional[str]:
    """Return the border accent for the debate at zero-based ``index``, if any."""
    return DEBATE_ACCENTS.get(index)


def validate_filter(token: str) -> str:
    if token not in FILTER_TOKENS:
        raise ValueError(
            f"Unknown filter {token!r}; expected one of: {', '.join(FILTER_TOKENS)}."
        )
    return token
