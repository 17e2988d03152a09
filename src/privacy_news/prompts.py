"""Prompt construction for the generated news request."""

from __future__ import annotations

import json
from datetime import date
from typing import Any, Dict, List

from .catalog import ARTICLE_SLOTS, DEBATE_SLOTS

LIVE = "live"
STATIC = "static"
VARIANTS = (LIVE, STATIC)

_AUDIENCE = (
    "You are a news summarizer for a youth data privacy education website "
    "aimed at California teenagers."
)

_FIRST_ARTICLE_SUMMARY = (
    "2-3 sentence plain-English summary of a real or highly plausible recent "
    "development in California data privacy law (CCPA, CPRA, CPPA enforcement, "
    "Age-Appropriate Design Code, etc.). Write for a 16-year-old. "
    "Be specific and current to {today}."
)

_FIRST_DEBATE_SUMMARY = (
    "2-3 sentences on the biggest current ongoing debate in data privacy or "
    "online safety that affects young people. Be specific and current to {today}."
)


def format_long_date(value: date) -> str:
    """Render a date the way the site displays it, e.g. ``April 5, 2025``."""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def _article_skeleton(today: str, variant: str) -> List[Dict[str, Any]]:
    entries: List[Dict[str, Any]] = []
    for idx, slot in enumerate(ARTICLE_SLOTS, start=1):
        first = idx == 1
        entry: Dict[str, Any] = {}
        if variant == LIVE:
            entry["id"] = idx
        entry.update(
            {
                "category": slot.token,
                "tag": slot.tag,
                "tagColor": slot.tag_color,
                "headline": "...",
                "summary": _FIRST_ARTICLE_SUMMARY.format(today=today) if first else "...",
                "date": "approximate date or timeframe" if first else "...",
                "sourceLabel": "source name" if first else "...",
                "sourceUrl": "https://...",
            }
        )
        entries.append(entry)
    return entries


def _debate_skeleton(today: str, variant: str) -> List[Dict[str, Any]]:
    entries: List[Dict[str, Any]] = []
    for idx, slot in enumerate(DEBATE_SLOTS):
        entry: Dict[str, Any] = {"num": slot.num}
        if variant == STATIC:
            entry["borderColor"] = slot.border_color
        entry["title"] = "..."
        entry["summary"] = _FIRST_DEBATE_SUMMARY.format(today=today) if idx == 0 else "..."
        entries.append(entry)
    return entries


def build_prompt(today: date, variant: str = LIVE) -> str:
    """
    Build the instruction sent to the generative model.

    ``variant`` selects the live-view skeleton (numbered articles) or the
    static-page skeleton (debates carry border color tokens).
    """
    if variant not in VARIANTS:
        raise ValueError(f"variant must be one of: {', '.join(VARIANTS)}.")
    today_text = format_long_date(today)
    skeleton = {
        "articles": _article_skeleton(today_text, variant),
        "debates": _debate_skeleton(today_text, variant),
    }
    structure = json.dumps(skeleton, indent=2, ensure_ascii=False)
    return (
        f"Today is {today_text}. {_AUDIENCE}\n\n"
        "Generate a JSON object with exactly this structure. No markdown, no code "
        "fences, no explanation, just raw JSON:\n\n"
        f"{structure}\n\n"
        "Make every article and debate feel fresh, current, and specific to what's "
        f"actually happening in data privacy as of {today_text}. Vary the topics. "
        "Use real organizations, laws, and company names where appropriate."
    )
