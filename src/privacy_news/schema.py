"""Fence stripping, shape validation and parsing of the model's news response."""

from __future__ import annotations

import json
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError
from pydantic import ValidationError as ModelValidationError

from .models import NewsPayload

_LEADING_FENCE = re.compile(r"^\s*```(?:json)?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"```\s*$")


class ParseError(ValueError):
    """Raised when a model response cannot be turned into a NewsPayload."""


def default_schema_path() -> Path:
    """Return the path to the bundled news response schema."""
    return Path(__file__).resolve().parent / "news_schema.json"


@lru_cache(maxsize=1)
def load_schema(path: Optional[Path | str] = None) -> Dict[str, Any]:
    """Load and cache the news response schema as a dictionary."""
    schema_path = Path(path) if path else default_schema_path()
    return json.loads(schema_path.read_text(encoding="utf-8"))


def format_errors(errors: Iterable[ValidationError]) -> str:
    """Turn jsonschema errors into a concise human-readable string."""
    parts = []
    for err in errors:
        location = ".".join(str(piece) for piece in err.absolute_path) or "<root>"
        parts.append(f"{location}: {err.message}")
    return "; ".join(parts)


def strip_code_fences(raw: str) -> str:
    """Remove a leading ```json / ``` marker and a trailing ``` marker."""
    text = _LEADING_FENCE.sub("", raw, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def _drop_nulls(items: list) -> list:
    # Null fields fall back to model defaults instead of failing validation.
    return [
        {key: value for key, value in item.items() if value is not None}
        for item in items
    ]


def parse_news_response(
    raw: str, schema: Optional[Dict[str, Any]] = None
) -> NewsPayload:
    """
    Parse raw model text into articles and debates.

    Missing or null ``articles``/``debates`` become empty lists. Anything else
    that is not the expected shape raises ParseError; nothing is partially
    accepted.
    """
    cleaned = strip_code_fences(raw or "")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Response is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ParseError(
            f"Expected a JSON object at the top level, got {type(data).__name__}."
        )

    normalized = {
        "articles": data.get("articles") or [],
        "debates": data.get("debates") or [],
    }
    validator = Draft202012Validator(schema or load_schema())
    errors = list(validator.iter_errors(normalized))
    if errors:
        raise ParseError(f"Unexpected response shape: {format_errors(errors)}")

    try:
        return NewsPayload(
            articles=_drop_nulls(normalized["articles"]),
            debates=_drop_nulls(normalized["debates"]),
        )
    except ModelValidationError as exc:
        raise ParseError(f"Unexpected field values: {exc}") from exc
