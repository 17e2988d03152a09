"""Build-time generation of the static news page."""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Optional

from .config import Settings, get_settings
from .models import NewsPayload
from .prompts import STATIC, build_prompt, format_long_date
from .render import render_news_page
from .schema import parse_news_response
from .workflow import GenerateFn, fetch_news

logger = logging.getLogger(__name__)


def default_output_path(settings: Optional[Settings] = None) -> Path:
    """
    Resolve the static page location.

    Defaults to pages/news.html under the current working directory, which is
    the site root when run from a checkout. Override via NEWS_OUTPUT_PATH or
    the CLI --out option.
    """
    active = settings or get_settings()
    if active.output_path:
        return Path(active.output_path).expanduser().resolve()
    return Path.cwd() / "pages" / "news.html"


def write_page(html: str, output_path: Path) -> Path:
    """Replace ``output_path`` with ``html`` in one rename; readers never see a partial file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        dir=output_path.parent, prefix=f".{output_path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(html)
        os.replace(tmp_name, output_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return output_path


def publish_payload(payload: NewsPayload, generated_on: date, output_path: Path) -> Path:
    html = render_news_page(payload, format_long_date(generated_on), year=generated_on.year)
    path = write_page(html, output_path)
    logger.info("Written to %s", path)
    return path


def generate_news_page(
    generate_fn: GenerateFn,
    *,
    generated_on: date,
    output_path: Path,
) -> Path:
    """
    Fetch, parse, render and write the static page, strictly in that order.

    Raises GenerationError or ParseError; on failure nothing is written and
    any previously published page is left as it was.
    """
    logger.info("Fetching news for %s...", format_long_date(generated_on))
    payload = fetch_news(build_prompt(generated_on, STATIC), generate_fn)
    logger.info(
        "Got %d articles and %d debates.", len(payload.articles), len(payload.debates)
    )
    return publish_payload(payload, generated_on, output_path)


def render_saved_response(raw: str, *, generated_on: date, output_path: Path) -> Path:
    """Render a previously captured raw model response without calling the API."""
    payload = parse_news_response(raw)
    return publish_payload(payload, generated_on, output_path)
