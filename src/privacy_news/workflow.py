"""Generation request and the shared prompt -> generate -> parse pipeline.

Both the live view and the build-time generator call `fetch_news`; they differ
only in which provider (and therefore which client) produces the raw text.
Defaults call a hosted API and need an API key, but an injected `GenerateFn`
allows offline usage for tests.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from google import genai
from openai import OpenAI

from .config import Settings, get_settings
from .models import NewsPayload
from .schema import parse_news_response

logger = logging.getLogger(__name__)

GenerateFn = Callable[[str], str]

OPENAI = "openai"
GEMINI = "gemini"
PROVIDERS = (OPENAI, GEMINI)


class GenerationError(RuntimeError):
    """Any failure to obtain raw text from the generative API."""


# --- Clients --------------------------------------------------------------

def build_client(api_key: Optional[str] = None) -> OpenAI:
    """Create an OpenAI client; separated for easier testing."""
    return OpenAI(api_key=api_key)


def build_gemini_client(api_key: Optional[str] = None) -> genai.Client:
    """Create a Gemini client; separated for easier testing."""
    return genai.Client(api_key=api_key)


def _require_api_key(settings: Settings, provider: str) -> str:
    if provider == OPENAI:
        key, env_name = settings.openai_api_key, "OPENAI_API_KEY"
    else:
        key, env_name = settings.gemini_api_key, "GEMINI_API_KEY"
    if not key:
        raise GenerationError(
            f"{env_name} is required. Set it in the environment or .env file."
        )
    return key


def _response_text_or_raise(response: object, *, step: str) -> str:
    """Extract response text or raise a clear error when output is missing."""
    text = getattr(response, "output_text", None)
    if isinstance(text, str) and text.strip():
        return text

    status = getattr(response, "status", None)
    if status == "incomplete":
        details = getattr(response, "incomplete_details", None)
        reason = getattr(details, "reason", None) if details else None
        hint = " Increase MAX_TOKENS." if reason == "max_output_tokens" else ""
        raise GenerationError(f"{step} response incomplete (reason={reason}).{hint}")

    err = getattr(response, "error", None)
    if err:
        raise GenerationError(f"{step} response error: {err}")

    raise GenerationError(f"{step} response missing output text.")


# --- Providers ------------------------------------------------------------

def generate_with_openai(
    prompt: str, client: OpenAI, *, model: str, max_tokens: int
) -> str:
    response = client.responses.create(
        model=model,
        input=[{"role": "user", "content": prompt}],
        max_output_tokens=max_tokens,
    )
    return _response_text_or_raise(response, step="OpenAI")


def generate_with_gemini(
    prompt: str, client: genai.Client, *, model: str, max_tokens: int
) -> str:
    response = client.models.generate_content(
        model=model,
        contents=prompt,
        config={"max_output_tokens": max_tokens},
    )
    text = response.text if response.text else ""
    if not text.strip():
        raise GenerationError("Gemini response missing output text.")
    return text


def make_generator(provider: str, settings: Optional[Settings] = None) -> GenerateFn:
    """
    Return a callable that sends one prompt to ``provider`` and returns raw text.

    The client is built on first call so a missing key surfaces as a
    GenerationError at request time rather than at startup.
    """
    if provider not in PROVIDERS:
        raise ValueError(f"provider must be one of: {', '.join(PROVIDERS)}.")
    active = settings or get_settings()

    def _generate(prompt: str) -> str:
        api_key = _require_api_key(active, provider)
        if provider == OPENAI:
            return generate_with_openai(
                prompt,
                build_client(api_key),
                model=active.openai_model,
                max_tokens=active.max_tokens,
            )
        return generate_with_gemini(
            prompt,
            build_gemini_client(api_key),
            model=active.gemini_model,
            max_tokens=active.max_tokens,
        )

    return _generate


# --- Pipeline -------------------------------------------------------------

def request_generation(prompt: str, generate_fn: GenerateFn) -> str:
    """
    Send one prompt and return the raw text.

    Exactly one call, no retry. Transport errors, API errors and empty output
    are all reported as GenerationError.
    """
    if not prompt or not prompt.strip():
        raise ValueError("prompt must be non-empty text.")
    try:
        return generate_fn(prompt)
    except GenerationError:
        raise
    except Exception as exc:
        raise GenerationError(f"Generation request failed: {exc}") from exc


def fetch_news(prompt: str, generate_fn: GenerateFn) -> NewsPayload:
    """Run prompt -> generate -> parse; raises GenerationError or ParseError."""
    raw = request_generation(prompt, generate_fn)
    payload = parse_news_response(raw)
    logger.debug(
        "Parsed %d articles and %d debates.", len(payload.articles), len(payload.debates)
    )
    return payload
