"""Command-line entry points for the privacy news pipeline."""

import logging
import os
from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich import print as rprint

from .config import get_settings
from .prompts import VARIANTS, build_prompt
from .publish import default_output_path, generate_news_page, render_saved_response
from .schema import ParseError
from .workflow import PROVIDERS, GenerationError, make_generator

app = typer.Typer(help="Generate the privacy news page or serve the live news view.")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _parse_date(value: Optional[str]) -> date:
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter("date must be YYYY-MM-DD.") from exc


@app.callback()
def main_callback() -> None:
    _configure_logging(get_settings().log_level)


@app.command("generate")
def generate_command(
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Where to write the page. Defaults to NEWS_OUTPUT_PATH or pages/news.html.",
    ),
    provider: Optional[str] = typer.Option(
        None,
        "--provider",
        "-p",
        help="Generation provider: 'openai' or 'gemini'. Defaults to BUILD_PROVIDER.",
        case_sensitive=False,
    ),
    on: Optional[str] = typer.Option(
        None, "--date", help="Generation date (YYYY-MM-DD). Defaults to today."
    ),
):
    """
    Build-time run: fetch once, render the static page and write it.

    Any failure exits non-zero and leaves the existing page untouched.
    """
    settings = get_settings()
    provider_normalized = (provider or settings.build_provider).lower()
    if provider_normalized not in PROVIDERS:
        raise typer.BadParameter(f"provider must be one of: {', '.join(PROVIDERS)}.")
    generated_on = _parse_date(on)
    output_path = out or default_output_path(settings)

    try:
        path = generate_news_page(
            make_generator(provider_normalized, settings),
            generated_on=generated_on,
            output_path=output_path,
        )
    except (GenerationError, ParseError) as exc:
        rprint(f"[red]News generation failed: {exc}[/red]")
        raise typer.Exit(code=1)

    rprint(f"[green]Wrote {path}[/green]")


@app.command("render")
def render_command(
    raw_file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="File holding a captured raw model response.",
    ),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Where to write the page."),
    on: Optional[str] = typer.Option(
        None, "--date", help="Date shown on the page (YYYY-MM-DD). Defaults to today."
    ),
):
    """Render a saved response into the static page without calling the API."""
    raw = raw_file.read_text(encoding="utf-8")
    output_path = out or default_output_path()
    try:
        path = render_saved_response(raw, generated_on=_parse_date(on), output_path=output_path)
    except ParseError as exc:
        rprint(f"[red]Could not parse {raw_file}: {exc}[/red]")
        raise typer.Exit(code=1)
    rprint(f"[green]Wrote {path}[/green]")


@app.command("prompt")
def prompt_command(
    variant: str = typer.Option(
        "static", "--variant", "-v", help="Prompt variant: 'live' or 'static'.", case_sensitive=False
    ),
    on: Optional[str] = typer.Option(None, "--date", help="Date for the prompt (YYYY-MM-DD)."),
):
    """Print the prompt that would be sent, without calling the API."""
    variant_normalized = variant.lower()
    if variant_normalized not in VARIANTS:
        raise typer.BadParameter(f"variant must be one of: {', '.join(VARIANTS)}.")
    typer.echo(build_prompt(_parse_date(on), variant_normalized))


@app.command("serve")
def serve_command(
    host: str = typer.Option(os.getenv("NEWS_HOST", "127.0.0.1"), "--host"),
    port: int = typer.Option(int(os.getenv("NEWS_PORT", "8000")), "--port"),
):
    """Run the live news view."""
    import uvicorn

    uvicorn.run("privacy_news.server:app", host=host, port=port)


def main():
    app()


if __name__ == "__main__":
    main()
