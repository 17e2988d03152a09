"""FastAPI service for the live news view."""

from __future__ import annotations

import os
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, status
from fastapi.responses import HTMLResponse, JSONResponse

from .catalog import validate_filter
from .render import render_article_grid, render_debates, render_news_view
from .session import NewsSession, build_live_session

app = FastAPI(title="Privacy News")

_session: Optional[NewsSession] = None


def _current_session() -> NewsSession:
    """Return the view's session, creating it on first use."""
    global _session
    if _session is None:
        _session = build_live_session()
    return _session


def _checked_filter(token: str) -> str:
    try:
        return validate_filter(token)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/news", response_class=HTMLResponse)
def news_view(filter: Optional[str] = None) -> HTMLResponse:
    """Host page; the first visit triggers a fetch, later visits reuse the data."""
    session = _current_session()
    if filter is not None:
        session.select_filter(_checked_filter(filter))
    state = session.open_view()
    return HTMLResponse(render_news_view(state))


@app.post("/news/refresh", response_class=HTMLResponse)
def refresh_view() -> HTMLResponse:
    session = _current_session()
    session.refresh()
    return HTMLResponse(render_news_view(session.state))


@app.get("/news/articles", response_class=HTMLResponse)
def article_fragment(filter: str = "all") -> HTMLResponse:
    """Re-render the article grid for ``filter``; selecting the same filter twice is a no-op."""
    session = _current_session()
    session.select_filter(_checked_filter(filter))
    state = session.state
    if not state.loaded:
        return HTMLResponse("")
    return HTMLResponse(str(render_article_grid(state.articles, state.current_filter)))


@app.get("/news/debates", response_class=HTMLResponse)
def debate_fragment() -> HTMLResponse:
    return HTMLResponse(str(render_debates(_current_session().state.debates)))


@app.get("/api/news")
def news_state() -> Dict[str, Any]:
    return _current_session().state.snapshot()


@app.post("/api/news/refresh")
def refresh_state() -> JSONResponse:
    """
    Refetch and return the view state.

    Failures keep the previous data; the cause is logged, not returned.
    """
    session = _current_session()
    if not session.refresh():
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="News fetch failed.",
        )
    return JSONResponse(status_code=status.HTTP_200_OK, content=session.state.snapshot())


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "privacy_news.server:app",
        host=os.getenv("NEWS_HOST", "0.0.0.0"),
        port=int(os.getenv("NEWS_PORT", "8000")),
        reload=os.getenv("NEWS_RELOAD", "false").lower() == "true",
    )
