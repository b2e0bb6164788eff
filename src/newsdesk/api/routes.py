"""Routes serving the news search page."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from jinja2 import TemplateError

from newsdesk.errors import NewsError
from newsdesk.models import SearchPage
from newsdesk.rendering import PageRenderer
from newsdesk.services.fetcher import NewsFetcher

logger = logging.getLogger(__name__)

router = APIRouter()


def get_fetcher(request: Request) -> NewsFetcher:
    return request.app.state.fetcher


def get_renderer(request: Request) -> PageRenderer:
    return request.app.state.renderer


def resolve_query(raw: str | None, default: str) -> str:
    """Return the search term to use, falling back to ``default`` when blank."""

    if not raw:
        return default
    return raw


@router.get("/", response_class=HTMLResponse)
async def search_news(
    q: str | None = None,
    fetcher: NewsFetcher = Depends(get_fetcher),
    renderer: PageRenderer = Depends(get_renderer),
) -> Response:
    """Search the news API and render the results page."""

    query = resolve_query(q, fetcher.config.default_query)

    try:
        result = await run_in_threadpool(fetcher.fetch, query)
    except NewsError as exc:
        logger.warning("Failed to fetch news for %r: %s", query, exc)
        return PlainTextResponse(f"Error fetching news: {exc}", status_code=500)

    try:
        body = renderer.render(SearchPage(query=query, result=result))
    except TemplateError as exc:
        logger.exception("Failed to render results page")
        return PlainTextResponse(f"Error rendering page: {exc}", status_code=500)

    return HTMLResponse(body)
