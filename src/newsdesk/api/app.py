"""FastAPI application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from newsdesk.api.routes import router
from newsdesk.config import NewsConfig
from newsdesk.rendering import JinjaPageRenderer, PageRenderer
from newsdesk.services.fetcher import NewsFetcher


def create_app(
    config: NewsConfig | None = None,
    *,
    fetcher: NewsFetcher | None = None,
    renderer: PageRenderer | None = None,
) -> FastAPI:
    """Build the application, wiring the fetcher and renderer onto ``app.state``.

    ``config`` defaults to :meth:`NewsConfig.from_env`. A missing API key does
    not prevent startup; every search then fails until one is configured. A
    fetcher built here is closed on shutdown; one passed in belongs to the
    caller.
    """

    owns_fetcher = fetcher is None
    if fetcher is None:
        fetcher = NewsFetcher(config if config is not None else NewsConfig.from_env())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            if owns_fetcher:
                app.state.fetcher.close()

    app = FastAPI(
        title="newsdesk",
        description="News search page backed by NewsAPI",
        lifespan=lifespan,
    )
    app.state.fetcher = fetcher
    app.state.renderer = renderer if renderer is not None else JinjaPageRenderer()
    app.include_router(router)

    return app
