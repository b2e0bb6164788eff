"""Service layer entry points for newsdesk."""

from __future__ import annotations

from .fetcher import NewsFetcher  # noqa: F401

__all__ = ["NewsFetcher"]
