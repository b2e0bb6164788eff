"""newsdesk package exposing configuration, API, and service helpers."""

from __future__ import annotations

from .config import NewsConfig, load_env_file  # noqa: F401
from .errors import (  # noqa: F401
    ConfigurationError,
    DecodeError,
    NetworkError,
    NewsError,
    UpstreamError,
)
from .models import Article, SearchResult  # noqa: F401

__all__ = [
    "Article",
    "ConfigurationError",
    "DecodeError",
    "NetworkError",
    "NewsConfig",
    "NewsError",
    "SearchResult",
    "UpstreamError",
    "load_env_file",
]
