"""Exceptions raised while fetching news from the upstream search API."""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "DecodeError",
    "NetworkError",
    "NewsError",
    "UpstreamError",
]


class NewsError(RuntimeError):
    """Base class for every failure surfaced by the fetcher."""


class ConfigurationError(NewsError):
    """The fetcher is missing required configuration such as the API key."""


class NetworkError(NewsError):
    """The outbound request could not be completed."""


class DecodeError(NewsError):
    """The upstream body is not JSON of the expected shape."""


class UpstreamError(NewsError):
    """The upstream API reported an application-level failure."""

    def __init__(self, status: str, *, code: str | None = None, message: str | None = None) -> None:
        self.status = status
        self.code = code
        self.message = message

        detail = f"API returned an error: {status}"
        if code:
            detail += f" ({code})"
        if message:
            detail += f": {message}"
        super().__init__(detail)
