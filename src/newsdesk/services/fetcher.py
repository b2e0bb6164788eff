"""Client for the upstream news search API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List
from urllib.parse import quote, quote_plus

import requests
from pydantic import ValidationError

from newsdesk.config import NewsConfig
from newsdesk.errors import ConfigurationError, DecodeError, NetworkError, UpstreamError
from newsdesk.models import Article, SearchResult

__all__ = ["DEFAULT_HEADERS", "NewsFetcher"]

logger = logging.getLogger(__name__)

REDACTED = "***"

DEFAULT_HEADERS = {
    "User-Agent": "newsdesk/0.1",
    "Accept": "application/json",
}


class NewsFetcher:
    """Run a search against the configured endpoint and decode the response."""

    def __init__(self, config: NewsConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self._session = session or requests.Session()
        self._session.headers.update(DEFAULT_HEADERS)

    def build_params(self, query: str) -> Dict[str, str]:
        """Return the query parameters sent to the endpoint for ``query``."""

        if self.config.api_key is None:
            raise ConfigurationError("NEWS_API_KEY environment variable not set")
        return {"q": query, "apiKey": self.config.api_key}

    def fetch(self, query: str) -> SearchResult:
        """Search for ``query`` and return the decoded envelope.

        Raises a :class:`~newsdesk.errors.NewsError` subclass when the key is
        missing, the request fails, the body cannot be decoded or the API
        reports a non-``ok`` status.
        """

        params = self.build_params(query)
        logger.debug("Searching %s for %r", self.config.endpoint, query)

        try:
            response = self._session.get(
                self.config.endpoint,
                params=params,
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as exc:
            raise NetworkError(f"HTTP request failed: {self._redact(str(exc))}") from exc

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise DecodeError(f"JSON decoding failed: {exc}") from exc

        try:
            result = SearchResult.model_validate(payload)
        except ValidationError as exc:
            raise DecodeError(f"Unexpected response shape: {exc}") from exc

        if not result.ok:
            raise UpstreamError(result.status, code=result.code, message=result.message)

        logger.info(
            "Fetched %d of %d articles for %r", len(result.articles), result.total_results, query
        )
        return result

    def _redact(self, text: str) -> str:
        """Mask the API key in ``text``; requests echoes the full URL in its errors."""

        key = self.config.api_key
        if not key:
            return text
        for form in {key, quote_plus(key), quote(key, safe="")}:
            text = text.replace(form, REDACTED)
        return text

    def fetch_articles(self, query: str) -> List[Article]:
        """Search for ``query`` and return only the decoded articles."""

        return self.fetch(query).articles

    def close(self) -> None:
        self._session.close()
