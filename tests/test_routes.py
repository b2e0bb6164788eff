"""Tests for the search page served by :mod:`newsdesk.api.routes`."""

from __future__ import annotations

import json
import logging
from types import SimpleNamespace

import pytest
from bs4 import BeautifulSoup
from fastapi.testclient import TestClient

from newsdesk.api.app import create_app
from newsdesk.api.routes import resolve_query
from newsdesk.config import NewsConfig
from newsdesk.errors import ConfigurationError, DecodeError, NetworkError, UpstreamError
from newsdesk.models import Article, SearchResult
from newsdesk.services.fetcher import NewsFetcher


class StubFetcher:
    """Fetcher double recording the queries it receives."""

    def __init__(self, result: SearchResult | None = None, error: Exception | None = None) -> None:
        self.config = NewsConfig(api_key="secret")
        self.result = result or SearchResult(status="ok")
        self.error = error
        self.queries: list[str] = []

    def fetch(self, query: str) -> SearchResult:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.result


def _articles(count: int) -> list[Article]:
    return [
        Article(
            title=f"Story {index}",
            description=f"Description {index}",
            content=f"Content {index}",
            publishedAt=f"2024-05-0{index + 1}T08:30:00Z",
            sourceName="Wire",
            url=f"https://news.example.com/{index}",
        )
        for index in range(count)
    ]


def test_missing_query_uses_default_term() -> None:
    fetcher = StubFetcher()
    client = TestClient(create_app(fetcher=fetcher))

    response = client.get("/")

    assert response.status_code == 200
    assert fetcher.queries == ["finance"]
    soup = BeautifulSoup(response.text, "lxml")
    assert soup.select_one("input[name=q]")["value"] == "finance"


def test_empty_query_uses_default_term() -> None:
    fetcher = StubFetcher()
    client = TestClient(create_app(fetcher=fetcher))

    client.get("/", params={"q": ""})

    assert fetcher.queries == ["finance"]


@pytest.mark.parametrize("query", ["Nvidia", "AT&T + 100%", "émissions"])
def test_query_is_passed_through_unchanged(query: str) -> None:
    fetcher = StubFetcher()
    client = TestClient(create_app(fetcher=fetcher))

    response = client.get("/", params={"q": query})

    assert response.status_code == 200
    assert fetcher.queries == [query]
    soup = BeautifulSoup(response.text, "lxml")
    assert soup.select_one("input[name=q]")["value"] == query


def test_query_reaches_outbound_request() -> None:
    captured: dict[str, object] = {}

    def fake_get(url, params, timeout):
        captured["params"] = params
        return SimpleNamespace(json=lambda: {"status": "ok", "totalResults": 0, "articles": []})

    fetcher = NewsFetcher(NewsConfig(api_key="secret"))
    fetcher._session = SimpleNamespace(get=fake_get)
    client = TestClient(create_app(fetcher=fetcher))

    response = client.get("/", params={"q": "interest rates"})

    assert response.status_code == 200
    assert captured["params"] == {"q": "interest rates", "apiKey": "secret"}


def test_page_renders_one_block_per_article_in_order() -> None:
    articles = _articles(3)
    fetcher = StubFetcher(SearchResult(status="ok", totalResults=3, articles=articles))
    client = TestClient(create_app(fetcher=fetcher))

    response = client.get("/", params={"q": "markets"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    soup = BeautifulSoup(response.text, "lxml")
    blocks = soup.select("#news-container div.article")
    assert len(blocks) == 3
    assert [block.h3.a.get_text() for block in blocks] == ["Story 0", "Story 1", "Story 2"]
    assert blocks[1].select_one("p.meta").get_text() == "2024-05-02 08:30:00 - Wire"


def test_page_without_articles_has_no_blocks() -> None:
    client = TestClient(create_app(fetcher=StubFetcher()))

    response = client.get("/")

    soup = BeautifulSoup(response.text, "lxml")
    assert soup.select("div.article") == []


@pytest.mark.parametrize(
    "error",
    [
        ConfigurationError("NEWS_API_KEY environment variable not set"),
        NetworkError("HTTP request failed: connection refused"),
        DecodeError("JSON decoding failed: Expecting value"),
        UpstreamError("error", code="rateLimited", message="Too many requests"),
    ],
)
def test_fetch_failures_return_plain_text_server_error(error: Exception) -> None:
    client = TestClient(create_app(fetcher=StubFetcher(error=error)))

    response = client.get("/", params={"q": "markets"})

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("text/plain")
    assert str(error) in response.text
    assert response.text.startswith("Error fetching news:")


def test_upstream_error_status_is_reported_as_server_error() -> None:
    def fake_get(url, params, timeout):
        return SimpleNamespace(
            status_code=200,
            json=lambda: json.loads('{"status":"error","message":"maximumResultsReached"}'),
        )

    fetcher = NewsFetcher(NewsConfig(api_key="secret"))
    fetcher._session = SimpleNamespace(get=fake_get)
    client = TestClient(create_app(fetcher=fetcher))

    response = client.get("/")

    assert response.status_code == 500
    assert "maximumResultsReached" in response.text


def test_missing_key_fails_at_request_time_not_startup() -> None:
    app = create_app(NewsConfig())
    client = TestClient(app)

    response = client.get("/")

    assert response.status_code == 500
    assert "NEWS_API_KEY" in response.text


def test_custom_renderer_is_used() -> None:
    class EchoRenderer:
        def render(self, page) -> str:
            return f"<p>{page.query}:{len(page.articles)}</p>"

    fetcher = StubFetcher(SearchResult(status="ok", articles=_articles(2)))
    client = TestClient(create_app(fetcher=fetcher, renderer=EchoRenderer()))

    response = client.get("/", params={"q": "bonds"})

    assert response.status_code == 200
    assert response.text == "<p>bonds:2</p>"


def test_resolve_query_falls_back_only_when_blank() -> None:
    assert resolve_query(None, "finance") == "finance"
    assert resolve_query("", "finance") == "finance"
    assert resolve_query(" ", "finance") == " "


def test_connection_failure_does_not_leak_api_key(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="newsdesk")
    config = NewsConfig(
        api_key="TOPSECRETKEY",
        endpoint="http://127.0.0.1:9/v2/everything",
        request_timeout=5,
    )
    client = TestClient(create_app(config))

    response = client.get("/", params={"q": "finance"})

    assert response.status_code == 500
    assert response.text.startswith("Error fetching news: HTTP request failed:")
    assert "TOPSECRETKEY" not in response.text
    assert "TOPSECRETKEY" not in caplog.text
    assert "Failed to fetch news" in caplog.text


def test_shutdown_closes_session_of_built_fetcher(monkeypatch: pytest.MonkeyPatch) -> None:
    closed: list[NewsFetcher] = []
    monkeypatch.setattr(NewsFetcher, "close", lambda self: closed.append(self))
    app = create_app(NewsConfig(api_key="secret"))

    with TestClient(app):
        assert closed == []

    assert closed == [app.state.fetcher]


def test_shutdown_leaves_injected_fetcher_open(monkeypatch: pytest.MonkeyPatch) -> None:
    closed: list[NewsFetcher] = []
    monkeypatch.setattr(NewsFetcher, "close", lambda self: closed.append(self))
    fetcher = NewsFetcher(NewsConfig(api_key="secret"))

    with TestClient(create_app(fetcher=fetcher)):
        pass

    assert closed == []
