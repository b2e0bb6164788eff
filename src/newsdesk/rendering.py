"""HTML rendering of search results."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from jinja2 import Environment, PackageLoader, select_autoescape

from newsdesk.models import SearchPage

__all__ = ["DEFAULT_TEMPLATE", "JinjaPageRenderer", "PageRenderer", "format_timestamp"]

DEFAULT_TEMPLATE = "news.html"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class PageRenderer(Protocol):
    """Anything able to turn a :class:`SearchPage` into an HTML document."""

    def render(self, page: SearchPage) -> str: ...


def format_timestamp(value: datetime | None) -> str:
    if value is None:
        return ""
    return value.strftime(TIMESTAMP_FORMAT)


class JinjaPageRenderer:
    """Render pages from the templates bundled with the package."""

    def __init__(
        self,
        environment: Environment | None = None,
        template_name: str = DEFAULT_TEMPLATE,
    ) -> None:
        if environment is None:
            environment = Environment(
                loader=PackageLoader("newsdesk", "templates"),
                autoescape=select_autoescape(),
            )
        environment.filters.setdefault("timestamp", format_timestamp)
        self.environment = environment
        self.template_name = template_name

    def render(self, page: SearchPage) -> str:
        template = self.environment.get_template(self.template_name)
        return template.render(
            query=page.query,
            articles=page.articles,
            total_results=page.result.total_results,
        )
