"""Domain models used across the application."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

SUCCESS_STATUS = "ok"


class Article(BaseModel):
    """A single news item returned by the search API."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = ""
    description: str = ""
    content: str = ""
    published_at: Optional[datetime] = Field(default=None, alias="publishedAt")
    source_name: str = Field(default="", alias="sourceName")
    url: str = ""

    @model_validator(mode="before")
    @classmethod
    def _lift_source_name(cls, data: Any) -> Any:
        """Accept NewsAPI's nested ``{"source": {"name": ...}}`` form."""

        if not isinstance(data, dict):
            return data
        if "sourceName" in data or "source_name" in data:
            return data
        source = data.get("source")
        if isinstance(source, dict) and source.get("name") is not None:
            data = dict(data)
            data["sourceName"] = source["name"]
        return data

    @field_validator("title", "description", "content", "source_name", "url", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class SearchResult(BaseModel):
    """Decoded response envelope of one search call."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: str
    total_results: int = Field(default=0, alias="totalResults")
    articles: List[Article] = Field(default_factory=list)
    code: Optional[str] = None
    message: Optional[str] = None

    @field_validator("articles", mode="before")
    @classmethod
    def _null_as_no_articles(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("total_results", mode="before")
    @classmethod
    def _null_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @property
    def ok(self) -> bool:
        return self.status == SUCCESS_STATUS


class SearchPage(BaseModel):
    """Everything the renderer needs to draw the results page."""

    model_config = ConfigDict(frozen=True)

    query: str
    result: SearchResult

    @property
    def articles(self) -> List[Article]:
        return self.result.articles
