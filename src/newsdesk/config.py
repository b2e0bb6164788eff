"""Configuration models and helpers for the news search service."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, MutableMapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

__all__ = [
    "DEFAULT_ENDPOINT",
    "DEFAULT_ENV_PATH",
    "DEFAULT_QUERY",
    "LISTEN_HOST",
    "LISTEN_PORT",
    "NewsConfig",
    "load_env_file",
]

DEFAULT_ENDPOINT = "https://newsapi.org/v2/everything"
DEFAULT_ENV_PATH = Path(".env")
DEFAULT_QUERY = "finance"

LISTEN_HOST = "0.0.0.0"
LISTEN_PORT = 8080


def load_env_file(
    path: Path | str | None = None,
    *,
    required: bool = False,
    environ: MutableMapping[str, str] | None = None,
) -> bool:
    """Populate ``environ`` with ``KEY=VALUE`` pairs from a ``.env`` file.

    Variables that are already set are left untouched. Returns ``True`` when a
    file was read. A missing file raises :class:`FileNotFoundError` only when
    ``required`` is set.
    """

    env_path = Path(path) if path else DEFAULT_ENV_PATH
    target = os.environ if environ is None else environ

    if not env_path.exists():
        if required:
            raise FileNotFoundError(f"Environment file not found: {env_path}")
        return False

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()

        key, value = line.split("=", 1)
        key = key.strip()
        if not key or key in target:
            continue

        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
            value = value[1:-1]
        target[key] = value

    return True


class NewsConfig(BaseModel):
    """Settings handed to :class:`~newsdesk.services.fetcher.NewsFetcher`."""

    model_config = ConfigDict(frozen=True)

    api_key: str | None = Field(default=None, description="NewsAPI credential")
    endpoint: str = Field(default=DEFAULT_ENDPOINT, description="Search endpoint URL")
    request_timeout: float | None = Field(
        default=None,
        description="Seconds to wait for the upstream API. ``None`` waits indefinitely.",
    )
    default_query: str = Field(
        default=DEFAULT_QUERY,
        description="Search term used when the request carries no query",
    )

    @field_validator("api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("request_timeout", mode="before")
    @classmethod
    def _blank_timeout_is_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "NewsConfig":
        """Build a configuration from process environment variables."""

        source = os.environ if environ is None else environ
        data: dict[str, object] = {"api_key": source.get("NEWS_API_KEY")}
        if source.get("NEWS_API_ENDPOINT"):
            data["endpoint"] = source["NEWS_API_ENDPOINT"]
        if "NEWS_API_TIMEOUT" in source:
            data["request_timeout"] = source["NEWS_API_TIMEOUT"]

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid news API configuration\n{exc}") from exc

    @property
    def has_credentials(self) -> bool:
        return self.api_key is not None
