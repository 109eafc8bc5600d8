"""Configuration loading, validation, and access."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from billboard_charts.core.exceptions import ConfigError

BILLBOARD_BASE_URL = "https://www.billboard.com"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
YOUTUBE_API_KEY_PLACEHOLDER = "your_youtube_api_key_here"


class FetcherConfig(BaseModel):
    """Chart page fetching configuration."""

    model_config = ConfigDict(frozen=True)

    base_url: str = BILLBOARD_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("request_timeout")
    @classmethod
    def timeout_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("request_timeout must be > 0")
        return v

    @field_validator("max_retries")
    @classmethod
    def retries_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("max_retries must be >= 0")
        return v

    @field_validator("retry_delay")
    @classmethod
    def delay_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("retry_delay must be >= 0")
        return v

    @property
    def charts_url(self) -> str:
        """Catalog URL; individual charts live directly below it."""
        return f"{self.base_url}/charts/"


class YouTubeConfig(BaseModel):
    """Video enrichment configuration."""

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    search_url: str = "https://www.googleapis.com/youtube/v3/search"
    limit: int = 20
    batch_size: int = 5
    batch_delay: float = 0.1
    rate_limit: int = 10
    request_timeout: float = 10.0

    @field_validator("api_key", mode="before")
    @classmethod
    def placeholder_means_unset(cls, v: Any) -> str | None:
        if v is None:
            return None
        # unquoted numeric keys arrive as int from YAML
        v = str(v)
        if not v.strip() or v == YOUTUBE_API_KEY_PLACEHOLDER:
            return None
        return v

    @field_validator("batch_size", "rate_limit")
    @classmethod
    def at_least_one(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    @field_validator("limit")
    @classmethod
    def limit_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("limit must be >= 0")
        return v

    @property
    def enabled(self) -> bool:
        return self.api_key is not None


class APIConfig(BaseModel):
    """FastAPI server configuration."""

    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = 3001
    chart_limit: int = 20
    cache_ttl: int = 300
    cache_size: int = 64

    @field_validator("chart_limit", "cache_size")
    @classmethod
    def positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    @field_validator("cache_ttl")
    @classmethod
    def ttl_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("cache_ttl must be >= 0")
        return v


class ChartsConfig(BaseModel):
    """Root configuration for billboard-charts."""

    model_config = ConfigDict(frozen=True)

    fetcher: FetcherConfig = FetcherConfig()
    youtube: YouTubeConfig = YouTubeConfig()
    api: APIConfig = APIConfig()


CONFIG_ENV_VAR = "BILLBOARD_CHARTS_CONFIG"
DEFAULT_CONFIG_FILE = "billboard-charts.yml"


def load_config(
    config_path: str | None = None,
    env_prefix: str = "BILLBOARD_CHARTS_",
) -> ChartsConfig:
    """Build the configuration from defaults, a YAML file and the environment.

    Later sources win: built-in defaults, then the YAML file, then
    environment variables. The file is `config_path` if given, else the
    path in BILLBOARD_CHARTS_CONFIG, else ./billboard-charts.yml if present.

    Environment keys map onto nested fields with a double underscore:
        BILLBOARD_CHARTS_FETCHER__MAX_RETRIES=5  ->  fetcher.max_retries = 5

    Raises:
        ConfigError: Missing file, unreadable YAML, or invalid values.
    """
    path = _find_config_file(config_path)
    values = _read_yaml(path) if path is not None else {}
    values = _overlay_environment(values, env_prefix)

    try:
        return ChartsConfig.model_validate(values)
    except ValidationError as e:
        raise ConfigError(str(e), context={"source": str(path) if path else "defaults"}) from e


def _find_config_file(explicit: str | None) -> Path | None:
    """Locate the YAML file; an explicitly named one must exist."""
    candidates = [
        (explicit, "config_path"),
        (os.environ.get(CONFIG_ENV_VAR) or None, CONFIG_ENV_VAR),
    ]
    for location, origin in candidates:
        if location is None:
            continue
        path = Path(location)
        if not path.is_file():
            raise ConfigError(
                f"Config file from {origin} not found: {location}",
                context={"field": origin, "value": location},
            )
        return path

    fallback = Path(DEFAULT_CONFIG_FILE)
    return fallback if fallback.is_file() else None


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Failed to parse YAML config {path}: {e}",
            context={"field": "config_file", "value": str(path)},
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Cannot read config file {path}: {e}",
            context={"field": "config_file", "value": str(path)},
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"YAML config must be a mapping, got {type(data).__name__}",
            context={"field": "config_file", "value": str(path)},
        )
    return data


def _overlay_environment(values: dict[str, Any], prefix: str) -> dict[str, Any]:
    """Copy of `values` with matching environment variables applied on top.

    Nested dicts along each overridden path are copied, never mutated.
    Values stay strings; the section models parse numeric fields, so a
    string field such as an API key keeps its exact text.
    """
    merged = dict(values)

    for name, raw in os.environ.items():
        if not name.startswith(prefix):
            continue
        path = name[len(prefix) :].lower()
        # BILLBOARD_CHARTS_CONFIG names the file, it is not a field
        if path == "config":
            continue

        *sections, leaf = path.split("__")
        node = merged
        for section in sections:
            child = node.get(section)
            node[section] = dict(child) if isinstance(child, dict) else {}
            node = node[section]
        node[leaf] = raw

    return merged
