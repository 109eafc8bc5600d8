"""Dependency injection for FastAPI routes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cachetools import TTLCache
from fastapi import Request

from billboard_charts.core.config import ChartsConfig
from billboard_charts.enrichment.youtube import YouTubeClient
from billboard_charts.ingestion.client import ChartFetcher


@dataclass
class AppState:
    """Shared application state, attached to app.state during lifespan.

    `cache` holds finished API payloads keyed by request; it is the only
    cache in the system and its TTL comes from APIConfig.
    """

    config: ChartsConfig
    fetcher: ChartFetcher
    youtube: YouTubeClient
    cache: TTLCache[str, Any]


def create_response_cache(config: ChartsConfig) -> TTLCache[str, Any]:
    return TTLCache(maxsize=config.api.cache_size, ttl=config.api.cache_ttl)


def get_app_state(request: Request) -> AppState:
    """Dependency: retrieve AppState from the request."""
    return request.app.state.app_state
