"""FastAPI route definitions for the billboard-charts API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

import billboard_charts
from billboard_charts.api.deps import AppState, get_app_state
from billboard_charts.api.schemas import ChartListResponse, ChartResponse, HealthResponse
from billboard_charts.charts import DEFAULT_CHART, get_chart, list_charts
from billboard_charts.core.models import ChartInfo, EnrichedChart
from billboard_charts.enrichment.youtube import enrich_songs_with_videos

logger = logging.getLogger(__name__)

router = APIRouter()


# -- Health --


@router.get("/health", response_model=HealthResponse)
async def health_check(state: AppState = Depends(get_app_state)):
    """Service status and enrichment availability."""
    return HealthResponse(
        status="ok",
        version=billboard_charts.__version__,
        video_enrichment=state.youtube.enabled,
        cached_responses=len(state.cache),
    )


# -- Charts --


@router.get("/chart", response_model=ChartResponse)
async def get_default_chart(state: AppState = Depends(get_app_state)):
    """Current Hot 100, top songs enriched with videos."""
    return ChartResponse(data=await _load_enriched_chart(state, DEFAULT_CHART, ""))


@router.get("/chart/{chart_name}", response_model=ChartResponse)
async def get_named_chart(
    chart_name: str,
    date: str | None = Query(None, description="Chart week, YYYY-MM-DD"),
    state: AppState = Depends(get_app_state),
):
    """Any chart by slug, optionally for a past week."""
    return ChartResponse(data=await _load_enriched_chart(state, chart_name, date or ""))


@router.get("/charts", response_model=ChartListResponse)
async def get_chart_catalog(state: AppState = Depends(get_app_state)):
    """All charts listed on the catalog page."""
    key = "charts"
    charts: list[ChartInfo] | None = state.cache.get(key)
    if charts is None:
        charts = await list_charts(fetcher=state.fetcher)
        state.cache[key] = charts
    return ChartListResponse(data=charts)


# -- Helpers --


async def _load_enriched_chart(state: AppState, chart_name: str, date: str) -> EnrichedChart:
    """Fetch, truncate and enrich a chart, memoized in the response cache.

    Chart errors propagate to the app's exception handler.
    """
    key = f"chart:{chart_name}:{date}"
    cached: EnrichedChart | None = state.cache.get(key)
    if cached is not None:
        logger.debug("Cache hit for %s", key)
        return cached

    chart = await get_chart(chart_name, date, fetcher=state.fetcher)
    limit = state.config.api.chart_limit
    songs = await enrich_songs_with_videos(chart.songs[:limit], state.youtube, limit)

    enriched = EnrichedChart(
        week=chart.week,
        songs=songs,
        previous_week=chart.previous_week,
        next_week=chart.next_week,
    )
    state.cache[key] = enriched
    return enriched
