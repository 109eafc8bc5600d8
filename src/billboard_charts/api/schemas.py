"""API-specific request/response schemas (Pydantic v2).

Chart payloads reuse the core models, which serialize with camelCase keys.
"""

from __future__ import annotations

from pydantic import BaseModel

from billboard_charts.core.models import ChartInfo, EnrichedChart


# -- Error --


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    success: bool = False
    error: str
    code: str


# -- Charts --


class ChartResponse(BaseModel):
    """Response for GET /api/chart and GET /api/chart/{chart_name}."""

    success: bool = True
    data: EnrichedChart


class ChartListResponse(BaseModel):
    """Response for GET /api/charts."""

    success: bool = True
    data: list[ChartInfo]


# -- Health --


class HealthResponse(BaseModel):
    """Response for GET /api/health."""

    status: str = "ok"
    version: str
    video_enrichment: bool
    cached_responses: int
