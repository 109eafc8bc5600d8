"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from billboard_charts.api.deps import AppState, create_response_cache
from billboard_charts.api.routes import router
from billboard_charts.api.schemas import ErrorResponse
from billboard_charts.core.config import ChartsConfig, load_config
from billboard_charts.core.exceptions import ChartError, ErrorKind
from billboard_charts.enrichment.youtube import YouTubeClient
from billboard_charts.ingestion.client import ChartFetcher

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.NETWORK: 502,
    ErrorKind.TIMEOUT: 504,
    ErrorKind.PARSE: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    config = app.state._pending_config or load_config()

    async with ChartFetcher(config.fetcher) as fetcher, YouTubeClient(config.youtube) as youtube:
        if not youtube.enabled:
            logger.warning(
                "YouTube API key is not configured - video search will be disabled"
            )
        app.state.app_state = AppState(
            config=config,
            fetcher=fetcher,
            youtube=youtube,
            cache=create_response_cache(config),
        )
        yield


def create_app(config: ChartsConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    import billboard_charts

    app = FastAPI(
        title="Billboard Charts API",
        description="Billboard chart listings with music video links",
        version=billboard_charts.__version__,
        lifespan=lifespan,
    )

    # Stash config so lifespan can retrieve it
    app.state._pending_config = config

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api")

    # Exception handlers
    @app.exception_handler(ChartError)
    async def chart_exception_handler(request: Request, exc: ChartError):
        status = STATUS_BY_KIND.get(exc.kind, 500)
        logger.error("Error serving %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status,
            content=ErrorResponse(error=str(exc), code=exc.code).model_dump(),
        )

    return app
