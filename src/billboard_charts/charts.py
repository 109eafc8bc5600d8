"""Public entry points: fetch and parse a chart or the chart catalog.

Both functions are coroutines. For older callers they also accept a
completion callback, invoked as ``callback(error, result)``; when one is
given the coroutine returns None and any error goes to the callback
instead of being raised.

    chart = await get_chart("billboard-200", "2024-01-13")

    await get_chart("hot-100", lambda err, chart: ...)
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from billboard_charts.core.config import FetcherConfig
from billboard_charts.core.exceptions import InvalidInputError
from billboard_charts.core.models import Chart, ChartInfo
from billboard_charts.core.text import is_valid_chart_name, is_valid_date_format
from billboard_charts.ingestion.client import ChartFetcher
from billboard_charts.ingestion.parser import ChartParser

logger = logging.getLogger(__name__)

T = TypeVar("T")

ChartCallback = Callable[[Exception | None, Any], None]

DEFAULT_CHART = "hot-100"


async def get_chart(
    chart_name: str | ChartCallback | None = None,
    date: str | ChartCallback | None = None,
    callback: ChartCallback | None = None,
    *,
    config: FetcherConfig | None = None,
    fetcher: ChartFetcher | None = None,
) -> Chart | None:
    """Fetch and parse one chart.

    Args:
        chart_name: Chart slug such as "hot-100" (the default) or
            "billboard-200". A callable here is taken as the callback.
        date: YYYY-MM-DD of the wanted week; empty means the current week.
            A callable here is taken as the callback.
        callback: Optional ``callback(error, chart)``.
        config: Fetcher settings, used when no fetcher is passed.
        fetcher: An open ChartFetcher to reuse; it is not closed.

    Returns:
        The Chart, or None when a callback was given.

    Raises:
        InvalidInputError: Bad chart name or date. No request is made.
        NetworkError, RequestTimeoutError: Fetch failed.
        NotFoundError, ParsingError: The page held no usable chart.
    """
    if callable(chart_name):
        callback, chart_name, date = chart_name, None, None
    elif callable(date):
        callback, date = date, None

    name = chart_name or DEFAULT_CHART
    week = date or ""

    async def execute() -> Chart:
        _validate_chart_request(name, week)
        async with _fetcher_scope(fetcher, config) as active:
            raw_html = await active.fetch_chart(name, week)
            parser = ChartParser(base_url=active.config.base_url)
        chart = parser.parse_chart(raw_html)
        logger.info("Parsed %s (%s): %d songs", name, chart.week or "current", len(chart.songs))
        return chart

    return await _deliver(execute(), callback)


async def list_charts(
    callback: ChartCallback | None = None,
    *,
    config: FetcherConfig | None = None,
    fetcher: ChartFetcher | None = None,
) -> list[ChartInfo] | None:
    """Fetch and parse the catalog of available charts.

    Returns:
        ChartInfo entries in page order, or None when a callback was given.

    Raises:
        NetworkError, RequestTimeoutError: Fetch failed.
        NotFoundError, ParsingError: The page held no chart links.
    """

    async def execute() -> list[ChartInfo]:
        async with _fetcher_scope(fetcher, config) as active:
            raw_html = await active.fetch_charts_list()
            parser = ChartParser(base_url=active.config.base_url)
        return parser.parse_charts_list(raw_html)

    return await _deliver(execute(), callback)


def _validate_chart_request(chart_name: Any, date: Any) -> None:
    if not is_valid_chart_name(chart_name):
        raise InvalidInputError(
            f'Invalid chart name: "{chart_name}". Chart names should be '
            'lowercase with hyphens (e.g., "hot-100").',
            context={"field": "chart_name", "value": chart_name},
        )
    if date and not is_valid_date_format(date):
        raise InvalidInputError(
            f'Invalid date format: "{date}". Use YYYY-MM-DD format (e.g., "2024-01-15").',
            context={"field": "date", "value": date},
        )


@asynccontextmanager
async def _fetcher_scope(
    fetcher: ChartFetcher | None,
    config: FetcherConfig | None,
) -> AsyncIterator[ChartFetcher]:
    """Yield the caller's fetcher, or a fresh one closed on exit."""
    if fetcher is not None:
        yield fetcher
        return
    async with ChartFetcher(config) as owned:
        yield owned


async def _deliver(pending: Awaitable[T], callback: ChartCallback | None) -> T | None:
    """Return the result, or hand it (or whatever it raised) to the callback."""
    if callback is None:
        return await pending

    try:
        result = await pending
    except Exception as e:
        callback(e, None)
        return None
    callback(None, result)
    return None
