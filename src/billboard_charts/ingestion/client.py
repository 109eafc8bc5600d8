"""Async HTTP client for billboard.com chart pages, with retry and backoff."""

from __future__ import annotations

import asyncio
import logging

import httpx

from billboard_charts.core.config import FetcherConfig
from billboard_charts.core.exceptions import ChartError, NetworkError, RequestTimeoutError

logger = logging.getLogger(__name__)

_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
_ACCEPT_LANGUAGE = "en-US,en;q=0.5"


def is_retryable_error(exc: BaseException) -> bool:
    """Whether a failed request is worth repeating.

    Retryable: connection reset or refused, DNS failure, protocol errors,
    any timeout, HTTP 5xx, and HTTP 429. Everything else is terminal.
    """
    if isinstance(exc, (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError)):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status >= 500 or status == 429
    return False


class ChartFetcher:
    """Fetches raw chart HTML from billboard.com.

    Presents itself as a desktop browser; the site turns away obvious bots.
    Each call makes one logical fetch, retried sequentially with linear
    backoff. No caching.

    Use via `async with ChartFetcher(config) as fetcher:`.
    """

    def __init__(self, config: FetcherConfig | None = None) -> None:
        self._config = config or FetcherConfig()
        self._client = httpx.AsyncClient(
            headers={
                "User-Agent": self._config.user_agent,
                "Accept": _ACCEPT,
                "Accept-Language": _ACCEPT_LANGUAGE,
            },
            timeout=httpx.Timeout(self._config.request_timeout),
            follow_redirects=True,
        )

    @property
    def config(self) -> FetcherConfig:
        return self._config

    async def __aenter__(self) -> ChartFetcher:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client. Called automatically by __aexit__."""
        await self._client.aclose()

    # --- Chart Pages ---

    def chart_url(self, chart_name: str, date: str = "") -> str:
        """URL of a chart, optionally pinned to the week containing `date`."""
        url = f"{self._config.charts_url}{chart_name}"
        return f"{url}/{date}" if date else url

    async def fetch_chart(self, chart_name: str, date: str = "") -> str:
        """Fetch the HTML of one chart page.

        Args:
            chart_name: Chart slug, e.g. "hot-100". Not validated here.
            date: Optional YYYY-MM-DD; empty means the current week.

        Raises:
            NetworkError: Non-retryable HTTP status or retries exhausted.
            RequestTimeoutError: The final attempt timed out.
        """
        return await self.fetch_page(self.chart_url(chart_name, date))

    async def fetch_charts_list(self) -> str:
        """Fetch the HTML of the chart catalog page."""
        return await self.fetch_page(self._config.charts_url)

    # --- Retry ---

    async def fetch_page(self, url: str) -> str:
        """GET a page and return its body, retrying transient failures.

        Retry policy:
            - Up to `max_retries` retries after the first attempt.
            - Retry k (1-based) waits `retry_delay * k` seconds (linear).
            - Only errors accepted by is_retryable_error() are retried.

        Returns:
            Response body as text.

        Raises:
            RequestTimeoutError: If the last failure was a timeout.
            NetworkError: For every other failure, including HTTP 404 and a
                malformed URL.
        """
        max_retries = self._config.max_retries

        for attempt in range(max_retries + 1):
            try:
                response = await self._client.get(url)
                response.raise_for_status()
                return response.text
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                if attempt < max_retries and is_retryable_error(e):
                    delay = self._config.retry_delay * (attempt + 1)
                    logger.warning(
                        "Retryable error on %s (%s), retrying in %.1fs (attempt %d/%d)",
                        url, _describe(e), delay, attempt + 1, max_retries,
                    )
                    await asyncio.sleep(delay)
                    continue
                raise self._classify(url, e, attempts=attempt + 1) from e

        # Should not reach here, but just in case
        raise NetworkError(
            f"Request failed after all retries: {url}",
            context={"url": url, "attempts": max_retries + 1},
        )

    def _classify(
        self, url: str, exc: httpx.HTTPError | httpx.InvalidURL, attempts: int
    ) -> ChartError:
        """Turn the final httpx failure into a chart error."""
        context: dict[str, object] = {"url": url, "attempts": attempts}

        if isinstance(exc, httpx.TimeoutException):
            timeout = self._config.request_timeout
            context["timeout"] = timeout
            return RequestTimeoutError(
                f"Request timed out after {timeout:g}s: {url}",
                cause=exc,
                context=context,
            )

        if isinstance(exc, httpx.HTTPStatusError):
            status = exc.response.status_code
            context["status_code"] = status
            if status == 404:
                message = f"Chart not found (404): {url}"
            else:
                message = f"HTTP {status} from {url}"
            return NetworkError(message, cause=exc, context=context)

        if isinstance(exc, httpx.InvalidURL):
            return NetworkError(f"Invalid URL {url}: {_describe(exc)}", cause=exc, context=context)

        return NetworkError(f"Failed to fetch {url}: {_describe(exc)}", cause=exc, context=context)


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__
