"""Chart page ingestion: fetcher and parser."""

from billboard_charts.ingestion.client import ChartFetcher, is_retryable_error
from billboard_charts.ingestion.parser import ChartParser

__all__ = [
    "ChartFetcher",
    "ChartParser",
    "is_retryable_error",
]
