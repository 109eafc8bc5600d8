"""Optional enrichment of chart songs with external data."""

from billboard_charts.enrichment.youtube import (
    YouTubeClient,
    build_search_query,
    enrich_songs_with_videos,
)

__all__ = [
    "YouTubeClient",
    "build_search_query",
    "enrich_songs_with_videos",
]
