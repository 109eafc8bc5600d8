"""YouTube video lookup for chart songs.

Enrichment is best effort: a failed or empty search leaves the song's
`video` as None and never fails the chart.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Sequence

import httpx
from aiolimiter import AsyncLimiter

from billboard_charts.core.config import YouTubeConfig
from billboard_charts.core.models import EnrichedSong, Song, VideoLink
from billboard_charts.core.text import collapse_whitespace

logger = logging.getLogger(__name__)

_PARENTHESIZED_RE = re.compile(r"\(.*?\)")
_CO_ARTIST_RE = re.compile(r"\s+(?:featuring|&)\s+|,", re.IGNORECASE)

# YouTube category id for Music
_MUSIC_CATEGORY_ID = "10"


def build_search_query(title: str, artist: str) -> str:
    """Search terms for a song's official video.

    Parenthesized parts of the title are dropped. Only the lead artist is
    kept: anything after "Featuring", "&" or the first comma goes.

        >>> build_search_query("Wild Thoughts", "DJ Khaled Featuring Rihanna")
        'DJ Khaled Wild Thoughts official music video'
    """
    clean_title = collapse_whitespace(_PARENTHESIZED_RE.sub("", title))
    clean_artist = _CO_ARTIST_RE.split(artist, maxsplit=1)[0].strip()
    return f"{clean_artist} {clean_title} official music video"


class YouTubeClient:
    """Rate-limited async client for the YouTube Data API search endpoint.

    Results are memoized per query for the lifetime of the client, so one
    client shared across requests avoids repeat lookups.

    Use via `async with YouTubeClient(config) as client:`.
    """

    def __init__(self, config: YouTubeConfig | None = None) -> None:
        self._config = config or YouTubeConfig()
        self._limiter = AsyncLimiter(max_rate=self._config.rate_limit, time_period=1.0)
        self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._config.request_timeout))
        self._cache: dict[str, VideoLink | None] = {}

    @property
    def config(self) -> YouTubeConfig:
        return self._config

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    async def __aenter__(self) -> YouTubeClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client. Called automatically by __aexit__."""
        await self._client.aclose()

    async def search_video(self, title: str, artist: str) -> VideoLink | None:
        """Best matching music video for a song, or None.

        Returns None without a request when no API key is configured.
        HTTP and payload errors are logged and also yield None.
        """
        if not self.enabled:
            return None

        query = build_search_query(title, artist)
        if query in self._cache:
            return self._cache[query]

        params = {
            "part": "snippet",
            "q": query,
            "type": "video",
            "videoCategoryId": _MUSIC_CATEGORY_ID,
            "maxResults": 1,
            "key": self._config.api_key,
        }

        try:
            async with self._limiter:
                response = await self._client.get(self._config.search_url, params=params)
            response.raise_for_status()
            items = response.json().get("items") or []
            video = VideoLink.from_video_id(items[0]["id"]["videoId"]) if items else None
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("YouTube search failed for %r: %s", title, e)
            return None

        self._cache[query] = video
        return video


async def enrich_songs_with_videos(
    songs: Sequence[Song],
    client: YouTubeClient,
    limit: int | None = None,
) -> list[EnrichedSong]:
    """Attach a video link to the first `limit` songs.

    Lookups run concurrently in batches of `batch_size`, with a short pause
    between batches. Songs past the limit, and every song when the client
    is disabled, get `video=None`. Order is preserved.

    Args:
        songs: Songs in chart order.
        client: An open YouTubeClient.
        limit: Maximum songs to look up; defaults to the client's config.
    """
    if limit is None:
        limit = client.config.limit

    if not client.enabled:
        logger.warning("YouTube API key not configured - skipping video enrichment")
        return [EnrichedSong(**song.model_dump()) for song in songs]

    to_enrich = list(songs[:limit])
    remaining = songs[limit:]
    batch_size = client.config.batch_size
    enriched: list[EnrichedSong] = []

    for start in range(0, len(to_enrich), batch_size):
        batch = to_enrich[start : start + batch_size]
        videos = await asyncio.gather(
            *(client.search_video(song.title, song.artist) for song in batch)
        )
        enriched.extend(
            EnrichedSong(**song.model_dump(), video=video)
            for song, video in zip(batch, videos)
        )

        if start + batch_size < len(to_enrich) and client.config.batch_delay > 0:
            await asyncio.sleep(client.config.batch_delay)

    enriched.extend(EnrichedSong(**song.model_dump()) for song in remaining)
    return enriched
