"""Integration tests for the chart pipeline.

Fetcher, parser, facade and enrichment working together. billboard.com and
the YouTube API are served by respx.
"""

from __future__ import annotations

import httpx
import pytest
import respx

from billboard_charts import EnrichedChart, get_chart, list_charts
from billboard_charts.core.config import FetcherConfig, YouTubeConfig
from billboard_charts.enrichment import YouTubeClient, enrich_songs_with_videos
from billboard_charts.ingestion import ChartFetcher

pytestmark = pytest.mark.integration

CHARTS_URL = "https://www.billboard.com/charts/"
SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"


@pytest.fixture
def billboard(chart_html, charts_list_html):
    """Mocked billboard.com: a catalog page and every chart page."""
    with respx.mock(assert_all_called=False) as mock:
        mock.get(CHARTS_URL).mock(return_value=httpx.Response(200, text=charts_list_html))
        mock.get(url__regex=rf"{CHARTS_URL}[a-z0-9-]+(/\d{{4}}-\d{{2}}-\d{{2}})?$").mock(
            return_value=httpx.Response(200, text=chart_html)
        )
        yield mock


class TestCatalogToChart:
    async def test_every_listed_chart_parses(self, billboard):
        config = FetcherConfig(retry_delay=0)

        async with ChartFetcher(config) as fetcher:
            catalog = await list_charts(fetcher=fetcher)
            charts = [
                await get_chart(info.url.rsplit("/", 1)[-1], fetcher=fetcher)
                for info in catalog
            ]

        assert len(charts) == len(catalog) == 3
        assert all(chart.week == "2024-11-23" for chart in charts)
        assert all(len(chart.songs) == 3 for chart in charts)

    async def test_callback_and_await_agree(self, billboard):
        received = []

        awaited = await get_chart("hot-100", "2024-11-23")
        await get_chart("hot-100", "2024-11-23", lambda err, chart: received.append((err, chart)))

        assert received == [(None, awaited)]


class TestChartWithVideos:
    async def test_enriched_chart_serializes(self, billboard):
        billboard.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json={"items": [{"id": {"videoId": "vid"}}]})
        )
        youtube_config = YouTubeConfig(api_key="test-key", batch_size=2, batch_delay=0)

        chart = await get_chart()
        async with YouTubeClient(youtube_config) as youtube:
            songs = await enrich_songs_with_videos(chart.songs, youtube, limit=2)

        enriched = EnrichedChart(week=chart.week, songs=songs)
        data = enriched.model_dump(mode="json", by_alias=True)

        assert [s["video"] is not None for s in data["songs"]] == [True, True, False]
        assert data["songs"][0]["video"]["watchUrl"] == "https://www.youtube.com/watch?v=vid"
        assert data["songs"][2]["cover"].endswith("344x344.jpg")
