"""Shared pytest fixtures for billboard-charts."""

from pathlib import Path

import pytest
import respx

from billboard_charts.core.config import FetcherConfig
from billboard_charts.core.models import Chart, ChartInfo, PositionStats, Song

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _isolate_global_respx_router():
    """Drop routes left on respx's global router so they can't leak between tests."""
    respx.mock.clear()
    yield
    respx.mock.clear()


@pytest.fixture
def chart_html() -> str:
    return (FIXTURES_DIR / "sample_chart.html").read_text()


@pytest.fixture
def charts_list_html() -> str:
    return (FIXTURES_DIR / "sample_charts_list.html").read_text()


@pytest.fixture
def fast_fetcher_config() -> FetcherConfig:
    """Default endpoints, no backoff sleeps."""
    return FetcherConfig(retry_delay=0, request_timeout=5)


@pytest.fixture
def sample_song() -> Song:
    return Song(
        rank=1,
        title="Test Song One",
        artist="Test Artist",
        cover="https://charts-static.billboard.com/img/2024/01/artist-abc-song-one-180x180.jpg",
        position=PositionStats(position_last_week=2, peak_position=1, weeks_on_chart=10),
    )


@pytest.fixture
def sample_chart(sample_song) -> Chart:
    return Chart(
        week="2024-11-23",
        songs=[
            sample_song,
            Song(rank=2, title="Test Song Two", artist="Another Artist"),
        ],
    )


@pytest.fixture
def sample_catalog() -> list[ChartInfo]:
    return [
        ChartInfo(name="Hot 100", url="https://www.billboard.com/charts/hot-100"),
        ChartInfo(name="Billboard 200", url="https://www.billboard.com/charts/billboard-200"),
    ]
