"""billboard_charts.core: foundation types, config, and exceptions."""

from billboard_charts.core.config import (
    APIConfig,
    ChartsConfig,
    FetcherConfig,
    YouTubeConfig,
    load_config,
)
from billboard_charts.core.exceptions import (
    BillboardChartsError,
    ChartError,
    ConfigError,
    ErrorKind,
    InvalidInputError,
    NetworkError,
    NotFoundError,
    ParsingError,
    RequestTimeoutError,
)
from billboard_charts.core.models import (
    Chart,
    ChartInfo,
    ChartSlug,
    ChartWeek,
    EnrichedChart,
    EnrichedSong,
    NeighborWeek,
    PositionStats,
    Song,
    VideoLink,
)

__all__ = [
    # Type aliases
    "ChartSlug",
    "ChartWeek",
    # Chart models
    "PositionStats",
    "Song",
    "NeighborWeek",
    "Chart",
    "ChartInfo",
    # Enrichment models
    "VideoLink",
    "EnrichedSong",
    "EnrichedChart",
    # Config
    "ChartsConfig",
    "FetcherConfig",
    "YouTubeConfig",
    "APIConfig",
    "load_config",
    # Exceptions
    "ErrorKind",
    "BillboardChartsError",
    "ConfigError",
    "ChartError",
    "NetworkError",
    "RequestTimeoutError",
    "ParsingError",
    "NotFoundError",
    "InvalidInputError",
]
