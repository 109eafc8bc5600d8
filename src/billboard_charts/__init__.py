"""billboard-charts: Billboard chart listings as typed Python data."""

from billboard_charts.charts import DEFAULT_CHART, get_chart, list_charts
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
    EnrichedChart,
    EnrichedSong,
    NeighborWeek,
    PositionStats,
    Song,
    VideoLink,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "DEFAULT_CHART",
    "get_chart",
    "list_charts",
    # Models
    "Chart",
    "ChartInfo",
    "Song",
    "PositionStats",
    "NeighborWeek",
    "VideoLink",
    "EnrichedSong",
    "EnrichedChart",
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
