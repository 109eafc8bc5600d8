"""Pydantic data models: the type contracts shared by every layer.

Field names are snake_case in Python. Dumping with ``by_alias=True`` gives
the camelCase keys the JSON API has always used (``positionLastWeek``,
``previousWeek``, ``videoId``...).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

# --- Type Aliases ---

ChartSlug = str
ChartWeek = str

_MODEL_CONFIG = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


# --- Chart Models ---


class PositionStats(BaseModel):
    """Chart history of one entry. None means the page did not show it."""

    model_config = _MODEL_CONFIG

    position_last_week: int | None = None
    peak_position: int | None = None
    weeks_on_chart: int | None = None


class Song(BaseModel):
    """One ranked entry of a chart.

    An empty title or artist means the field could not be extracted; it is
    never None.
    """

    model_config = _MODEL_CONFIG

    rank: int
    title: str = ""
    artist: str = ""
    cover: str = ""
    position: PositionStats = PositionStats()

    @field_validator("rank")
    @classmethod
    def rank_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"rank must be >= 1, got {v}")
        return v


class NeighborWeek(BaseModel):
    """Link to an adjacent chart week. Not populated yet."""

    model_config = _MODEL_CONFIG

    url: str = ""
    date: str = ""


class Chart(BaseModel):
    """One dated snapshot of a chart, songs sorted by rank."""

    model_config = _MODEL_CONFIG

    week: ChartWeek = ""
    songs: list[Song]
    previous_week: NeighborWeek = NeighborWeek()
    next_week: NeighborWeek = NeighborWeek()


class ChartInfo(BaseModel):
    """Catalog entry for one chart type, e.g. "Hot 100"."""

    model_config = _MODEL_CONFIG

    name: str
    url: str


# --- Enrichment Models ---


class VideoLink(BaseModel):
    """A YouTube video matched to a song."""

    model_config = _MODEL_CONFIG

    video_id: str
    embed_url: str
    watch_url: str

    @classmethod
    def from_video_id(cls, video_id: str) -> VideoLink:
        return cls(
            video_id=video_id,
            embed_url=f"https://www.youtube.com/embed/{video_id}",
            watch_url=f"https://www.youtube.com/watch?v={video_id}",
        )


class EnrichedSong(Song):
    """A Song plus its video lookup result."""

    video: VideoLink | None = None


class EnrichedChart(Chart):
    """A Chart whose songs carry video links."""

    songs: list[EnrichedSong]
