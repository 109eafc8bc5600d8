"""Chart HTML parser for extracting songs and chart catalogs from billboard.com."""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Callable
from typing import ClassVar, TypeVar

from bs4 import BeautifulSoup, Tag

from billboard_charts.core.config import BILLBOARD_BASE_URL
from billboard_charts.core.exceptions import ChartError, NotFoundError, ParsingError
from billboard_charts.core.models import Chart, ChartInfo, ChartSlug, PositionStats, Song
from billboard_charts.core.text import (
    collapse_whitespace,
    format_date_to_yyyymmdd,
    to_title_case,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Markup surprises a single field extractor recovers from
_FIELD_ERRORS = (AttributeError, IndexError, KeyError, TypeError, ValueError)


def _tolerant(default: Callable[[], T]) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Return `default()` instead of raising when a field cannot be read."""

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except _FIELD_ERRORS as e:
                logger.debug("%s failed, using default: %r", func.__name__, e)
                return default()

        return wrapper

    return decorator


def _first_match(strategies: list[Callable[[], T]], default: T) -> T:
    """Try each strategy in order and return the first truthy result."""
    for strategy in strategies:
        value = strategy()
        if value:
            return value
    return default


class ChartParser:
    """Extracts chart entries and chart catalogs from billboard.com HTML.

    The site's markup changes often, so every field is read on its own by a
    small extractor that falls back to an empty value instead of failing
    the row. Only a page that yields no entries at all is an error.
    """

    SELECTORS: ClassVar[dict[str, str]] = {
        "chart_row": "ul.o-chart-results-list-row",
        "list_item": "li.o-chart-results-list__item",
        "label": "span.c-label",
        "title": "h3.c-title",
        "artist": "span.c-label.a-no-trucate",
        "artist_link": "span.c-label.a-no-trucate a",
        "cover_image": "img.c-lazy-image__img",
        "stat_container": "div.lrv-u-flex.lrv-u-justify-content-space-between",
        "stat_label": "span.c-span",
        "date_attr": "[data-date]",
        "date_button": '.date-selector__button, [class*="date-selector"] button',
        "chart_link": 'a[href*="/charts/"]',
    }

    # URLs of lazy-load stand-ins, never real artwork
    PLACEHOLDER_MARKERS: ClassVar[tuple[str, ...]] = ("lazyload-fallback", "placeholder")
    IMAGE_HOST: ClassVar[str] = "charts-static.billboard.com"

    # Label keyword -> PositionStats field, checked in order
    STAT_KEYWORDS: ClassVar[list[tuple[str, str]]] = [
        ("LW", "position_last_week"),
        ("PEAK", "peak_position"),
        ("WEEK", "weeks_on_chart"),
    ]

    _ISO_DATE_RE: ClassVar[re.Pattern[str]] = re.compile(r"\d{4}-\d{2}-\d{2}")
    _EMBEDDED_DATE_RE: ClassVar[re.Pattern[str]] = re.compile(r"(\w+ \d+, \d{4})")
    _RESOLUTION_RE: ClassVar[re.Pattern[str]] = re.compile(r"(\d+)x(\d+)")
    _CHART_SLUG_RE: ClassVar[re.Pattern[str]] = re.compile(r"/charts/([a-z0-9-]+)", re.IGNORECASE)
    _LEADING_INT_RE: ClassVar[re.Pattern[str]] = re.compile(r"\s*([+-]?\d+)")

    def __init__(self, base_url: str = BILLBOARD_BASE_URL) -> None:
        """
        Args:
            base_url: Site root used to build absolute catalog links.
        """
        self.base_url = base_url.rstrip("/")

    # --- Pages ---

    def parse_chart(self, raw_html: str) -> Chart:
        """Parse a single chart page.

        Args:
            raw_html: Chart page HTML.

        Returns:
            Chart with songs sorted ascending by rank. Duplicate ranks are
            kept in document order.

        Raises:
            NotFoundError: No row produced a title or an artist.
            ParsingError: Unexpected failure while walking the document.
        """
        try:
            soup = BeautifulSoup(raw_html, "lxml")
            week = self.extract_chart_week(soup)

            songs: list[Song] = []
            for index, row in enumerate(soup.select(self.SELECTORS["chart_row"])):
                song = self._build_song(row, position=index + 1)
                if song is None:
                    logger.debug("Skipping chart row %d: no title or artist", index + 1)
                    continue
                songs.append(song)

            if not songs:
                raise NotFoundError(
                    "No songs found in chart data. "
                    "Billboard HTML structure may have changed."
                )

            songs.sort(key=lambda s: s.rank)
            return Chart(week=week, songs=songs)
        except ChartError:
            raise
        except Exception as e:
            raise ParsingError("Failed to parse chart HTML", cause=e) from e

    def parse_charts_list(self, raw_html: str) -> list[ChartInfo]:
        """Parse the chart catalog page.

        Every link under /charts/ names a chart by its slug. Slugs are
        de-duplicated, first occurrence wins.

        Raises:
            NotFoundError: No chart links found.
            ParsingError: Unexpected failure while walking the document.
        """
        try:
            soup = BeautifulSoup(raw_html, "lxml")
            charts: list[ChartInfo] = []
            seen: set[str] = set()

            for anchor in soup.select(self.SELECTORS["chart_link"]):
                slug = self.extract_chart_slug(anchor.get("href") or "")
                if not slug or slug in seen:
                    continue
                seen.add(slug)
                charts.append(
                    ChartInfo(
                        name=to_title_case(slug.replace("-", " ")),
                        url=f"{self.base_url}/charts/{slug}",
                    )
                )

            if not charts:
                raise NotFoundError(
                    "No charts found. Billboard HTML structure may have changed."
                )

            return charts
        except ChartError:
            raise
        except Exception as e:
            raise ParsingError("Failed to parse charts list HTML", cause=e) from e

    def extract_chart_slug(self, href: str) -> ChartSlug:
        """Lowercase slug from a /charts/<slug> link, or "" for non-chart links."""
        match = self._CHART_SLUG_RE.search(href)
        if not match:
            return ""
        slug = match.group(1).lower()
        if slug == "charts" or len(slug) < 3:
            return ""
        return slug

    def _build_song(self, row: Tag, position: int) -> Song | None:
        """Assemble one Song from independently extracted fields.

        A missing rank falls back to the row's position on the page.
        """
        title = self.extract_title(row)
        artist = self.extract_artist(row)
        if not title and not artist:
            return None

        rank = self.extract_rank(row)
        return Song(
            rank=rank if rank >= 1 else position,
            title=title,
            artist=artist,
            cover=self.extract_cover(row),
            position=self.extract_position_stats(row),
        )

    # --- Week ---

    @_tolerant(str)
    def extract_chart_week(self, soup: BeautifulSoup) -> str:
        """Chart week as YYYY-MM-DD, or "" when the page does not show one.

        Sources, first hit wins: a `data-date` attribute, the date in the
        page <title>, the date selector button text.
        """

        def from_attribute() -> str:
            element = soup.select_one(self.SELECTORS["date_attr"])
            value = element.get("data-date") if element else None
            if isinstance(value, str) and self._ISO_DATE_RE.fullmatch(value):
                return value
            return ""

        def from_title() -> str:
            if soup.title is None:
                return ""
            match = self._EMBEDDED_DATE_RE.search(soup.title.get_text())
            return format_date_to_yyyymmdd(match.group(1)) if match else ""

        def from_date_button() -> str:
            text = self.extract_text(soup, self.SELECTORS["date_button"])
            match = self._EMBEDDED_DATE_RE.search(text)
            return format_date_to_yyyymmdd(match.group(1) if match else text)

        return _first_match([from_attribute, from_title, from_date_button], "")

    # --- Row Fields ---

    @_tolerant(int)
    def extract_rank(self, row: Tag) -> int:
        """Rank from `data-detail-target`, else the first label text, else 0."""

        def from_attribute() -> int | None:
            return self._parse_int(row.get("data-detail-target"))

        def from_label() -> int | None:
            item = row.select_one(self.SELECTORS["list_item"])
            label = item.select_one(self.SELECTORS["label"]) if item else None
            return self._parse_int(label.get_text()) if label else None

        return _first_match([from_attribute, from_label], 0)

    @_tolerant(str)
    def extract_title(self, row: Tag) -> str:
        return self.extract_text(row, self.SELECTORS["title"])

    @_tolerant(str)
    def extract_artist(self, row: Tag) -> str:
        """Artist link text, falling back to the plain label text."""
        return _first_match(
            [
                lambda: self.extract_text(row, self.SELECTORS["artist_link"]),
                lambda: self.extract_text(row, self.SELECTORS["artist"]),
            ],
            "",
        )

    @_tolerant(str)
    def extract_cover(self, row: Tag) -> str:
        """Highest-resolution valid artwork URL in the row, or "".

        Both `data-lazy-src` and `src` of every image are candidates.
        A candidate must carry a `WxH` token and beat the current best width;
        ties keep the first one found, and token-less URLs are never chosen.
        """
        best_url = ""
        best_size = 0

        for img in row.select(self.SELECTORS["cover_image"]):
            for candidate in (img.get("data-lazy-src"), img.get("src")):
                if not self.is_valid_image_url(candidate):
                    continue
                size = self.image_resolution(candidate)
                if size > best_size:
                    best_size = size
                    best_url = candidate

        return best_url

    @_tolerant(PositionStats)
    def extract_position_stats(self, row: Tag) -> PositionStats:
        """Last week / peak / weeks-on-chart figures from the row's stat boxes."""
        values: dict[str, int] = {}

        for container in row.select(self.SELECTORS["stat_container"]):
            label = container.select_one(self.SELECTORS["stat_label"])
            value = container.select_one(self.SELECTORS["label"])
            if label is None or value is None:
                continue

            number = self._parse_int(value.get_text())
            if number is None:
                continue

            keyword_label = label.get_text(strip=True).upper()
            for keyword, field in self.STAT_KEYWORDS:
                if keyword in keyword_label:
                    values[field] = number
                    break

        return PositionStats(**values)

    # --- Helpers ---

    def extract_text(self, element: Tag, selector: str) -> str:
        """Whitespace-collapsed text of the first match, or ""."""
        found = element.select_one(selector)
        if found is None:
            return ""
        return collapse_whitespace(found.get_text())

    def extract_attr(self, element: Tag, selector: str, attr: str) -> str:
        """Attribute value of the first match, or ""."""
        found = element.select_one(selector)
        if found is None:
            return ""
        value = found.get(attr)
        return value if isinstance(value, str) else ""

    @classmethod
    def is_valid_image_url(cls, url: object) -> bool:
        """True for a real artwork URL; placeholders and empty values are not."""
        if not isinstance(url, str) or not url:
            return False
        if any(marker in url for marker in cls.PLACEHOLDER_MARKERS):
            return False
        return cls.IMAGE_HOST in url or url.startswith("http")

    @classmethod
    def image_resolution(cls, url: str) -> int:
        """Width of the first `WxH` token in the URL, 0 if there is none.

        Any `<digits>x<digits>` run counts, so unrelated numbers in a path
        can match.
        """
        match = cls._RESOLUTION_RE.search(url)
        if not match:
            return 0
        return int(match.group(1))

    @classmethod
    def _parse_int(cls, text: object) -> int | None:
        """Leading integer of a string ("12", " 3 ", "7th"), or None."""
        if not isinstance(text, str):
            return None
        match = cls._LEADING_INT_RE.match(text)
        return int(match.group(1)) if match else None
