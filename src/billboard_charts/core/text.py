"""Pure date and text helpers shared by the parser and the facade."""

from __future__ import annotations

import re
from datetime import date
from types import MappingProxyType
from typing import Any

MONTH_MAP = MappingProxyType(
    {
        "January": "01",
        "February": "02",
        "March": "03",
        "April": "04",
        "May": "05",
        "June": "06",
        "July": "07",
        "August": "08",
        "September": "09",
        "October": "10",
        "November": "11",
        "December": "12",
    }
)

_WORD_RE = re.compile(r"\w\S*")
_WHITESPACE_RE = re.compile(r"\s+")
_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_CHART_NAME_RE = re.compile(r"[a-z0-9-]+")


def to_title_case(value: Any) -> str:
    """Upper-case the first character of each word and lower-case the rest.

    A word is a word character followed by any non-space run, so hyphenated
    tokens such as "hot-100" are a single word.

        >>> to_title_case("hello woRld")
        'Hello World'
    """
    if not isinstance(value, str):
        return ""
    return _WORD_RE.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), value)


def collapse_whitespace(text: str) -> str:
    """Trim and collapse runs of whitespace (including newlines) to one space."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def format_date_to_yyyymmdd(month_day_year: Any) -> str:
    """Convert "Month Day, Year" to "YYYY-MM-DD".

    Returns an empty string for anything that does not follow that shape
    or names an unknown month.

        >>> format_date_to_yyyymmdd("November 19, 2016")
        '2016-11-19'
    """
    if not isinstance(month_day_year, str) or not month_day_year.strip():
        return ""

    parts = month_day_year.strip().split(",")
    if len(parts) < 2:
        return ""

    yyyy = parts[1].strip()
    month_day = parts[0].strip().split(" ")
    if len(month_day) < 2:
        return ""

    mm = MONTH_MAP.get(month_day[0])
    dd = month_day[1].zfill(2)
    if not mm or not yyyy or not dd:
        return ""

    return f"{yyyy}-{mm}-{dd}"


def is_valid_date_format(value: Any) -> bool:
    """True for a strict YYYY-MM-DD string naming a real calendar date."""
    if not isinstance(value, str) or not _ISO_DATE_RE.fullmatch(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_valid_chart_name(value: Any) -> bool:
    """True for a chart slug: lowercase letters, digits and hyphens only."""
    return isinstance(value, str) and bool(_CHART_NAME_RE.fullmatch(value))
