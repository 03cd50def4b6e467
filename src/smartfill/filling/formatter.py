"""Canonicalizes raw values into the wire formats native inputs accept."""

from __future__ import annotations

import datetime as dt
import re
from typing import Optional

from dateutil import parser

from ..core.models import FieldType

COLOR_MAP = {
    "red": "#ff0000",
    "green": "#008000",
    "blue": "#0000ff",
    "black": "#000000",
    "white": "#ffffff",
    "yellow": "#ffff00",
    "orange": "#ffa500",
    "purple": "#800080",
    "pink": "#ffc0cb",
    "brown": "#a52a2a",
    "gray": "#808080",
    "grey": "#808080",
    "cyan": "#00ffff",
    "magenta": "#ff00ff",
    "lime": "#00ff00",
    "maroon": "#800000",
    "navy": "#000080",
    "olive": "#808000",
    "silver": "#c0c0c0",
    "teal": "#008080",
    "gold": "#ffd700",
    "indigo": "#4b0082",
    "violet": "#ee82ee",
    "beige": "#f5f5dc",
}
DEFAULT_COLOR = "#000000"

_US_DATE = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{4})$")
_ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_TIME_12H = re.compile(r"^(\d{1,2}):(\d{2})\s*(AM|PM)$", re.IGNORECASE)
_TIME_24H = re.compile(r"^(\d{1,2}):(\d{2})$")
_HOUR_12H = re.compile(r"^(\d{1,2})\s*(AM|PM)$", re.IGNORECASE)
_US_DATETIME = re.compile(
    r"^(\d{1,2})/(\d{1,2})/(\d{4})\s+(\d{1,2}):(\d{2})\s*(AM|PM)?$", re.IGNORECASE
)
_ISO_DATETIME = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})T(\d{1,2}):(\d{2})$")
_RGB = re.compile(r"rgb\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)")


def format_value(value: str, kind: FieldType) -> str:
    if not value or not isinstance(value, str):
        return value
    if kind is FieldType.DATE:
        return format_date(value)
    if kind is FieldType.TIME:
        return format_time(value)
    if kind is FieldType.DATETIME:
        return format_datetime(value)
    if kind is FieldType.COLOR:
        return format_color(value)
    return value


def _iso_date(year: int, month: int, day: int) -> Optional[str]:
    try:
        return dt.date(year, month, day).isoformat()
    except ValueError:
        return None


_SENTINELS = (dt.datetime(2000, 1, 1), dt.datetime(2001, 2, 2))


def _generic_parse(value: str) -> Optional[dt.datetime]:
    """Parse with two defaults; a date part that follows the default was never in the input."""

    try:
        first, second = (parser.parse(value, default=default) for default in _SENTINELS)
    except (ValueError, OverflowError):
        return None
    if first.date() != second.date():
        return None
    return first


def _to_24h(hours: int, meridiem: Optional[str]) -> Optional[int]:
    if meridiem is None:
        return hours if 0 <= hours <= 23 else None
    if not 1 <= hours <= 12:
        return None
    meridiem = meridiem.upper()
    if meridiem == "PM" and hours != 12:
        return hours + 12
    if meridiem == "AM" and hours == 12:
        return 0
    return hours


def format_date(value: str) -> str:
    raw = value.strip()

    match = _US_DATE.match(raw)
    if match:
        month, day, year = (int(part) for part in match.groups())
        formatted = _iso_date(year, month, day)
        if formatted:
            return formatted

    match = _ISO_DATE.match(raw)
    if match:
        year, month, day = (int(part) for part in match.groups())
        formatted = _iso_date(year, month, day)
        if formatted:
            return formatted

    parsed = _generic_parse(raw)
    if parsed is not None:
        return parsed.date().isoformat()
    return value


def format_time(value: str) -> str:
    raw = value.strip()

    for pattern in (_TIME_12H, _TIME_24H):
        match = pattern.match(raw)
        if match:
            minutes = int(match.group(2))
            meridiem = match.group(3) if pattern is _TIME_12H else None
            hours = _to_24h(int(match.group(1)), meridiem)
            if hours is None or minutes > 59:
                return value
            return f"{hours:02d}:{minutes:02d}"

    match = _HOUR_12H.match(raw)
    if match:
        hours = _to_24h(int(match.group(1)), match.group(2))
        if hours is not None:
            return f"{hours:02d}:00"
    return value


def format_datetime(value: str) -> str:
    raw = value.strip()

    match = _US_DATETIME.match(raw)
    if match:
        month, day, year, hours, minutes = (int(part) for part in match.groups()[:5])
        date_part = _iso_date(year, month, day)
        hours = _to_24h(hours, match.group(6))
        if date_part and hours is not None and minutes <= 59:
            return f"{date_part}T{hours:02d}:{minutes:02d}"

    match = _ISO_DATETIME.match(raw)
    if match:
        year, month, day, hours, minutes = (int(part) for part in match.groups())
        date_part = _iso_date(year, month, day)
        if date_part and 0 <= hours <= 23 and minutes <= 59:
            return f"{date_part}T{hours:02d}:{minutes:02d}"

    parsed = _generic_parse(raw)
    if parsed is not None:
        return parsed.replace(tzinfo=None).isoformat(timespec="minutes")
    return value


def format_color(value: str) -> str:
    raw = value.strip().lower()
    if raw.startswith("#"):
        return raw
    if raw in COLOR_MAP:
        return COLOR_MAP[raw]

    match = _RGB.search(raw)
    if match:
        red, green, blue = (min(255, int(part)) for part in match.groups())
        return f"#{red:02x}{green:02x}{blue:02x}"
    return DEFAULT_COLOR
