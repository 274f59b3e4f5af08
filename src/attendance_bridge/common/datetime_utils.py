from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Any, Optional

from dateutil import parser as date_parser

# "Mon Jun 02 2025 08:58:04 GMT+0500 (Pakistan Standard Time)" as produced by JS Date.toString()
_JS_ZONE_NAME = re.compile(r"\s*\([^)]*\)\s*$")
_JS_GMT_OFFSET = re.compile(r"GMT([+-]\d{2}:?\d{2})")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def yesterday_of(moment: datetime) -> date:
    return moment.date() - timedelta(days=1)


def date_key(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def clock_label(value: Optional[datetime], empty: str = "-") -> str:
    return value.strftime("%H:%M:%S") if value else empty


def to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def coerce_timestamp(value: Any) -> Optional[datetime]:
    """Normalize a device timestamp into a naive local datetime.

    Terminals and their client libraries hand back datetimes, epoch numbers
    (seconds or milliseconds), ISO strings or JS ``Date.toString()`` strings.
    Returns None when nothing usable is found.
    """

    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return to_local_naive(value)

    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = value / 1000 if value > 1e11 else value
        try:
            return datetime.fromtimestamp(seconds)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        text = _JS_ZONE_NAME.sub("", value.strip())
        text = _JS_GMT_OFFSET.sub(r"\1", text)
        try:
            return to_local_naive(date_parser.parse(text))
        except (ValueError, OverflowError):
            return None

    return None
