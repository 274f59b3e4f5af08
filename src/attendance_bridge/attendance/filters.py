from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import date_key, now_local
from ..common.validators import require_iso_date
from ..core.enums import FilterType
from ..core.exceptions import ValidationError
from ..device.model import PunchEvent
from .model import FilterWindow, SummaryMap


def _parse_month(value: str) -> tuple[int, int]:
    parts = value.split("-")
    try:
        year, month = int(parts[0]), int(parts[1])
    except (IndexError, ValueError):
        raise ValidationError(f"Invalid month filter: {value!r}. Use YYYY-MM")
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month filter: {value!r}. Use YYYY-MM")
    return year, month


def _parse_year(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"Invalid year filter: {value!r}. Use YYYY")


def resolve_window(
    filter_type: Optional[str] = None,
    filter_value: Optional[str] = None,
    *,
    today: Optional[date] = None,
) -> FilterWindow:
    """Build the canonical window shared by the log and summary filters.

    An omitted type means ``date``; an omitted value means the current
    day/month/year. An empty or unknown type selects every record.
    """

    today = today or now_local().date()
    value = str(filter_value).strip() if filter_value is not None else ""

    if filter_type is None:
        ftype = FilterType.DATE
    else:
        try:
            ftype = FilterType(str(filter_type).strip().lower())
        except ValueError:
            ftype = FilterType.ALL

    if ftype == FilterType.DATE:
        day = require_iso_date(value, "date filter") if value else today
        return FilterWindow(ftype, date_key(day))

    if ftype == FilterType.MONTH:
        year, month = _parse_month(value) if value else (today.year, today.month)
        return FilterWindow(ftype, f"{year:04d}-{month:02d}")

    if ftype == FilterType.YEAR:
        year = _parse_year(value) if value else today.year
        return FilterWindow(ftype, f"{year:04d}")

    return FilterWindow(FilterType.ALL, "")


def filter_logs(logs: Iterable[PunchEvent], window: FilterWindow) -> list[PunchEvent]:
    return [e for e in logs if window.matches(e.timestamp.date())]


def filter_summary(summary: SummaryMap, window: FilterWindow) -> SummaryMap:
    out: SummaryMap = {}
    for uid, days in summary.items():
        kept = {key: day for key, day in days.items() if window.matches_key(key)}
        # Only employees with data inside the window.
        if kept:
            out[uid] = kept
    return out
