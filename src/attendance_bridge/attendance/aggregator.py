"""Pairs punch events into per-employee daily work time and live presence.

Pure: the whole result is recomputed from the event list on every call.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import clock_label, date_key, now_local
from ..core.enums import PresenceState
from ..device.model import PunchEvent
from .model import AggregationResult, DailySummary, LiveStatus, RawLogEntry, SummaryMap

_ONE_MS = timedelta(milliseconds=1)


def elapsed_ms(start: datetime, end: datetime) -> int:
    return (end - start) // _ONE_MS


def correct_stale_status(status: LiveStatus, today: date) -> LiveStatus:
    """Nobody is still "In" from a previous day: a forgotten checkout reads as Out."""

    if status.state == PresenceState.IN and status.time.date() != today:
        return LiveStatus(employee_id=status.employee_id, state=PresenceState.OUT, time=status.time)
    return status


def compute_stats(events: Iterable[PunchEvent], *, today: Optional[date] = None) -> AggregationResult:
    # sorted() is stable, so punches sharing a timestamp keep device order.
    ordered = sorted(events, key=lambda e: e.timestamp)

    stats: SummaryMap = {}
    open_check_in: dict[tuple[str, str], datetime] = {}
    status: dict[str, LiveStatus] = {}

    for event in ordered:
        uid = event.employee_id
        day_key = date_key(event.timestamp.date())

        days = stats.setdefault(uid, {})
        day = days.get(day_key)
        if day is None:
            day = DailySummary(employee_id=uid, date=event.timestamp.date())
            days[day_key] = day

        day.raw_logs.append(RawLogEntry(time=clock_label(event.timestamp), type=event.kind))

        if event.is_check_out:
            day.last_out = event.timestamp
            # The open pointer lives in the day bucket: an overnight checkout never
            # closes yesterday's checkin.
            opened = open_check_in.pop((uid, day_key), None)
            if opened is not None:
                day.total_worked_ms += elapsed_ms(opened, event.timestamp)
            status[uid] = LiveStatus(employee_id=uid, state=PresenceState.OUT, time=event.timestamp)
        else:
            if day.first_in is None:
                day.first_in = event.timestamp
            open_check_in[(uid, day_key)] = event.timestamp
            status[uid] = LiveStatus(employee_id=uid, state=PresenceState.IN, time=event.timestamp)

    today = today or now_local().date()
    active = {uid: correct_stale_status(s, today) for uid, s in status.items()}
    return AggregationResult(daily_stats=stats, active_status=active)
