from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import clock_label, date_key
from ..core.constants import EMPTY_CLOCK, UNKNOWN_NAME
from ..core.enums import FilterType, PresenceState, PunchKind
from ..device.model import PunchEvent


@dataclass(frozen=True)
class RawLogEntry:
    time: str
    type: PunchKind

    def to_dict(self) -> dict:
        return {"time": self.time, "type": self.type.value}


@dataclass
class DailySummary:
    """One employee's worked day, computed on demand and never stored."""

    employee_id: str
    date: date
    first_in: Optional[datetime] = None
    last_out: Optional[datetime] = None
    total_worked_ms: int = 0
    raw_logs: list[RawLogEntry] = field(default_factory=list)

    @property
    def date_key(self) -> str:
        return date_key(self.date)

    @property
    def first_in_label(self) -> str:
        return clock_label(self.first_in, EMPTY_CLOCK)

    @property
    def last_out_label(self) -> str:
        return clock_label(self.last_out, EMPTY_CLOCK)

    @property
    def duration_label(self) -> str:
        hours = self.total_worked_ms // 3_600_000
        minutes = (self.total_worked_ms % 3_600_000) // 60_000
        return f"{hours}h {minutes}m"

    def to_dict(self) -> dict:
        return {
            "duration": self.duration_label,
            "firstIn": self.first_in_label,
            "lastOut": self.last_out_label,
            "totalMs": self.total_worked_ms,
            "logs": [entry.to_dict() for entry in self.raw_logs],
        }


@dataclass(frozen=True)
class LiveStatus:
    employee_id: str
    state: PresenceState
    time: datetime

    def to_dict(self) -> dict:
        return {"state": self.state.value, "time": self.time.isoformat()}


SummaryMap = dict[str, dict[str, DailySummary]]


@dataclass(frozen=True)
class AggregationResult:
    daily_stats: SummaryMap
    active_status: dict[str, LiveStatus]


@dataclass(frozen=True)
class FilterWindow:
    """Canonical filter window: value is ``YYYY-MM-DD``, ``YYYY-MM``, ``YYYY`` or empty."""

    type: FilterType
    value: str

    def matches(self, day: date) -> bool:
        if self.type == FilterType.DATE:
            return day.isoformat() == self.value
        if self.type == FilterType.MONTH:
            year, month = self.value.split("-")
            return day.year == int(year) and day.month == int(month)
        if self.type == FilterType.YEAR:
            return day.year == int(self.value)
        return True

    def matches_key(self, key: str) -> bool:
        if self.type == FilterType.DATE:
            return key == self.value
        if self.type in (FilterType.MONTH, FilterType.YEAR):
            return key.startswith(self.value)
        return True

    def to_dict(self) -> dict:
        return {"type": self.type.value, "value": self.value}


def summary_to_dict(summary: SummaryMap) -> dict:
    return {uid: {key: day.to_dict() for key, day in days.items()} for uid, days in summary.items()}


@dataclass(frozen=True)
class UnifiedAttendance:
    """Read model for the dashboard: filtered logs, daily summary and live status."""

    device: str
    window: FilterWindow
    logs: list[PunchEvent]
    summary: SummaryMap
    employee_status: dict[str, LiveStatus]
    user_names: dict[str, str]

    @property
    def count(self) -> int:
        return len(self.logs)

    def log_to_dict(self, event: PunchEvent) -> dict:
        return {
            "uid": event.employee_id,
            "userName": self.user_names.get(event.employee_id, UNKNOWN_NAME),
            "timestamp": event.timestamp.isoformat(),
            "status": event.status_code,
            "deviceSN": event.device_serial,
        }

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "device": self.device,
            "filtered": True,
            "filterInfo": self.window.to_dict(),
            "data": [self.log_to_dict(e) for e in self.logs],
            "summary": summary_to_dict(self.summary),
            "employeeStatus": {uid: s.to_dict() for uid, s in self.employee_status.items()},
            "userNames": dict(self.user_names),
        }
