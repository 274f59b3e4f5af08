from __future__ import annotations

from enum import Enum


class PunchKind(str, Enum):
    """Kind of punch read from the terminal."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"


class PresenceState(str, Enum):
    IN = "In"
    OUT = "Out"


class FilterType(str, Enum):
    """Filter window; ALL keeps every record."""

    DATE = "date"
    MONTH = "month"
    YEAR = "year"
    ALL = ""


class SyncOutcome(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    ERROR = "error"
    SKIPPED = "skipped"
