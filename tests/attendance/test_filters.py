from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from attendance_bridge.attendance.aggregator import compute_stats
from attendance_bridge.attendance.filters import filter_logs, filter_summary, resolve_window
from attendance_bridge.core.enums import FilterType, PunchKind
from attendance_bridge.core.exceptions import ValidationError
from attendance_bridge.device.model import PunchEvent

TODAY = date(2025, 6, 2)


def punch(uid: str, when: datetime, kind: PunchKind = PunchKind.CHECK_IN) -> PunchEvent:
    return PunchEvent(employee_id=uid, timestamp=when, kind=kind, device_serial="ZK-Device")


def sample_logs() -> list[PunchEvent]:
    logs = []
    start = datetime(2025, 5, 28, 9, 0)
    for offset in range(8):  # 2025-05-28 .. 2025-06-04
        day = start + timedelta(days=offset)
        for uid in ("1", "2") if offset % 2 else ("1",):
            logs.append(punch(uid, day, PunchKind.CHECK_IN))
            logs.append(punch(uid, day + timedelta(hours=8), PunchKind.CHECK_OUT))
    logs.append(punch("3", datetime(2024, 12, 31, 23, 59, 59)))
    return logs


def test_defaults_to_today_when_nothing_given():
    window = resolve_window(None, None, today=TODAY)

    assert window.type == FilterType.DATE
    assert window.value == "2025-06-02"


def test_empty_or_unknown_type_selects_everything():
    assert resolve_window("", None, today=TODAY).type == FilterType.ALL
    assert resolve_window("everything", "x", today=TODAY).type == FilterType.ALL

    logs = sample_logs()
    window = resolve_window("", None, today=TODAY)
    assert filter_logs(logs, window) == logs


def test_month_and_year_values_are_canonicalized():
    assert resolve_window("month", "2025-6", today=TODAY).value == "2025-06"
    assert resolve_window("MONTH", None, today=TODAY).value == "2025-06"
    assert resolve_window("year", None, today=TODAY).value == "2025"


def test_numeric_values_from_json_bodies_are_accepted():
    assert resolve_window("year", 2025, today=TODAY) == resolve_window("year", "2025", today=TODAY)
    assert resolve_window("year", 2024, today=TODAY).value == "2024"
    assert resolve_window("date", None, today=TODAY).value == "2025-06-02"


@pytest.mark.parametrize(
    "filter_type, value",
    [("date", "2025/06/02"), ("date", "2025-02-30"), ("month", "2025-13"), ("month", "June"), ("year", "twenty")],
)
def test_malformed_values_are_rejected(filter_type, value):
    with pytest.raises(ValidationError):
        resolve_window(filter_type, value, today=TODAY)


def test_date_month_year_filters_on_raw_logs():
    logs = sample_logs()

    by_date = filter_logs(logs, resolve_window("date", "2025-06-02", today=TODAY))
    by_month = filter_logs(logs, resolve_window("month", "2025-06", today=TODAY))
    by_year = filter_logs(logs, resolve_window("year", "2024", today=TODAY))

    assert {e.timestamp.date() for e in by_date} == {date(2025, 6, 2)}
    assert {e.timestamp.date() for e in by_month} == {date(2025, 6, d) for d in (1, 2, 3, 4)}
    assert [e.employee_id for e in by_year] == ["3"]


def test_date_matches_are_a_subset_of_month_matches():
    logs = sample_logs()

    for day in (date(2025, 5, 31), date(2025, 6, 1), date(2025, 6, 3)):
        by_date = filter_logs(logs, resolve_window("date", day.isoformat(), today=TODAY))
        by_month = filter_logs(logs, resolve_window("month", day.strftime("%Y-%m"), today=TODAY))
        assert by_date
        assert all(e in by_month for e in by_date)


@pytest.mark.parametrize(
    "filter_type, value",
    [("date", "2025-06-01"), ("date", "2025-06-02"), ("date", "2030-01-01"), ("month", "2025-05"), ("year", "2025"), ("", None)],
)
def test_summary_and_log_filters_agree_on_the_window(filter_type, value):
    logs = sample_logs()
    window = resolve_window(filter_type, value, today=TODAY)

    narrowed_logs = filter_logs(logs, window)
    narrowed_summary = filter_summary(compute_stats(logs, today=TODAY).daily_stats, window)

    from_logs = {(e.employee_id, e.timestamp.date().isoformat()) for e in narrowed_logs}
    from_summary = {(uid, key) for uid, days in narrowed_summary.items() for key in days}
    assert from_logs == from_summary


def test_summary_filter_drops_employees_without_data():
    stats = compute_stats(sample_logs(), today=TODAY).daily_stats

    narrowed = filter_summary(stats, resolve_window("date", "2025-05-28", today=TODAY))

    assert list(narrowed) == ["1"]
    assert list(narrowed["1"]) == ["2025-05-28"]
