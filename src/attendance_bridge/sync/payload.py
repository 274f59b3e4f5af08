from __future__ import annotations

from ..attendance.model import SummaryMap
from ..core.constants import UNKNOWN_NAME


def format_hms(total_ms: int) -> str:
    total_ms = int(total_ms or 0)
    hours = total_ms // 3_600_000
    minutes = (total_ms % 3_600_000) // 60_000
    seconds = (total_ms % 60_000) // 1_000
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def build_payload(summary: SummaryMap, user_names: dict[str, str]) -> list[dict]:
    """One record per (employee, date), in the shape the HR import API expects."""

    records: list[dict] = []
    for uid, days in summary.items():
        for key, day in days.items():
            records.append(
                {
                    "employee_code_id": uid,
                    "name": user_names.get(uid) or UNKNOWN_NAME,
                    "date": key,
                    "first_Check_In": day.first_in_label,
                    "last_check_out": day.last_out_label,
                    "total_time_worked": format_hms(day.total_worked_ms),
                    "logs": [entry.to_dict() for entry in day.raw_logs],
                }
            )
    return records
