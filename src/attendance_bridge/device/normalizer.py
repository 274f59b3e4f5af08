"""Ordered alias resolution for loosely-shaped device records.

Different terminal firmwares and client libraries name the same field
differently (``user_id`` vs ``uid`` vs ``userId`` ...). Each logical field has
one alias tuple; the first alias carrying a value wins. Records may be dicts
or attribute objects (pyzk returns ``Attendance``/``User`` instances).
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from ..common.datetime_utils import coerce_timestamp
from ..core.constants import DEFAULT_DEVICE_SERIAL, UNKNOWN_NAME, UNKNOWN_USER_ID
from ..core.enums import PunchKind
from .model import DeviceUser, PunchEvent

logger = logging.getLogger(__name__)

PUNCH_USER_ID_ALIASES = ("user_id", "uid", "userId", "deviceUserId")
PUNCH_TIMESTAMP_ALIASES = ("record_time", "recordTime", "timestamp")
# pyzk keeps the in/out flag in ``punch``; its ``status`` is the verify mode.
PUNCH_CODE_ALIASES = ("state", "punch", "status")
PUNCH_SERIAL_ALIASES = ("deviceSN", "device_sn", "serial")

USER_ID_ALIASES = ("userId", "user_id", "uid")
USER_NAME_ALIASES = ("name",)
USER_ROLE_ALIASES = ("role", "privilege")
USER_CARD_ALIASES = ("cardno", "card", "card_no")

CHECK_OUT_CODE = 1


def _lookup(record: Any, key: str) -> Any:
    if isinstance(record, dict):
        return record.get(key)
    return getattr(record, key, None)


def resolve_field(record: Any, aliases: Sequence[str], default: Any = None) -> Any:
    for key in aliases:
        value = _lookup(record, key)
        if value is not None and value != "":
            return value
    return default


def unwrap_records(raw: Any) -> list:
    """Accept a bare list or a ``{"data": [...]}`` envelope."""

    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return list(raw)
    data = _lookup(raw, "data")
    if isinstance(data, (list, tuple)):
        return list(data)
    return []


def _as_text(value: Any) -> str:
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return value.decode("latin1", errors="ignore")
    return str(value)


def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def punch_kind_for(code: Any) -> PunchKind:
    return PunchKind.CHECK_OUT if _as_int(code, -1) == CHECK_OUT_CODE else PunchKind.CHECK_IN


def normalize_punch(record: Any) -> Optional[PunchEvent]:
    timestamp = coerce_timestamp(resolve_field(record, PUNCH_TIMESTAMP_ALIASES))
    if timestamp is None:
        return None

    code = resolve_field(record, PUNCH_CODE_ALIASES, 0)
    return PunchEvent(
        employee_id=_as_text(resolve_field(record, PUNCH_USER_ID_ALIASES, UNKNOWN_USER_ID)),
        timestamp=timestamp,
        kind=punch_kind_for(code),
        device_serial=_as_text(resolve_field(record, PUNCH_SERIAL_ALIASES, DEFAULT_DEVICE_SERIAL)),
        status_code=_as_int(code),
    )


def normalize_punches(raw: Any) -> tuple[list[PunchEvent], int]:
    """Return (events, dropped) where dropped counts records without a usable timestamp."""

    events: list[PunchEvent] = []
    dropped = 0
    for record in unwrap_records(raw):
        event = normalize_punch(record)
        if event is None:
            dropped += 1
            continue
        events.append(event)

    if dropped:
        logger.warning("Dropped %d attendance record(s) without a readable timestamp", dropped)
    return events, dropped


def normalize_user(record: Any) -> DeviceUser:
    uid = _lookup(record, "uid")
    return DeviceUser(
        uid=uid,
        user_id=_as_text(resolve_field(record, USER_ID_ALIASES, UNKNOWN_USER_ID)),
        name=_as_text(resolve_field(record, USER_NAME_ALIASES, UNKNOWN_NAME)),
        role=_as_int(resolve_field(record, USER_ROLE_ALIASES, 0)),
        card_no=_as_text(resolve_field(record, USER_CARD_ALIASES, "")),
    )


def normalize_users(raw: Any) -> list[DeviceUser]:
    return [normalize_user(r) for r in unwrap_records(raw)]


def build_name_map(users: Iterable[DeviceUser]) -> dict[str, str]:
    return {u.user_id: u.name or UNKNOWN_NAME for u in users}
