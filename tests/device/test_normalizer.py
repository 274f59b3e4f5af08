from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace

from attendance_bridge.common.datetime_utils import coerce_timestamp
from attendance_bridge.core.enums import PunchKind
from attendance_bridge.device.normalizer import (
    build_name_map,
    normalize_punch,
    normalize_punches,
    normalize_user,
    normalize_users,
    resolve_field,
    unwrap_records,
)


def test_resolve_field_uses_alias_order_and_skips_blanks():
    record = {"user_id": "", "uid": None, "userId": "42", "deviceUserId": "99"}
    assert resolve_field(record, ("user_id", "uid", "userId", "deviceUserId")) == "42"
    assert resolve_field({}, ("a", "b"), "fallback") == "fallback"


def test_js_date_string_is_parsed_with_its_offset():
    parsed = coerce_timestamp("Mon Jun 02 2025 08:58:04 GMT+0500 (Pakistan Standard Time)")

    expected = datetime(2025, 6, 2, 3, 58, 4, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    assert parsed == expected


def test_coerce_timestamp_accepts_naive_datetime_and_rejects_garbage():
    moment = datetime(2025, 6, 2, 9, 0)
    assert coerce_timestamp(moment) == moment
    assert coerce_timestamp("garbage") is None
    assert coerce_timestamp(None) is None


def test_epoch_milliseconds_and_seconds_agree():
    assert coerce_timestamp(1748854684000) == coerce_timestamp(1748854684)


def test_js_style_record_is_normalized():
    event = normalize_punch({"user_id": "7", "record_time": "2025-06-02T17:30:00", "state": 1, "deviceSN": "CKJX1"})

    assert event.employee_id == "7"
    assert event.timestamp == datetime(2025, 6, 2, 17, 30)
    assert event.kind == PunchKind.CHECK_OUT
    assert event.device_serial == "CKJX1"


def test_pyzk_record_uses_punch_flag_not_verify_status():
    record = SimpleNamespace(user_id="12", uid=3, timestamp=datetime(2025, 6, 2, 9, 0), status=1, punch=0)

    event = normalize_punch(record)

    assert event.kind == PunchKind.CHECK_IN
    assert event.employee_id == "12"
    assert event.device_serial == "ZK-Device"


def test_missing_fields_get_defaults_and_unreadable_timestamps_are_dropped():
    events, dropped = normalize_punches(
        {
            "data": [
                {"recordTime": "2025-06-02 09:00:00"},
                {"user_id": "1", "timestamp": "garbage"},
            ]
        }
    )

    assert dropped == 1
    assert len(events) == 1
    assert events[0].employee_id == "N/A"
    assert events[0].kind == PunchKind.CHECK_IN


def test_out_of_range_epoch_is_dropped_not_raised():
    assert coerce_timestamp(1e20) is None

    events, dropped = normalize_punches(
        [
            {"user_id": "1", "record_time": 1e20, "state": 0},
            {"user_id": "1", "record_time": "2025-06-02 09:00:00", "state": 0},
        ]
    )

    assert dropped == 1
    assert [e.timestamp for e in events] == [datetime(2025, 6, 2, 9, 0)]


def test_unwrap_records_handles_lists_envelopes_and_none():
    assert unwrap_records([1, 2]) == [1, 2]
    assert unwrap_records({"data": [3]}) == [3]
    assert unwrap_records({"unexpected": True}) == []
    assert unwrap_records(None) == []


def test_users_are_normalized_from_both_library_shapes():
    pyzk_user = SimpleNamespace(uid=1, user_id="12", name=b"Ayesha", privilege=14, card=0)
    js_user = {"uid": 2, "userId": "13", "role": 0, "cardno": "5512"}

    users = normalize_users([pyzk_user, js_user])

    assert users[0].user_id == "12"
    assert users[0].name == "Ayesha"
    assert users[0].role == 14
    assert users[0].card_no == "0"
    assert users[1].name == "Unknown"
    assert users[1].card_no == "5512"
    assert build_name_map(users) == {"12": "Ayesha", "13": "Unknown"}


def test_user_to_dict_matches_front_end_shape():
    user = normalize_user({"uid": 4, "user_id": "40", "name": "Bilal"})

    assert user.to_dict() == {"uid": 4, "userId": "40", "name": "Bilal", "role": 0, "cardNo": ""}
