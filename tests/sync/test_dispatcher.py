from __future__ import annotations

import json
from datetime import datetime

import pytest
import requests

from attendance_bridge.core.enums import SyncOutcome
from attendance_bridge.core.exceptions import CloudTransmissionError
from attendance_bridge.sync.dispatcher import CloudSyncDispatcher
from attendance_bridge.sync.model import CloudEndpoint

ENDPOINT = CloudEndpoint(host="hr.example.test", fallback_ip="203.0.113.10", path="/api/import-attendance", timeout=5)
PAYLOAD = [{"employee_code_id": "1", "date": "2025-06-02", "total_time_worked": "08:30:00"}]


class FakeResponse:
    def __init__(self, status_code: int, text: str = ""):
        self.status_code = status_code
        self.text = text


class FakeSession:
    """Replays scripted outcomes in order; exceptions are raised."""

    def __init__(self, *outcomes):
        self._outcomes = list(outcomes)
        self.calls: list[dict] = []

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def dispatcher_with(session: FakeSession) -> CloudSyncDispatcher:
    return CloudSyncDispatcher(ENDPOINT, session=session, clock=lambda: datetime(2025, 6, 3, 0, 0, 2))


def test_primary_success_makes_a_single_verified_call():
    session = FakeSession(FakeResponse(200, '{"imported": 1}'))

    result = dispatcher_with(session).dispatch(PAYLOAD, target_date="2025-06-02")

    assert result.outcome == SyncOutcome.SUCCESS
    assert result.http_status == 200
    assert result.record_count == 1
    assert result.response == {"imported": 1}
    assert len(session.calls) == 1
    call = session.calls[0]
    assert call["url"] == "https://hr.example.test/api/import-attendance"
    assert call.get("verify", True) is True
    assert json.loads(call["data"]) == PAYLOAD
    assert call["headers"]["Content-Type"] == "application/json"


def test_refused_primary_falls_back_once_to_pinned_ip_with_host_header():
    session = FakeSession(
        requests.exceptions.ConnectionError("[Errno 111] Connection refused"),
        FakeResponse(201, "created"),
    )

    result = dispatcher_with(session).dispatch(PAYLOAD, target_date="2025-06-02")

    assert result.outcome == SyncOutcome.SUCCESS
    assert result.response == {"raw": "created"}
    assert len(session.calls) == 2
    fallback = session.calls[1]
    assert fallback["url"] == "https://203.0.113.10/api/import-attendance"
    assert fallback["headers"]["Host"] == "hr.example.test"
    assert fallback["verify"] is False
    assert session.calls[0].get("verify", True) is True


def test_completed_non_2xx_is_never_retried():
    session = FakeSession(FakeResponse(500, '{"error": "db down"}'))

    result = dispatcher_with(session).dispatch(PAYLOAD, target_date="2025-06-02")

    assert result.outcome == SyncOutcome.FAILED
    assert result.http_status == 500
    assert result.response == {"error": "db down"}
    assert "500" in result.message
    assert len(session.calls) == 1


def test_transport_failure_on_both_attempts_is_an_error():
    session = FakeSession(
        requests.exceptions.ConnectionError("Name or service not known"),
        requests.exceptions.ConnectTimeout("timed out"),
    )

    result = dispatcher_with(session).dispatch(PAYLOAD, target_date="2025-06-02")

    assert result.outcome == SyncOutcome.ERROR
    assert result.http_status is None
    assert "Name or service not known" in result.message
    assert "timed out" in result.message
    assert len(session.calls) == 2


def test_deliver_raises_transmission_error_when_both_fail():
    session = FakeSession(requests.exceptions.SSLError("bad handshake"), requests.exceptions.ReadTimeout("slow"))

    with pytest.raises(CloudTransmissionError) as exc:
        dispatcher_with(session).deliver(PAYLOAD)

    assert exc.value.primary_error == "bad handshake"
    assert exc.value.fallback_error == "slow"


def test_empty_payload_is_skipped_without_network():
    session = FakeSession()

    result = dispatcher_with(session).dispatch([], target_date="2025-06-02")

    assert result.outcome == SyncOutcome.SKIPPED
    assert result.record_count == 0
    assert session.calls == []
