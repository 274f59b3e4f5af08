from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..core.enums import SyncOutcome
from ..core.exceptions import CloudRejectedError


@dataclass(frozen=True)
class CloudEndpoint:
    host: str
    fallback_ip: str
    path: str
    timeout: float = 30

    @property
    def primary_url(self) -> str:
        return f"https://{self.host}{self.path}"

    @property
    def fallback_url(self) -> str:
        return f"https://{self.fallback_ip}{self.path}"


@dataclass(frozen=True)
class DeliveryResponse:
    status_code: int
    body: str
    via_fallback: bool = False

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def raise_for_status(self) -> None:
        if not self.ok:
            raise CloudRejectedError(self.status_code, self.body)

    def json_body(self) -> Any:
        try:
            return json.loads(self.body)
        except (TypeError, ValueError):
            return {"raw": self.body}


@dataclass(frozen=True)
class SyncResult:
    """Outcome of one cloud sync, kept in memory for the status endpoint."""

    outcome: SyncOutcome
    timestamp: datetime
    target_date: Optional[str] = None
    record_count: int = 0
    http_status: Optional[int] = None
    response: Any = None
    message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome == SyncOutcome.SUCCESS

    def to_dict(self) -> dict:
        return {
            "date": self.timestamp.isoformat(),
            "targetDate": self.target_date,
            "status": self.outcome.value,
            "recordsSynced": self.record_count,
            "httpStatus": self.http_status,
            "response": self.response,
            "message": self.message,
        }
