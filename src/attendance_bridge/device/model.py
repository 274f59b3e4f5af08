from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.constants import (
    DEFAULT_CONNECT_TIMEOUT_SECONDS,
    DEFAULT_COOLDOWN_SECONDS,
    DEFAULT_STUCK_RESET_SECONDS,
)
from ..core.enums import PunchKind


@dataclass
class DeviceSettings:
    """Terminal address; host and port may change at runtime."""

    host: str
    port: int
    password: int = 0
    force_udp: bool = False
    ommit_ping: bool = True

    def update(self, *, host: Optional[str] = None, port: Optional[int] = None) -> None:
        if host:
            self.host = str(host)
        if port:
            self.port = int(port)

    def to_dict(self) -> dict:
        return {"ip": self.host, "port": self.port}


@dataclass(frozen=True)
class CoordinatorPolicy:
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT_SECONDS
    cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS
    stuck_reset_seconds: float = DEFAULT_STUCK_RESET_SECONDS


@dataclass(frozen=True)
class CoordinatorState:
    """Snapshot of the coordinator. Times are readings of the coordinator clock."""

    busy: bool
    busy_since: Optional[float]
    cooldown_until: float


@dataclass(frozen=True)
class PunchEvent:
    """Domain entity: one raw punch read from the terminal."""

    employee_id: str
    timestamp: datetime
    kind: PunchKind
    device_serial: str
    status_code: int = 0

    @property
    def is_check_out(self) -> bool:
        return self.kind == PunchKind.CHECK_OUT


@dataclass(frozen=True)
class DeviceUser:
    uid: object
    user_id: str
    name: str
    role: int = 0
    card_no: str = ""

    def to_dict(self) -> dict:
        return {
            "uid": self.uid,
            "userId": self.user_id,
            "name": self.name,
            "role": self.role,
            "cardNo": self.card_no,
        }


@dataclass(frozen=True)
class DeviceSnapshot:
    """Attendance log plus user directory read in one device session."""

    punches: list[PunchEvent] = field(default_factory=list)
    users: list[DeviceUser] = field(default_factory=list)
    dropped_records: int = 0
