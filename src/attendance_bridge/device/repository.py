from __future__ import annotations

from typing import Protocol, Sequence

from .model import DeviceSnapshot, DeviceUser


class DeviceRepository(Protocol):
    def fetch_snapshot(self) -> DeviceSnapshot:
        """Attendance log and user directory, read in a single device session."""

        raise NotImplementedError

    def list_users(self) -> Sequence[DeviceUser]:
        raise NotImplementedError
