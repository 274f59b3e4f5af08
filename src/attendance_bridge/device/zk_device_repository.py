from __future__ import annotations

from typing import Sequence

from .coordinator import DeviceAccessCoordinator
from .model import DeviceSnapshot, DeviceUser
from .normalizer import normalize_punches, normalize_users
from .repository import DeviceRepository


class ZKDeviceRepository(DeviceRepository):
    def __init__(self, coordinator: DeviceAccessCoordinator):
        self._coordinator = coordinator

    def fetch_snapshot(self) -> DeviceSnapshot:
        logs_raw, users_raw = self._coordinator.execute(lambda conn: (conn.get_attendance(), conn.get_users()))
        punches, dropped = normalize_punches(logs_raw)
        return DeviceSnapshot(punches=punches, users=normalize_users(users_raw), dropped_records=dropped)

    def list_users(self) -> Sequence[DeviceUser]:
        users_raw = self._coordinator.execute(lambda conn: conn.get_users())
        return normalize_users(users_raw)
