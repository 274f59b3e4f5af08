from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..device.model import DeviceSettings, DeviceUser
from ..device.normalizer import build_name_map
from ..device.repository import DeviceRepository
from .aggregator import compute_stats
from .filters import filter_logs, filter_summary, resolve_window
from .model import UnifiedAttendance

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        device: DeviceRepository,
        settings: DeviceSettings,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._device = device
        self._settings = settings
        self._clock = clock

    def get_unified_data(self, filter_type: Optional[str] = None, filter_value: Optional[str] = None) -> UnifiedAttendance:
        """Raw logs, daily summary and live status narrowed to one window.

        Summaries are computed over the full device log before narrowing, so a
        day's totals never depend on the requested window.
        """

        today = self._clock().date()
        window = resolve_window(filter_type, filter_value, today=today)

        snapshot = self._device.fetch_snapshot()
        stats = compute_stats(snapshot.punches, today=today)
        logs = filter_logs(snapshot.punches, window)
        summary = filter_summary(stats.daily_stats, window)

        logger.info(
            "Unified data for %s=%s: %d log(s), %d employee(s) summarized",
            window.type.value or "all", window.value or "*", len(logs), len(summary),
        )

        return UnifiedAttendance(
            device=self._settings.host,
            window=window,
            logs=sorted(logs, key=lambda e: e.timestamp, reverse=True),
            summary=summary,
            employee_status=stats.active_status,
            user_names=build_name_map(snapshot.users),
        )

    def list_users(self) -> Sequence[DeviceUser]:
        return self._device.list_users()

    def device_config(self) -> dict:
        return self._settings.to_dict()

    def update_device_config(self, *, host: Optional[str] = None, port: Optional[int] = None) -> dict:
        self._settings.update(host=host, port=port)
        logger.info("Device configuration updated: %s:%s", self._settings.host, self._settings.port)
        return self._settings.to_dict()
