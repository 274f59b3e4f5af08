from __future__ import annotations

import logging
from typing import Optional

from ..attendance.service import AttendanceService
from ..common.datetime_utils import date_key
from ..common.validators import require_iso_date
from ..core.enums import FilterType
from .dispatcher import CloudSyncDispatcher
from .model import SyncResult
from .payload import build_payload

logger = logging.getLogger(__name__)


class SyncService:
    def __init__(self, attendance: AttendanceService, dispatcher: CloudSyncDispatcher):
        self._attendance = attendance
        self._dispatcher = dispatcher

    def sync_window(self, filter_type: Optional[str] = None, filter_value: Optional[str] = None) -> SyncResult:
        """Read, aggregate and push one filter window.

        Device and validation errors propagate to the caller unchanged.
        """

        unified = self._attendance.get_unified_data(filter_type, filter_value)
        payload = build_payload(unified.summary, unified.user_names)
        target = unified.window.value if unified.window.type == FilterType.DATE else None
        return self._dispatcher.dispatch(payload, target_date=target)

    def sync_date(self, value: str) -> SyncResult:
        day = require_iso_date(value)
        logger.info("Sync requested for date %s", date_key(day))
        return self.sync_window(FilterType.DATE.value, date_key(day))
