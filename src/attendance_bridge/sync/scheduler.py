from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from apscheduler.events import EVENT_JOB_ERROR, JobExecutionEvent
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.cron import CronTrigger

from ..common.datetime_utils import date_key, now_local, yesterday_of
from ..common.validators import require_iso_date
from ..core.constants import DAILY_SYNC_HOUR, DAILY_SYNC_MINUTE, DAILY_SYNC_SECOND
from ..core.enums import SyncOutcome
from ..core.exceptions import DomainError
from ..device.coordinator import normalize_error_message
from .model import SyncResult
from .service import SyncService

logger = logging.getLogger(__name__)


class AutoSyncState:
    """Enable flag and last outcome of the daily sync, owned by the scheduler."""

    def __init__(self, enabled: bool = True):
        self._lock = threading.Lock()
        self._enabled = bool(enabled)
        self._last_attempt: Optional[datetime] = None
        self._last_result: Optional[SyncResult] = None

    @property
    def enabled(self) -> bool:
        with self._lock:
            return self._enabled

    def set_enabled(self, enabled: bool) -> bool:
        with self._lock:
            self._enabled = bool(enabled)
            return self._enabled

    def toggle(self) -> bool:
        with self._lock:
            self._enabled = not self._enabled
            return self._enabled

    @property
    def last_attempt(self) -> Optional[datetime]:
        with self._lock:
            return self._last_attempt

    @property
    def last_result(self) -> Optional[SyncResult]:
        with self._lock:
            return self._last_result

    def record_attempt(self, when: datetime) -> None:
        with self._lock:
            self._last_attempt = when

    def record_result(self, result: SyncResult) -> None:
        with self._lock:
            self._last_result = result


class DailySyncScheduler:
    JOB_ID = "daily-cloud-sync"

    def __init__(
        self,
        sync: SyncService,
        *,
        enabled: bool = True,
        scheduler: Optional[BaseScheduler] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._sync = sync
        self._state = AutoSyncState(enabled)
        self._clock = clock
        self._scheduler = scheduler or BackgroundScheduler(
            job_defaults={
                "coalesce": True,
                # A late fire still targets "yesterday"; skip it only if far too late.
                "misfire_grace_time": 3600,
            }
        )
        self._scheduler.add_listener(self._on_job_error, EVENT_JOB_ERROR)

    @property
    def state(self) -> AutoSyncState:
        return self._state

    def start(self) -> None:
        if self._scheduler.running:
            return
        self._scheduler.add_job(
            self.run_daily_sync,
            CronTrigger(hour=DAILY_SYNC_HOUR, minute=DAILY_SYNC_MINUTE, second=DAILY_SYNC_SECOND),
            id=self.JOB_ID,
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info(
            "Daily auto-sync scheduled for %02d:%02d:%02d every day",
            DAILY_SYNC_HOUR, DAILY_SYNC_MINUTE, DAILY_SYNC_SECOND,
        )

    def shutdown(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)

    def next_run_time(self) -> Optional[datetime]:
        job = self._scheduler.get_job(self.JOB_ID)
        if job is None:
            return None
        # Jobs added before start() have no computed run time yet.
        return getattr(job, "next_run_time", None)

    def set_enabled(self, enabled: Optional[bool] = None) -> bool:
        """Set the flag explicitly, or flip it when no value is given."""

        value = self._state.toggle() if enabled is None else self._state.set_enabled(enabled)
        logger.info("Auto sync %s", "enabled" if value else "disabled")
        return value

    def run_daily_sync(self, now: Optional[datetime] = None) -> SyncResult:
        """Sync local "yesterday"; also the body of the midnight job."""

        now = now or self._clock()
        target = date_key(yesterday_of(now))
        self._state.record_attempt(now)
        logger.info("Starting automated daily sync for %s", target)

        if not self._state.enabled:
            logger.info("Skipped - auto sync is disabled")
            result = SyncResult(
                outcome=SyncOutcome.SKIPPED,
                timestamp=now,
                target_date=target,
                message="Auto sync disabled",
            )
            self._state.record_result(result)
            return result

        return self._run(target)

    def sync_date(self, value: str) -> SyncResult:
        """Manual re-run for an explicit ``YYYY-MM-DD`` date; ignores the enable flag."""

        day = require_iso_date(value)
        self._state.record_attempt(self._clock())
        return self._run(date_key(day))

    def _run(self, target: str) -> SyncResult:
        try:
            result = self._sync.sync_date(target)
        except DomainError as e:
            logger.error("Error during sync for %s: %s", target, e)
            result = SyncResult(outcome=SyncOutcome.ERROR, timestamp=self._clock(), target_date=target, message=str(e))
        except Exception as e:
            # Nightly job runs unattended: an unrelated defect must not kill it.
            logger.exception("Unexpected error during sync for %s", target)
            result = SyncResult(
                outcome=SyncOutcome.ERROR,
                timestamp=self._clock(),
                target_date=target,
                message=normalize_error_message(e),
            )

        self._state.record_result(result)
        if result.outcome == SyncOutcome.SUCCESS:
            logger.info("Successfully synced %d record(s) for %s", result.record_count, target)
        elif result.outcome == SyncOutcome.SKIPPED:
            logger.info("Nothing synced for %s: %s", target, result.message)
        else:
            logger.error("Sync for %s ended with %s: %s", target, result.outcome.value, result.message)
        return result

    def status(self) -> dict:
        last_attempt = self._state.last_attempt
        last_result = self._state.last_result
        next_run = self.next_run_time()
        return {
            "enabled": self._state.enabled,
            "lastAttempt": last_attempt.isoformat() if last_attempt else None,
            "lastResult": last_result.to_dict() if last_result else None,
            "nextScheduledRun": next_run.isoformat() if next_run else None,
        }

    def _on_job_error(self, event: JobExecutionEvent) -> None:
        logger.error("Scheduled job %s crashed: %r", event.job_id, event.exception)
