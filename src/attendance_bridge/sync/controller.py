from __future__ import annotations

import logging

from flask import Flask, request

from ..common.responses import fail, ok
from ..common.validators import require_json_object
from ..container import Container
from ..core.enums import SyncOutcome
from .model import SyncResult

logger = logging.getLogger(__name__)


def _sync_response(result: SyncResult, **extra):
    if result.outcome == SyncOutcome.SKIPPED:
        return fail(result.message or "No data to sync", 200, **extra)
    if result.outcome == SyncOutcome.ERROR:
        return fail(result.message or "Cloud sync error", 502, **extra)

    extra.update(
        recordsSynced=result.record_count,
        externalStatus=result.http_status,
        externalResponse=result.response,
    )
    if result.succeeded:
        return ok(**extra)
    return fail(result.message or "Cloud sync failed", 502, **extra)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sync", methods=["POST"], endpoint="api_sync")
    def api_sync():
        data = require_json_object(request.get_json(silent=True))
        result = container.sync_service.sync_window(data.get("type"), data.get("value"))
        return _sync_response(result)

    @app.route("/api/auto-sync/status", methods=["GET"], endpoint="api_auto_sync_status")
    def api_auto_sync_status():
        return ok(**container.daily_scheduler.status())

    @app.route("/api/auto-sync/toggle", methods=["POST"], endpoint="api_auto_sync_toggle")
    def api_auto_sync_toggle():
        data = require_json_object(request.get_json(silent=True))
        enabled = data.get("enabled")
        value = container.daily_scheduler.set_enabled(enabled if isinstance(enabled, bool) else None)
        return ok(enabled=value)

    @app.route("/api/auto-sync/run-now", methods=["POST"], endpoint="api_auto_sync_run_now")
    def api_auto_sync_run_now():
        logger.info("Manual auto-sync triggered via API")
        result = container.daily_scheduler.run_daily_sync()
        return ok(result=result.to_dict())

    @app.route("/api/auto-sync/sync-date", methods=["POST"], endpoint="api_auto_sync_sync_date")
    def api_auto_sync_sync_date():
        data = require_json_object(request.get_json(silent=True))
        date_value = data.get("date")
        logger.info("Manual sync triggered for date: %s", date_value)
        result = container.daily_scheduler.sync_date(date_value)
        return _sync_response(result, date=result.target_date)
