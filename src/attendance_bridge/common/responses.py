"""Uniform JSON envelope shared by every controller.

Success: ``{"success": true, ...payload}``; failure: ``{"success": false, "message": ...}``.
"""
from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    CloudError,
    DeviceBusyError,
    DeviceCommunicationError,
    DeviceCooldownError,
    DomainError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def ok(**payload):
    return jsonify({"success": True, **payload})


def fail(message: str, status: int = 500, **extra):
    return jsonify({"success": False, "message": message, **extra}), status


def status_for(error: DomainError) -> int:
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, (DeviceBusyError, DeviceCooldownError)):
        return 503
    if isinstance(error, (DeviceCommunicationError, CloudError)):
        return 502
    return 500


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        extra = {}
        if isinstance(e, DeviceCooldownError):
            extra["retryAfter"] = e.remaining_seconds
        return fail(str(e), status_for(e), **extra)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error while serving request")
        if bool(app.config.get("DEBUG", False)):
            return fail(f"Internal error: {e}", 500)
        return fail("Internal error", 500)
