from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging_config import configure_logging
from .common.responses import register_error_handlers
from .container import Container, build_container
from .sync.controller import register as register_sync

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info("settings=%s", settings_module)

    if container is None:
        container = build_container(settings)
        logger.info(
            "device=%s:%s cloud=%s",
            container.device_settings.host, container.device_settings.port, container.dispatcher.endpoint.host,
        )
    app.extensions["attendance_bridge"] = container

    register_error_handlers(app)
    register_attendance(app, container)
    register_sync(app, container)

    if bool(getattr(settings, "SCHEDULER_AUTOSTART", False)):
        container.daily_scheduler.start()

    return app
