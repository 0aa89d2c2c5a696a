from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .common.logging_utils import configure_logging
from .container import Container, build_container
from .dashboard.controller import register as register_dashboard
from .students.controller import register as register_students

logger = logging.getLogger(__name__)


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    store_config = getattr(settings, "STORE_CONFIG")
    logger.info("settings=%s store=%s", settings_module, store_config.get("base_url"))

    if container is None:
        container = build_container(
            store_config=store_config,
            auth_config=getattr(settings, "AUTH_CONFIG"),
            report_config=getattr(settings, "REPORT_CONFIG", None),
            batch_max_workers=int(getattr(settings, "BATCH_MAX_WORKERS", 8)),
        )
    app.extensions["attendance_dashboard"] = container

    register_auth(app, container)
    register_dashboard(app, container)
    register_students(app, container)
    register_attendance(app, container)

    return app
