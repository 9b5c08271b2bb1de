from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .accounts.controller import register as register_accounts
from .attendance.controller import register as register_attendance
from .common.web import AppJSONProvider, register_error_handlers
from .container import Container, build_container
from .database.bootstrap import ensure_demo_admin, ensure_indexes, list_collections, seed_reference_lists
from .employees.controller import register as register_employees
from .jobs.controller import register as register_jobs
from .leave.controller import register as register_leave
from .payroll.controller import register as register_payroll
from .settings.controller import register as register_settings
from .system_log.controller import register as register_system_log


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)
    app.json = AppJSONProvider(app)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["APP_BASE_URL"] = getattr(settings, "APP_BASE_URL", "http://localhost:5000")
    mongo_config = dict(getattr(settings, "MONGO_CONFIG"))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if app.config["DEBUG"]:
        print("[hr-assistant] settings=", settings_module, " mongo=", f"{mongo_config.get('uri')}/{mongo_config.get('database')}")

    if container is None:
        container = build_container(
            mongo_config=mongo_config,
            base_url=app.config["APP_BASE_URL"],
            mail_config=getattr(settings, "MAIL_CONFIG", None),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            ensure_indexes(container.conn)
            if app.config["DEBUG"]:
                print(f"[hr-assistant] indexes ready (collections={len(list_collections(container.conn))})")
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            seed_reference_lists(container.conn)
            ensure_demo_admin(container.conn)
            if app.config["DEBUG"]:
                print("[hr-assistant] demo seed ready")

    app.extensions["container"] = container
    register_error_handlers(app)

    register_accounts(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_leave(app, container)
    register_payroll(app, container)
    register_jobs(app, container)
    register_settings(app, container)
    register_system_log(app, container)

    return app
