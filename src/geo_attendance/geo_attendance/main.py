from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.datetime_utils import Clock
from .common.web import error_response
from .container import build_container
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, list_tables, seed_demo_users
from .payroll.controller import register as register_payroll
from .settings import get_settings_module, load_settings
from .users.controller import register as register_users


def create_app(settings_module: str | None = None, *, clock: Clock | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = load_settings(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    container = build_container(settings, clock=clock)
    app.extensions["geo_attendance"] = container

    if app.config["DEBUG"]:
        app.logger.info("settings=%s backend=%s", settings_module, getattr(settings, "STORAGE_BACKEND", "-"))

    if container.conn is not None and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(container.conn)
        if app.config["DEBUG"]:
            app.logger.info("schema ready (tables=%s)", len(list_tables(container.conn)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        seed_demo_users(container.users_repo)

    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        return error_response(error)

    register_users(app, container)
    register_attendance(app, container)
    register_payroll(app, container)

    return app


def run() -> None:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    app = create_app()
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5000")))


if __name__ == "__main__":
    run()
