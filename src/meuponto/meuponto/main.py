from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import error_json
from .container import build_container
from .core.exceptions import DomainError, ValidationError
from .employment.controller import register as register_employment
from .punches.controller import register as register_punches
from .summary.controller import register as register_summary
from .timebank.controller import register as register_timebank
from .workcalendar.controller import register as register_calendar

logger = logging.getLogger(__name__)


def create_app(container=None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("meuponto starting with settings=%s", settings_module)

    if container is None:
        container = build_container(
            default_rules=getattr(settings, "DEFAULT_RULES", {}),
            trust_client_clock=bool(getattr(settings, "TRUST_CLIENT_CLOCK", False)),
        )
    app.extensions["meuponto"] = container

    @app.errorhandler(ValidationError)
    def handle_validation(e: ValidationError):
        return error_json(str(e), 400)

    @app.errorhandler(DomainError)
    def handle_domain(e: DomainError):
        logger.warning("Domain error: %s", e)
        return error_json(str(e), 422)

    register_employment(app, container)
    register_calendar(app, container)
    register_punches(app, container)
    register_summary(app, container)
    register_timebank(app, container)

    return app
