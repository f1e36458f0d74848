from __future__ import annotations

import atexit
import contextlib
import logging
import signal
import threading
from typing import Any

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from app.blueprints.api.care import care_api
from app.blueprints.api.locations import locations_api
from app.blueprints.api.mqtt import mqtt_api
from app.blueprints.api.plants import plants_api
from app.blueprints.api.stats import stats_api
from app.blueprints.status.routes import status_bp
from app.blueprints.ui.routes import ui_bp
from app.config import load_config, setup_logging
from app.constants import APP_VERSION
from app.extensions import init_extensions


def create_app(config_overrides: dict[str, Any] | None = None, *, bootstrap_runtime: bool = False) -> Flask:
    config = load_config()
    if config_overrides:
        for key, value in config_overrides.items():
            setattr(config, key.lower(), value)
        # Re-run validation for overridden values (topic prefix)
        config.__post_init__()

    # Configure logging early so the broker connection attempt is visible
    setup_logging(config.log_level, config.log_dir, config.debug)

    # The web client is served by ui_bp, not Flask's built-in static route
    flask_app = Flask(__name__, static_folder=None)
    flask_app.config.update(config.as_flask_config())

    init_extensions(flask_app)

    from app.services.container import ServiceContainer

    container = ServiceContainer.build(config, start_background=bootstrap_runtime)
    flask_app.config["CONTAINER"] = container
    flask_app.teardown_appcontext(container.database.close_db)

    if bootstrap_runtime:
        _register_shutdown_handlers(container)

    # Global JSON error handler for /api/ routes. Domain exceptions carry their
    # own ``http_status``; anything else becomes a generic 500.
    @flask_app.errorhandler(Exception)
    def _handle_unhandled(exc):
        if not request.path.startswith("/api/"):
            if isinstance(exc, HTTPException):
                return exc
            raise exc
        from app.domain.exceptions import FlowlError
        from app.utils.http import error_response, safe_error

        if isinstance(exc, HTTPException):
            status = int(exc.code or 500)
            if status >= 500:
                return safe_error(exc, status, context="http-exception")
            return error_response(exc.description or "Request failed", status)

        if isinstance(exc, FlowlError):
            status = exc.http_status
            if not exc.expose_message:
                return safe_error(exc, status, context=type(exc).__name__)
            return error_response(str(exc) or "Request failed", status)

        return safe_error(exc, 500, context="unhandled")

    flask_app.register_blueprint(plants_api, url_prefix="/api/plants")
    flask_app.register_blueprint(locations_api, url_prefix="/api/locations")
    flask_app.register_blueprint(care_api, url_prefix="/api/care")
    flask_app.register_blueprint(stats_api, url_prefix="/api/stats")
    flask_app.register_blueprint(mqtt_api, url_prefix="/api/mqtt")
    flask_app.register_blueprint(status_bp)
    # Catch-all SPA fallback goes last
    flask_app.register_blueprint(ui_bp)

    for bp_name in flask_app.blueprints:
        logging.debug("Registered blueprint: %s", bp_name)

    logger = logging.getLogger(__name__)
    logger.info(
        "Flowl %s initialized (database=%s, mqtt=%s)",
        APP_VERSION,
        config.database_path,
        container.mqtt_service.broker_address if config.mqtt_enabled else "disabled",
    )

    return flask_app


def _register_shutdown_handlers(container) -> None:
    """Stop the reconciler, the broker connection and the database on exit."""
    shutdown_lock = threading.Lock()
    shutdown_done = False

    def _graceful_shutdown(reason: str = "unknown") -> None:
        nonlocal shutdown_done
        with shutdown_lock:
            if shutdown_done:
                return
            shutdown_done = True
        logging.info("Graceful shutdown initiated (%s)", reason)
        try:
            container.shutdown()
        except Exception as exc:
            logging.warning("Error during graceful shutdown: %s", exc)

    def _signal_handler(signum: int, _frame: object) -> None:
        sig_name = signal.Signals(signum).name
        logging.info("Received %s, shutting down", sig_name)
        _graceful_shutdown(sig_name)
        raise SystemExit(0)

    atexit.register(_graceful_shutdown, "atexit")

    # SIGINT for Ctrl-C, SIGTERM for container stop
    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(OSError, ValueError):
            signal.signal(sig, _signal_handler)


__all__ = ["create_app"]
