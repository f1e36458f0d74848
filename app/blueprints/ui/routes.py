"""Serves the bundled single-page web client.

Unknown non-API paths fall back to ``index.html`` so client-side routing
survives a browser refresh.
"""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Blueprint, abort, current_app, send_from_directory
from werkzeug.exceptions import NotFound

ui_bp = Blueprint("ui", __name__)
logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"


def _static_dir() -> Path:
    return Path(current_app.config["STATIC_DIR"])


def _send_index():
    static_dir = _static_dir()
    if not (static_dir / INDEX_FILE).is_file():
        logger.debug("No web client bundle at %s", static_dir)
        abort(404)
    return send_from_directory(static_dir, INDEX_FILE)


@ui_bp.get("/")
def index():
    return _send_index()


@ui_bp.get("/<path:path>")
def spa(path: str):
    if path == "api" or path.startswith("api/"):
        abort(404)
    static_dir = _static_dir()
    try:
        return send_from_directory(static_dir, path)
    except NotFound:
        return _send_index()
