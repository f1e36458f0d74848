from __future__ import annotations

from flask import Blueprint, jsonify

from app.constants import APP_LICENSE, APP_REPOSITORY, APP_VERSION
from app.utils.http import success_response

status_bp = Blueprint("status", __name__)


@status_bp.get("/health")
def health():
    # Liveness probe for container orchestrators; stays outside the envelope
    return jsonify({"status": "ok"}), 200


@status_bp.get("/api/info")
def info():
    return success_response(
        {
            "version": APP_VERSION,
            "repository": APP_REPOSITORY,
            "license": APP_LICENSE,
        }
    )
