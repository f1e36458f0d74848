"""Collection statistics: ``GET /api/stats``."""

from __future__ import annotations

from flask import Blueprint, Response

from app.blueprints.api._common import get_stats_service, success
from app.utils.http import safe_route

stats_api = Blueprint("stats_api", __name__)


@stats_api.get("")
@safe_route("Failed to get stats")
def get_stats() -> Response:
    return success(get_stats_service().get_stats())
