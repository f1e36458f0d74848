"""MQTT API
===========

Routes:
    GET  /api/mqtt/status  Broker connection status
    POST /api/mqtt/repair  Clear orphaned retained topics and republish all plants

Repair answers 409 when MQTT is disabled and 503 when the broker is not
connected. It blocks for at least the discovery idle window.
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response

from app.blueprints.api._common import get_mqtt_service, success
from app.utils.http import safe_route

logger = logging.getLogger(__name__)

mqtt_api = Blueprint("mqtt_api", __name__)


@mqtt_api.get("/status")
@safe_route("Failed to get MQTT status")
def get_mqtt_status() -> Response:
    return success(get_mqtt_service().get_status())


@mqtt_api.post("/repair")
@safe_route("MQTT repair failed")
def post_mqtt_repair() -> Response:
    result = get_mqtt_service().trigger_repair()
    return success(result.to_dict())
