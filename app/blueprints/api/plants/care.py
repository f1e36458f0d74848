"""
Plant Care Journal
==================

Per-plant care events. The global feed lives in ``app.blueprints.api.care``.
"""

from __future__ import annotations

import logging

from flask import Response

from app.blueprints.api._common import (
    deleted as _deleted,
    get_care_service as _care_service,
    parse_body as _parse_body,
    success as _success,
)
from app.schemas.care import CreateCareEventRequest
from app.utils.http import safe_route

from . import plants_api

logger = logging.getLogger("plants_api.care")


@plants_api.get("/<int:plant_id>/care")
@safe_route("Failed to list care events")
def list_care_events(plant_id: int) -> Response:
    """Care events for one plant, newest first"""
    return _success(_care_service().list_for_plant(plant_id))


@plants_api.post("/<int:plant_id>/care")
@safe_route("Failed to record care event")
def create_care_event(plant_id: int) -> Response:
    body = _parse_body(CreateCareEventRequest)
    event = _care_service().record_event(plant_id, body)
    return _success(event, 201)


@plants_api.delete("/<int:plant_id>/care/<int:event_id>")
@safe_route("Failed to delete care event")
def delete_care_event(plant_id: int, event_id: int) -> Response:
    _care_service().delete_event(plant_id, event_id)
    return _deleted()
