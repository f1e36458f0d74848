"""Locations API
================

Routes:
    GET    /api/locations       List locations ordered by name
    POST   /api/locations       Create a location (409 on duplicate name)
    PUT    /api/locations/<id>  Rename a location
    DELETE /api/locations/<id>  Delete a location; its plants become unassigned
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response

from app.blueprints.api._common import deleted, get_location_service, parse_body, success
from app.schemas.locations import LocationRequest
from app.utils.http import safe_route

logger = logging.getLogger(__name__)

locations_api = Blueprint("locations_api", __name__)


@locations_api.get("")
@safe_route("Failed to list locations")
def list_locations() -> Response:
    return success(get_location_service().list_locations())


@locations_api.post("")
@safe_route("Failed to create location")
def create_location() -> Response:
    body = parse_body(LocationRequest)
    return success(get_location_service().create_location(body.name), 201)


@locations_api.put("/<int:location_id>")
@safe_route("Failed to update location")
def update_location(location_id: int) -> Response:
    body = parse_body(LocationRequest)
    return success(get_location_service().rename_location(location_id, body.name))


@locations_api.delete("/<int:location_id>")
@safe_route("Failed to delete location")
def delete_location(location_id: int) -> Response:
    get_location_service().delete_location(location_id)
    return deleted()
