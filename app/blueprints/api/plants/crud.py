"""
Plant CRUD Operations
=====================

Endpoints for creating, reading, updating, watering and deleting plants.
Every write also pushes the plant's state to MQTT when it is enabled.
"""

from __future__ import annotations

import logging

from flask import Response

from app.blueprints.api._common import (
    deleted as _deleted,
    get_plant_service as _plant_service,
    parse_body as _parse_body,
    success as _success,
)
from app.schemas.plants import CreatePlantRequest, UpdatePlantRequest
from app.utils.http import safe_route

from . import plants_api

logger = logging.getLogger("plants_api.crud")


# ============================================================================
# PLANT CRUD OPERATIONS
# ============================================================================


@plants_api.get("")
@safe_route("Failed to list plants")
def list_plants() -> Response:
    """List all plants ordered by name"""
    plants = _plant_service().list_plants()
    logger.debug("Found %s plants", len(plants))
    return _success(plants)


@plants_api.post("")
@safe_route("Failed to create plant")
def create_plant() -> Response:
    """Create a plant"""
    body = _parse_body(CreatePlantRequest)
    plant = _plant_service().create_plant(body)
    return _success(plant, 201)


@plants_api.get("/<int:plant_id>")
@safe_route("Failed to get plant")
def get_plant(plant_id: int) -> Response:
    """Get a specific plant by ID"""
    return _success(_plant_service().get_plant(plant_id))


@plants_api.put("/<int:plant_id>")
@safe_route("Failed to update plant")
def update_plant(plant_id: int) -> Response:
    """Partially update a plant; explicit nulls clear optional fields"""
    body = _parse_body(UpdatePlantRequest)
    plant = _plant_service().update_plant(plant_id, body)
    logger.info("Updated plant %s", plant_id)
    return _success(plant)


@plants_api.post("/<int:plant_id>/water")
@safe_route("Failed to water plant")
def water_plant(plant_id: int) -> Response:
    """Record a watering now"""
    return _success(_plant_service().water_plant(plant_id))


@plants_api.delete("/<int:plant_id>")
@safe_route("Failed to delete plant")
def delete_plant(plant_id: int) -> Response:
    _plant_service().delete_plant(plant_id)
    return _deleted()
