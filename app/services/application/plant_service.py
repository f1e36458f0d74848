"""
Plant Service
=============
Application-level service for plants.

Responsibilities:
- Plant CRUD with location validation
- Watering (records a ``watered`` care event)
- Derived fields on every read: ``watering_status`` and ``next_due``
- MQTT hooks after every write (fire-and-forget, never fail the request)
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from app.domain.exceptions import NotFoundError, ValidationError
from app.domain.watering import compute_status
from app.enums.common import CareEventType
from app.schemas.plants import CreatePlantRequest, UpdatePlantRequest
from app.services.application.mqtt_publisher import PlantStatePublisher
from app.utils.time import iso_z
from infrastructure.database.repositories.care_events import CareEventRepository
from infrastructure.database.repositories.locations import LocationRepository
from infrastructure.database.repositories.plants import PlantRepository

logger = logging.getLogger(__name__)


def serialize_plant(row: Dict[str, Any]) -> Dict[str, Any]:
    """Plant row plus its computed watering status and next due date."""
    plant = dict(row)
    status, next_due = compute_status(plant.get("last_watered"), int(plant["watering_interval_days"]))
    plant["watering_status"] = status.value
    plant["next_due"] = next_due.isoformat() if next_due else None
    return plant


class PlantService:
    """Application service for plant management."""

    def __init__(
        self,
        plant_repo: PlantRepository,
        location_repo: LocationRepository,
        care_repo: CareEventRepository,
        publisher: Optional[PlantStatePublisher] = None,
    ):
        self.plant_repo = plant_repo
        self.location_repo = location_repo
        self.care_repo = care_repo
        self.publisher = publisher

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_plants(self) -> List[Dict[str, Any]]:
        return [serialize_plant(row) for row in self.plant_repo.list_plants()]

    def get_plant(self, plant_id: int) -> Dict[str, Any]:
        row = self.plant_repo.get_plant(plant_id)
        if row is None:
            raise NotFoundError("Plant not found")
        return serialize_plant(row)

    def ensure_exists(self, plant_id: int) -> None:
        if self.plant_repo.get_plant(plant_id) is None:
            raise NotFoundError("Plant not found")

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_plant(self, request: CreatePlantRequest) -> Dict[str, Any]:
        fields = request.to_fields()
        self._check_location(fields.get("location_id"))
        plant_id = self.plant_repo.create_plant(**fields)
        plant = self.get_plant(plant_id)
        logger.info("Created plant %s (%s)", plant_id, plant["name"])
        self._publish_full(plant)
        return plant

    def update_plant(self, plant_id: int, request: UpdatePlantRequest) -> Dict[str, Any]:
        self.ensure_exists(plant_id)
        fields = request.to_fields()
        if "location_id" in fields:
            self._check_location(fields["location_id"])
        self.plant_repo.update_plant(plant_id, **fields)
        plant = self.get_plant(plant_id)
        self._publish_full(plant)
        return plant

    def water_plant(self, plant_id: int) -> Dict[str, Any]:
        if not self.plant_repo.touch_plant(plant_id):
            raise NotFoundError("Plant not found")
        self.care_repo.create_event(plant_id, CareEventType.WATERED.value, iso_z())
        plant = self.get_plant(plant_id)
        logger.debug("Watered plant %s", plant_id)
        if self.publisher is not None:
            self.publisher.publish_state_and_attributes(plant)
        return plant

    def delete_plant(self, plant_id: int) -> None:
        if not self.plant_repo.delete_plant(plant_id):
            raise NotFoundError("Plant not found")
        logger.info("Deleted plant %s", plant_id)
        if self.publisher is not None:
            self.publisher.remove_plant(plant_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_location(self, location_id: Optional[int]) -> None:
        if location_id is not None and self.location_repo.get_location(location_id) is None:
            raise ValidationError("Location not found")

    def _publish_full(self, plant: Dict[str, Any]) -> None:
        if self.publisher is not None:
            self.publisher.publish_plant(plant)
