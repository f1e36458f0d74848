"""
Care Service
============
The care journal: per-plant history, the global feed and event recording.

Recording or deleting a ``watered`` event changes the plant's watering
status; the reconciler picks that up on its next tick.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from app.domain.exceptions import NotFoundError, ValidationError
from app.schemas.care import CareFeedQuery, CreateCareEventRequest
from app.utils.time import coerce_datetime, iso_z
from infrastructure.database.repositories.care_events import CareEventRepository
from infrastructure.database.repositories.plants import PlantRepository

logger = logging.getLogger(__name__)


class CareService:
    def __init__(self, care_repo: CareEventRepository, plant_repo: PlantRepository):
        self.care_repo = care_repo
        self.plant_repo = plant_repo

    def _ensure_plant(self, plant_id: int) -> None:
        if self.plant_repo.get_plant(plant_id) is None:
            raise NotFoundError("Plant not found")

    def list_for_plant(self, plant_id: int) -> List[Dict[str, Any]]:
        self._ensure_plant(plant_id)
        return self.care_repo.list_for_plant(plant_id)

    def record_event(self, plant_id: int, request: CreateCareEventRequest) -> Dict[str, Any]:
        self._ensure_plant(plant_id)

        if request.occurred_at is None:
            occurred_at = iso_z()
        else:
            parsed = coerce_datetime(request.occurred_at)
            if parsed is None:
                raise ValidationError(f"Invalid occurred_at '{request.occurred_at}'")
            occurred_at = iso_z(parsed)

        event_id = self.care_repo.create_event(
            plant_id, request.event_type.value, occurred_at, request.notes
        )
        logger.debug("Recorded %s for plant %s", request.event_type, plant_id)
        return self.care_repo.get_event(event_id)

    def delete_event(self, plant_id: int, event_id: int) -> None:
        if not self.care_repo.delete_event(plant_id, event_id):
            raise NotFoundError("Care event not found")

    def feed(self, query: CareFeedQuery) -> Dict[str, Any]:
        """One page of the global feed: ``{"events": [...], "has_more": bool}``."""
        event_type = query.type.value if query.type else None
        events = self.care_repo.list_page(limit=query.limit + 1, before=query.before, event_type=event_type)
        has_more = len(events) > query.limit
        return {"events": events[: query.limit], "has_more": has_more}
