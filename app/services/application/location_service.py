"""
Location Service
================
Named locations with unique names. Deleting a location keeps its plants.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from app.domain.exceptions import ConflictError, NotFoundError
from infrastructure.database.repositories.locations import LocationRepository

logger = logging.getLogger(__name__)


class LocationService:
    def __init__(self, location_repo: LocationRepository):
        self.location_repo = location_repo

    def list_locations(self) -> List[Dict[str, Any]]:
        return self.location_repo.list_locations()

    def create_location(self, name: str) -> Dict[str, Any]:
        if self.location_repo.find_by_name(name) is not None:
            raise ConflictError(f"Location '{name}' already exists")
        location_id = self.location_repo.create_location(name)
        logger.info("Created location %s (%s)", location_id, name)
        return {"id": location_id, "name": name}

    def rename_location(self, location_id: int, name: str) -> Dict[str, Any]:
        if self.location_repo.get_location(location_id) is None:
            raise NotFoundError("Location not found")
        if self.location_repo.find_by_name(name, exclude_id=location_id) is not None:
            raise ConflictError(f"Location '{name}' already exists")
        self.location_repo.rename_location(location_id, name)
        return {"id": location_id, "name": name}

    def delete_location(self, location_id: int) -> None:
        if not self.location_repo.delete_location(location_id):
            raise NotFoundError("Location not found")
        logger.info("Deleted location %s", location_id)
