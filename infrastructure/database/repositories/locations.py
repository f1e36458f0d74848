"""
Location Repository
===================

Named places a plant can be assigned to (e.g. "Kitchen", "Balcony").
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from infrastructure.database.ops.locations import LocationOperations


class LocationRepository:
    def __init__(self, backend: LocationOperations) -> None:
        self._backend = backend

    def create_location(self, name: str) -> int:
        return self._backend.insert_location(name)

    def get_location(self, location_id: int) -> Optional[Dict[str, Any]]:
        return self._backend.get_location(location_id)

    def find_by_name(self, name: str, *, exclude_id: Optional[int] = None) -> Optional[int]:
        """Return the id of the location called *name*, ignoring *exclude_id*."""
        return self._backend.find_location_id_by_name(name, exclude_id)

    def list_locations(self) -> List[Dict[str, Any]]:
        return self._backend.get_all_locations()

    def rename_location(self, location_id: int, name: str) -> bool:
        return self._backend.rename_location(location_id, name)

    def delete_location(self, location_id: int) -> bool:
        return self._backend.delete_location(location_id)
