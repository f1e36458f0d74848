"""
Care Event Repository
=====================

Repository for the care journal (watered, fertilized, repotted, pruned, custom).
A plant's ``last_watered`` is derived from these rows, never stored.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from infrastructure.database.ops.care_events import CareEventOperations


class CareEventRepository:
    """Repository for care event operations."""

    def __init__(self, backend: CareEventOperations) -> None:
        self._backend = backend

    def create_event(
        self,
        plant_id: int,
        event_type: str,
        occurred_at: str,
        notes: Optional[str] = None,
    ) -> int:
        return self._backend.insert_care_event(plant_id, event_type, occurred_at, notes)

    def get_event(self, event_id: int) -> Optional[Dict[str, Any]]:
        return self._backend.get_care_event(event_id)

    def list_for_plant(self, plant_id: int) -> List[Dict[str, Any]]:
        return self._backend.get_care_events_for_plant(plant_id)

    def list_page(
        self,
        *,
        limit: int,
        before: Optional[int] = None,
        event_type: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Fetch one page of the global feed, newest first.

        Args:
            limit: Maximum rows to return.
            before: Only events with an id lower than this cursor.
            event_type: Only events of this type.
        """
        return self._backend.get_care_events_page(limit, before, event_type)

    def delete_event(self, plant_id: int, event_id: int) -> bool:
        return self._backend.delete_care_event(plant_id, event_id)

    def count_events(self) -> int:
        return self._backend.count_care_events()
