"""
Plant Repository
================

Repository for plant operations.

Responsibilities:
- Plant CRUD operations (create, read, update, delete)
- Read-only snapshots consumed by MQTT reconciliation and repair
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Set

from infrastructure.database.ops.plants import PlantOperations


class PlantRepository:
    """Repository for plant operations."""

    def __init__(self, backend: PlantOperations) -> None:
        self._backend = backend

    # Plant CRUD Operations ----------------------------------------------------
    def create_plant(
        self,
        *,
        name: str,
        icon: str,
        watering_interval_days: int,
        light_needs: str,
        species: Optional[str] = None,
        location_id: Optional[int] = None,
        difficulty: Optional[str] = None,
        pet_safety: Optional[str] = None,
        growth_speed: Optional[str] = None,
        soil_type: Optional[str] = None,
        soil_moisture: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """
        Create a new plant.

        Returns:
            The new plant ID.
        """
        return self._backend.insert_plant(
            name=name,
            species=species,
            icon=icon,
            location_id=location_id,
            watering_interval_days=watering_interval_days,
            light_needs=light_needs,
            difficulty=difficulty,
            pet_safety=pet_safety,
            growth_speed=growth_speed,
            soil_type=soil_type,
            soil_moisture=soil_moisture,
            notes=notes,
        )

    def get_plant(self, plant_id: int) -> Optional[Dict[str, Any]]:
        """Get plant by ID, joined with its location name and last watering."""
        return self._backend.get_plant(plant_id)

    def list_plants(self) -> List[Dict[str, Any]]:
        """List all plants ordered by name."""
        return self._backend.get_all_plants()

    def update_plant(self, plant_id: int, **fields: Any) -> bool:
        """Write the given columns; returns False when the plant does not exist."""
        return self._backend.update_plant(plant_id, **fields)

    def touch_plant(self, plant_id: int) -> bool:
        return self._backend.touch_plant(plant_id)

    def delete_plant(self, plant_id: int) -> bool:
        return self._backend.delete_plant(plant_id)

    def count_plants(self) -> int:
        return self._backend.count_plants()

    # Sync snapshots ------------------------------------------------------------
    def list_plant_ids(self) -> Set[int]:
        return self._backend.get_plant_ids()

    def list_plants_for_sync(self) -> List[Dict[str, Any]]:
        """``id``, ``name``, ``watering_interval_days`` and ``last_watered`` per plant."""
        return self._backend.get_plants_for_sync()
