"""Collection-wide counters for the dashboard."""
from __future__ import annotations

from typing import Dict

from infrastructure.database.repositories.care_events import CareEventRepository
from infrastructure.database.repositories.plants import PlantRepository


class StatsService:
    def __init__(self, plant_repo: PlantRepository, care_repo: CareEventRepository):
        self.plant_repo = plant_repo
        self.care_repo = care_repo

    def get_stats(self) -> Dict[str, int]:
        return {
            "plant_count": self.plant_repo.count_plants(),
            "care_event_count": self.care_repo.count_events(),
        }
