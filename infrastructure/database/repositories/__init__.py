"""Repository facades exposing typed accessors over low-level mixins.

Protocols are available for type-checking and dependency injection::

    from infrastructure.database.repositories.base import PlantSyncSource
"""

from infrastructure.database.repositories.base import PlantSyncSource
from infrastructure.database.repositories.care_events import CareEventRepository
from infrastructure.database.repositories.locations import LocationRepository
from infrastructure.database.repositories.plants import PlantRepository

__all__ = [
    "CareEventRepository",
    "LocationRepository",
    "PlantRepository",
    "PlantSyncSource",
]
