"""
Repository Protocols
====================

Structural contracts for the persistence layer. Services and workers type
their collaborators against these protocols so tests can pass in-memory
fakes without subclassing.

Usage::

    from infrastructure.database.repositories.base import PlantSyncSource


    class MQTTReconciler:
        def __init__(self, plant_repo: PlantSyncSource, ...) -> None: ...
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PlantSyncSource(Protocol):
    """Read-only plant snapshots consumed by MQTT reconciliation and repair.

    Both methods raise ``RepositoryError`` when the store cannot be read.
    """

    def list_plant_ids(self) -> set[int]:
        """Every plant id currently in the store."""
        ...

    def list_plants_for_sync(self) -> list[dict[str, Any]]:
        """``id``, ``name``, ``watering_interval_days`` and ``last_watered`` per plant."""
        ...


__all__ = ["PlantSyncSource"]
