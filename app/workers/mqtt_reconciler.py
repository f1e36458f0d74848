"""
MQTT Reconciler
===============

Background worker that keeps the broker's retained plant topics in line with
the store. It runs one tick immediately on start and then every
``interval_seconds``:

- first tick: discovery + state + attributes for every plant, seeding the cache
- later ticks: state + attributes only for plants whose status changed or that
  are new, then prune cache entries for deleted plants
- after a broker reconnect: full publish again, since the broker may have lost
  retained messages

Cancellation takes effect at the next wait between ticks.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable

from app.constants import Timeouts
from app.domain.exceptions import RepositoryError
from app.domain.watering import WateringStatus, compute_status
from app.hardware.mqtt.connection_state import ConnectionState
from app.services.application.mqtt_publisher import PlantStatePublisher
from infrastructure.database.repositories.base import PlantSyncSource

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = Timeouts.MQTT_SYNC_INTERVAL


class ReconciliationCache:
    """Plant id -> last published watering status."""

    def __init__(self):
        self._statuses: dict[int, WateringStatus] = {}

    def has_changed(self, plant_id: int, status: WateringStatus) -> bool:
        return self._statuses.get(plant_id) != status

    def record(self, plant_id: int, status: WateringStatus) -> None:
        self._statuses[plant_id] = status

    def get(self, plant_id: int) -> WateringStatus | None:
        return self._statuses.get(plant_id)

    def prune(self, live_ids: Iterable[int]) -> list[int]:
        """Drop ids not in *live_ids*; returns the dropped ids."""
        live = set(live_ids)
        stale = [plant_id for plant_id in self._statuses if plant_id not in live]
        for plant_id in stale:
            del self._statuses[plant_id]
        return stale

    def clear(self) -> None:
        self._statuses.clear()

    def __len__(self) -> int:
        return len(self._statuses)

    def __contains__(self, plant_id: object) -> bool:
        return plant_id in self._statuses


class MQTTReconciler:
    """Periodic state sync between the plant store and the broker."""

    def __init__(
        self,
        plant_repo: PlantSyncSource,
        publisher: PlantStatePublisher,
        connection_state: ConnectionState,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    ):
        self.plant_repo = plant_repo
        self.publisher = publisher
        self.connection_state = connection_state
        self.interval_seconds = interval_seconds
        self.cache = ReconciliationCache()

        self._first_run = True
        self._pending_full = False
        self._was_connected = connection_state.is_connected()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    # ==================== Lifecycle ====================

    def start(self) -> None:
        """Start the reconciler thread."""
        if self._thread is not None and self._thread.is_alive():
            logger.warning("MQTT reconciler already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run_loop,
            daemon=True,
            name="MQTTReconciler",
        )
        self._thread.start()
        logger.info("MQTT reconciler started (interval %ss)", self.interval_seconds)

    def cancel(self, timeout: float = Timeouts.WORKER_JOIN) -> None:
        """Stop the loop and wait for the thread to exit."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
        logger.info("MQTT reconciler stopped")

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run_loop(self) -> None:
        logger.debug("MQTT reconciler loop started")
        while not self._stop_event.is_set():
            try:
                self.run_once()
            except Exception as e:
                logger.error(f"Error in MQTT reconcile tick: {e}", exc_info=True)
            if self._stop_event.wait(self.interval_seconds):
                break
        logger.debug("MQTT reconciler loop ended")

    # ==================== Tick ====================

    def run_once(self) -> None:
        """Perform one reconciliation tick."""
        connected = self.connection_state.is_connected()
        if connected and not self._was_connected:
            logger.info("MQTT reconnected, scheduling full republish")
            self._pending_full = True
        self._was_connected = connected

        try:
            plants = self.plant_repo.list_plants_for_sync()
        except RepositoryError as e:
            logger.warning("MQTT reconcile skipped, store query failed: %s", e)
            return

        if self._first_run or self._pending_full:
            self._full_publish(plants)
            self._first_run = False
            self._pending_full = False
            return

        self._publish_changes(plants)

    def _full_publish(self, plants: list[dict]) -> None:
        self.cache.clear()
        for plant in plants:
            status, _ = compute_status(plant.get("last_watered"), int(plant["watering_interval_days"]))
            self.publisher.publish_plant(plant)
            self.cache.record(int(plant["id"]), status)
        logger.info("MQTT full publish of %d plant(s)", len(plants))

    def _publish_changes(self, plants: list[dict]) -> None:
        changed = 0
        for plant in plants:
            plant_id = int(plant["id"])
            status, _ = compute_status(plant.get("last_watered"), int(plant["watering_interval_days"]))
            if not self.cache.has_changed(plant_id, status):
                continue
            if not self.publisher.publish_state_and_attributes(plant):
                continue
            self.cache.record(plant_id, status)
            changed += 1

        pruned = self.cache.prune(int(plant["id"]) for plant in plants)
        if changed or pruned:
            logger.debug("MQTT reconcile: %d updated, %d pruned", changed, len(pruned))
