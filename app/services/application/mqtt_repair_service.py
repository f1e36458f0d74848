"""
MQTT Repair Service
===================

On-demand cleanup of the broker's retained plant topics.

Phase 1 opens a short-lived, dedicated connection and collects every plant id
that still has a retained discovery/state/attributes message. Phase 2 clears
the ids that no longer exist in the store and republishes every stored plant.

This is not part of the periodic reconcile: it opens a second connection and
blocks the caller for at least one idle window.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import asdict, dataclass
from typing import Callable

from app.constants import Timeouts
from app.domain.exceptions import RepositoryError
from app.hardware.mqtt.client_factory import build_client_id, create_mqtt_client
from app.hardware.mqtt.topics import extract_plant_id, wildcard_patterns
from app.services.application.mqtt_publisher import PlantStatePublisher
from infrastructure.database.repositories.base import PlantSyncSource

logger = logging.getLogger(__name__)

DEFAULT_IDLE_TIMEOUT = Timeouts.MQTT_DISCOVERY_IDLE
KEEPALIVE_SECONDS = Timeouts.MQTT_KEEPALIVE


@dataclass(frozen=True)
class RepairResult:
    cleared: int = 0
    published: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


def discover_plant_ids(
    host: str,
    port: int,
    prefix: str,
    *,
    idle_timeout: float = DEFAULT_IDLE_TIMEOUT,
    client_factory: Callable[..., object] = create_mqtt_client,
) -> set[int] | None:
    """
    Collect plant ids that have retained messages on the broker.

    Every broker event (connection ack, subscription ack, message) restarts the
    idle window; collection ends after ``idle_timeout`` seconds of silence.

    Returns:
        The ids seen, or None when the broker never acknowledged the connection.
    """
    found: set[int] = set()
    lock = threading.Lock()
    connected = threading.Event()
    activity = threading.Event()

    def on_connect(client, userdata, flags, rc):
        if rc != 0:
            logger.warning("Discovery connection refused (rc=%s)", rc)
            return
        connected.set()
        for pattern in wildcard_patterns(prefix):
            client.subscribe(pattern, qos=1)
        activity.set()

    def on_subscribe(client, userdata, mid, granted_qos):
        activity.set()

    def on_message(client, userdata, msg):
        plant_id = extract_plant_id(msg.topic, prefix)
        if plant_id is not None:
            with lock:
                found.add(plant_id)
        activity.set()

    client = client_factory(client_id=build_client_id(prefix, "repair"))
    client.on_connect = on_connect
    client.on_subscribe = on_subscribe
    client.on_message = on_message

    try:
        try:
            client.connect_async(host, port, KEEPALIVE_SECONDS)
            client.loop_start()
        except Exception as e:
            logger.warning("Discovery connection to %s:%s failed: %s", host, port, e)
            return None

        if not connected.wait(idle_timeout):
            logger.warning("No connection ack from %s:%s within %ss", host, port, idle_timeout)
            return None

        while True:
            activity.clear()
            if not activity.wait(idle_timeout):
                break
    finally:
        try:
            client.disconnect()
        except Exception as e:
            logger.debug("Discovery client disconnect error: %s", e)
        client.loop_stop()

    with lock:
        result = set(found)
    logger.info("Discovered %d plant id(s) on broker", len(result))
    return result


class MQTTRepairService:
    """Clears orphaned retained topics and republishes every stored plant."""

    def __init__(
        self,
        plant_repo: PlantSyncSource,
        publisher: PlantStatePublisher,
        host: str,
        port: int,
        prefix: str,
        idle_timeout: float = DEFAULT_IDLE_TIMEOUT,
        client_factory: Callable[..., object] = create_mqtt_client,
    ):
        self.plant_repo = plant_repo
        self.publisher = publisher
        self.host = host
        self.port = port
        self.prefix = prefix
        self.idle_timeout = idle_timeout
        self.client_factory = client_factory

    def discover(self) -> set[int] | None:
        return discover_plant_ids(
            self.host,
            self.port,
            self.prefix,
            idle_timeout=self.idle_timeout,
            client_factory=self.client_factory,
        )

    def repair(self) -> RepairResult:
        broker_ids = self.discover()
        if broker_ids is None:
            return RepairResult()

        try:
            store_ids = self.plant_repo.list_plant_ids()
            plants = self.plant_repo.list_plants_for_sync()
        except RepositoryError as e:
            logger.warning("MQTT repair aborted, store query failed: %s", e)
            return RepairResult()

        orphans = sorted(broker_ids - set(store_ids))
        for plant_id in orphans:
            self.publisher.remove_plant(plant_id)

        for plant in plants:
            self.publisher.publish_plant(plant)

        result = RepairResult(cleared=len(orphans), published=len(plants))
        logger.info("MQTT repair: cleared %d orphan(s), republished %d plant(s)", result.cleared, result.published)
        return result
