"""
Plant State Publisher
=====================

Mirrors plant watering state to the broker using the Home Assistant MQTT
discovery convention. Every message is retained so late subscribers see the
current value.

Publishing is fire-and-forget: each method returns True/False and logs a
failure, it never raises into the caller.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any, Mapping

from app.domain.watering import WateringStatus, compute_status
from app.hardware.mqtt.mqtt_broker_wrapper import MQTTClientWrapper
from app.hardware.mqtt.topics import TopicSet, unique_id

logger = logging.getLogger(__name__)

DEVICE_NAME = "Flowl"
DEVICE_MANUFACTURER = "Flowl"
DEVICE_MODEL = "Plant Care Tracker"
ENTITY_ICON = "mdi:flower"


class PlantStatePublisher:
    """Publishes discovery/state/attributes for plants. A None client disables it."""

    def __init__(self, client: MQTTClientWrapper | None, prefix: str):
        self.client = client
        self.prefix = prefix

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def topics(self, plant_id: int) -> TopicSet:
        return TopicSet.for_plant(self.prefix, plant_id)

    def _publish(self, topic: str, payload: str) -> bool:
        if self.client is None:
            return False
        ok = self.client.publish(topic, payload, retain=True)
        if not ok:
            logger.warning("MQTT publish to %s failed", topic)
        return ok

    # ------------------------------------------------------------------
    # Payloads
    # ------------------------------------------------------------------

    def discovery_payload(self, plant_id: int, plant_name: str) -> dict[str, Any]:
        topics = self.topics(plant_id)
        return {
            "name": plant_name,
            "unique_id": unique_id(self.prefix, plant_id),
            "state_topic": topics.state,
            "json_attributes_topic": topics.attributes,
            "icon": ENTITY_ICON,
            "device": {
                "identifiers": [self.prefix],
                "name": DEVICE_NAME,
                "manufacturer": DEVICE_MANUFACTURER,
                "model": DEVICE_MODEL,
            },
        }

    @staticmethod
    def attributes_payload(
        last_watered: str | None,
        next_due: date | str | None,
        interval_days: int,
    ) -> dict[str, Any]:
        if isinstance(next_due, date):
            next_due = next_due.isoformat()
        return {
            "last_watered": last_watered,
            "next_due": next_due,
            "watering_interval_days": interval_days,
        }

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def publish_discovery(self, plant_id: int, plant_name: str) -> bool:
        payload = json.dumps(self.discovery_payload(plant_id, plant_name))
        return self._publish(self.topics(plant_id).discovery, payload)

    def publish_state(self, plant_id: int, status: WateringStatus | str) -> bool:
        return self._publish(self.topics(plant_id).state, str(status))

    def publish_attributes(
        self,
        plant_id: int,
        last_watered: str | None,
        next_due: date | str | None,
        interval_days: int,
    ) -> bool:
        payload = json.dumps(self.attributes_payload(last_watered, next_due, interval_days))
        return self._publish(self.topics(plant_id).attributes, payload)

    def remove_plant(self, plant_id: int) -> bool:
        """Clear the retained discovery, state and attributes topics of a plant."""
        if self.client is None:
            return False
        results = [self._publish(topic, "") for topic in self.topics(plant_id).all()]
        return all(results)

    def publish_state_and_attributes(self, plant: Mapping[str, Any]) -> bool:
        """State + attributes for a plant row (id, watering_interval_days, last_watered)."""
        if self.client is None:
            return False
        plant_id = int(plant["id"])
        interval = int(plant["watering_interval_days"])
        status, next_due = compute_status(plant.get("last_watered"), interval)
        state_ok = self.publish_state(plant_id, status)
        attrs_ok = self.publish_attributes(plant_id, plant.get("last_watered"), next_due, interval)
        return state_ok and attrs_ok

    def publish_plant(self, plant: Mapping[str, Any]) -> bool:
        """Discovery + state + attributes for a plant row."""
        if self.client is None:
            return False
        discovery_ok = self.publish_discovery(int(plant["id"]), plant["name"])
        rest_ok = self.publish_state_and_attributes(plant)
        return discovery_ok and rest_ok
