"""
MQTT topic layout for plant entities.

Third-party dashboards subscribe to these exact shapes, so they must not
change:

- ``homeassistant/sensor/{prefix}_plant_{id}/config``  (discovery)
- ``{prefix}/plant/{id}/state``
- ``{prefix}/plant/{id}/attributes``
"""

from __future__ import annotations

from dataclasses import dataclass

DISCOVERY_PREFIX = "homeassistant"
DISCOVERY_COMPONENT = "sensor"


def unique_id(prefix: str, plant_id: int) -> str:
    return f"{prefix}_plant_{plant_id}"


@dataclass(frozen=True)
class TopicSet:
    """The three topics owned by one plant."""

    discovery: str
    state: str
    attributes: str

    @classmethod
    def for_plant(cls, prefix: str, plant_id: int) -> "TopicSet":
        return cls(
            discovery=f"{DISCOVERY_PREFIX}/{DISCOVERY_COMPONENT}/{unique_id(prefix, plant_id)}/config",
            state=f"{prefix}/plant/{plant_id}/state",
            attributes=f"{prefix}/plant/{plant_id}/attributes",
        )

    def all(self) -> tuple[str, str, str]:
        return (self.discovery, self.state, self.attributes)


def wildcard_patterns(prefix: str) -> list[str]:
    """Subscriptions matching every plant topic for *prefix*."""
    return [
        f"{DISCOVERY_PREFIX}/{DISCOVERY_COMPONENT}/+/config",
        f"{prefix}/plant/+/state",
        f"{prefix}/plant/+/attributes",
    ]


def _parse_id(raw: str) -> int | None:
    if not (raw.isascii() and raw.isdigit()):
        return None
    return int(raw)


def extract_plant_id(topic: str, prefix: str) -> int | None:
    """
    Return the plant id encoded in *topic*, or None if it is not a plant topic
    for *prefix*.

    Examples:
        >>> extract_plant_id("homeassistant/sensor/flowl_plant_42/config", "flowl")
        42
        >>> extract_plant_id("flowl/plant/7/state", "other") is None
        True
    """
    parts = topic.split("/")

    # homeassistant/sensor/{prefix}_plant_{id}/config
    if (
        len(parts) == 4
        and parts[0] == DISCOVERY_PREFIX
        and parts[1] == DISCOVERY_COMPONENT
        and parts[3] == "config"
    ):
        marker = f"{prefix}_plant_"
        object_id = parts[2]
        if not object_id.startswith(marker):
            return None
        return _parse_id(object_id[len(marker):])

    # {prefix}/plant/{id}/state | {prefix}/plant/{id}/attributes
    if len(parts) == 4 and parts[0] == prefix and parts[1] == "plant" and parts[3] in ("state", "attributes"):
        return _parse_id(parts[2])

    return None
