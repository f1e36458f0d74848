"""
Common Enumerations
====================

This module contains the enums shared by plant and care-event handling.
Values are the exact strings stored in the database and exchanged over the API.
"""

from enum import Enum


class CareEventType(str, Enum):
    """
    Kinds of care a plant can receive.
    Used by: care events API, watering status (``watered`` only)
    """
    WATERED = "watered"
    FERTILIZED = "fertilized"
    REPOTTED = "repotted"
    PRUNED = "pruned"
    CUSTOM = "custom"

    def __str__(self) -> str:
        return self.value


class Difficulty(str, Enum):
    """How much attention a plant needs."""
    EASY = "easy"
    MODERATE = "moderate"
    DEMANDING = "demanding"

    def __str__(self) -> str:
        return self.value


class PetSafety(str, Enum):
    """Toxicity to pets."""
    SAFE = "safe"
    CAUTION = "caution"
    TOXIC = "toxic"

    def __str__(self) -> str:
        return self.value


class GrowthSpeed(str, Enum):
    SLOW = "slow"
    MODERATE = "moderate"
    FAST = "fast"

    def __str__(self) -> str:
        return self.value


class SoilType(str, Enum):
    STANDARD = "standard"
    CACTUS_MIX = "cactus-mix"
    ORCHID_BARK = "orchid-bark"
    PEAT_MOSS = "peat-moss"

    def __str__(self) -> str:
        return self.value


class SoilMoisture(str, Enum):
    """Preferred soil moisture between waterings."""
    DRY = "dry"
    MODERATE = "moderate"
    MOIST = "moist"

    def __str__(self) -> str:
        return self.value


class MQTTStatus(str, Enum):
    """Broker integration state reported by the status endpoint."""
    DISABLED = "disabled"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"

    def __str__(self) -> str:
        return self.value
