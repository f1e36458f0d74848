"""
Enums Module
============

This module provides enumeration types for the Flowl application.
Enums ensure type safety and consistency across the codebase.
"""

from app.enums.common import (
    CareEventType,
    Difficulty,
    GrowthSpeed,
    MQTTStatus,
    PetSafety,
    SoilMoisture,
    SoilType,
)

__all__ = [
    "CareEventType",
    "Difficulty",
    "GrowthSpeed",
    "MQTTStatus",
    "PetSafety",
    "SoilMoisture",
    "SoilType",
]
