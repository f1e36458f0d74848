"""
Schemas Module
==============

This module provides Pydantic models for request validation.
Schemas ensure data integrity and provide automatic validation.
"""

from app.schemas.care import CareFeedQuery, CreateCareEventRequest
from app.schemas.locations import LocationRequest
from app.schemas.plants import CreatePlantRequest, UpdatePlantRequest

__all__ = [
    # Plants
    "CreatePlantRequest",
    "UpdatePlantRequest",
    # Care journal
    "CareFeedQuery",
    "CreateCareEventRequest",
    # Locations
    "LocationRequest",
]
