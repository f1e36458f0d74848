"""
Domain Package
==============
Pure domain logic with no Flask or database dependencies: the exception
hierarchy and the watering status calculation.
"""

from .exceptions import (
    ConfigurationError,
    ConflictError,
    FlowlError,
    NotFoundError,
    RepositoryError,
    ServiceError,
    ServiceUnavailableError,
    ValidationError,
)
from .watering import WateringStatus, compute_status

__all__ = [
    # Errors
    "ConfigurationError",
    "ConflictError",
    "FlowlError",
    "NotFoundError",
    "RepositoryError",
    "ServiceError",
    "ServiceUnavailableError",
    "ValidationError",
    # Watering
    "WateringStatus",
    "compute_status",
]
