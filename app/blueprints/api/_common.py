"""
Blueprint Common Utilities
==========================

Shared helper functions for all API blueprints.
Import these instead of duplicating helper code in each blueprint.

Usage:
    from app.blueprints.api._common import (
        get_container, parse_body, success, fail,
        get_plant_service, get_mqtt_service, ...
    )

This module centralizes:
- Service container access
- Request JSON parsing and validation
- Standardized response helpers
- Common service accessors
"""
from __future__ import annotations

import logging
from typing import Type, TypeVar

from flask import current_app, request
from pydantic import BaseModel

from app.domain.exceptions import ValidationError
from app.utils.http import error_response, no_content, success_response

logger = logging.getLogger("api._common")

ModelT = TypeVar("ModelT", bound=BaseModel)

# ============================================================================
# CONTAINER ACCESS
# ============================================================================

def get_container():
    """
    Get the service container from Flask app config.

    Returns:
        ServiceContainer: The application service container

    Raises:
        RuntimeError: If container is not configured
    """
    container = current_app.config.get("CONTAINER")
    if not container:
        raise RuntimeError("ServiceContainer not found in app config")
    return container


# ============================================================================
# REQUEST HELPERS
# ============================================================================

def get_json() -> dict:
    """
    Get the JSON request body.

    Returns:
        dict: Parsed JSON object, or an empty dict when the body is empty

    Raises:
        ValidationError: If a body is present but is not a JSON object
    """
    if not request.get_data(cache=True):
        return {}
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def parse_body(model: Type[ModelT]) -> ModelT:
    """Validate the JSON body against *model*; pydantic errors surface as 400 via ``safe_route``."""
    return model.model_validate(get_json())


def parse_query(model: Type[ModelT]) -> ModelT:
    """Validate query string parameters against *model*."""
    return model.model_validate(request.args.to_dict())


# ============================================================================
# RESPONSE HELPERS
# ============================================================================

def success(data: dict | list | None = None, status: int = 200, *, message: str | None = None):
    """
    Standard success response wrapper.

    Returns:
        Flask Response with format: {"ok": true, "data": ..., "error": null}
    """
    return success_response(data, status, message=message)


def fail(message: str, status: int = 400, *, details: dict | None = None):
    """
    Standard error response wrapper.

    Returns:
        Flask Response with format: {"ok": false, "data": null, "error": {...}}
    """
    return error_response(message, status, details=details)


def deleted():
    """Empty 204 response for successful deletes."""
    return no_content()


# ============================================================================
# SERVICE ACCESSORS
# ============================================================================

def get_plant_service():
    return get_container().plant_service


def get_location_service():
    return get_container().location_service


def get_care_service():
    return get_container().care_service


def get_stats_service():
    return get_container().stats_service


def get_mqtt_service():
    return get_container().mqtt_service
