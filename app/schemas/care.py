"""
Care Event Schemas
==================

Request schemas for the care journal.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.constants import Pagination
from app.enums.common import CareEventType

DEFAULT_FEED_LIMIT = Pagination.CARE_FEED_DEFAULT_LIMIT
MAX_FEED_LIMIT = Pagination.CARE_FEED_MAX_LIMIT


class CreateCareEventRequest(BaseModel):
    """Request schema for recording a care event."""

    model_config = ConfigDict(extra="ignore")

    event_type: CareEventType | None = Field(default=None, validate_default=True)
    notes: str | None = None
    occurred_at: str | None = Field(default=None, description="ISO-8601 timestamp; defaults to now")

    @field_validator("event_type", mode="before")
    @classmethod
    def require_event_type(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("event_type is required")
        return v


class CareFeedQuery(BaseModel):
    """Query parameters for the global care feed."""

    limit: int = DEFAULT_FEED_LIMIT
    before: int | None = None
    type: CareEventType | None = None

    @field_validator("limit")
    @classmethod
    def clamp_limit(cls, v):
        return max(1, min(v, MAX_FEED_LIMIT))
