"""
Location Schemas
================
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LocationRequest(BaseModel):
    """Request schema for creating or renaming a location."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, validate_default=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = v.strip() if isinstance(v, str) else v
        if not v:
            raise ValueError("Name is required")
        return v
