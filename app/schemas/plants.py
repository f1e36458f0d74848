"""
Plant Schemas
=============

Request schemas for plant endpoints.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.enums.common import Difficulty, GrowthSpeed, PetSafety, SoilMoisture, SoilType

DEFAULT_ICON = "\U0001fab4"
DEFAULT_WATERING_INTERVAL_DAYS = 7
DEFAULT_LIGHT_NEEDS = "indirect"
MAX_WATERING_INTERVAL_DAYS = 3650

# Columns that may be set back to NULL by sending an explicit null.
NULLABLE_FIELDS = frozenset(
    {"species", "location_id", "difficulty", "pet_safety", "growth_speed", "soil_type", "soil_moisture", "notes"}
)


def _strip_or_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class CreatePlantRequest(BaseModel):
    """Request schema for creating a plant."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, validate_default=True, description="Display name (required)")
    species: str | None = Field(default=None, description="Botanical or common species")
    icon: str | None = Field(default=None, description="Emoji icon")
    location_id: int | None = Field(default=None, description="Location ID")
    watering_interval_days: int = Field(
        default=DEFAULT_WATERING_INTERVAL_DAYS, le=MAX_WATERING_INTERVAL_DAYS, description="Days between waterings"
    )
    light_needs: str | None = Field(default=None, description="Light requirement")
    difficulty: Difficulty | None = None
    pet_safety: PetSafety | None = None
    growth_speed: GrowthSpeed | None = None
    soil_type: SoilType | None = None
    soil_moisture: SoilMoisture | None = None
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = _strip_or_none(v)
        if v is None:
            raise ValueError("Name is required")
        return v

    @field_validator("icon", "light_needs")
    @classmethod
    def blank_to_none(cls, v):
        return _strip_or_none(v)

    def to_fields(self) -> dict[str, Any]:
        """Column values with defaults applied for blank icon and light needs."""
        fields = self.model_dump(mode="json")
        fields["icon"] = fields["icon"] or DEFAULT_ICON
        fields["light_needs"] = fields["light_needs"] or DEFAULT_LIGHT_NEEDS
        return fields


class UpdatePlantRequest(BaseModel):
    """
    Request schema for a partial plant update.

    Omitted fields keep their value. An explicit null clears a nullable field
    and is ignored for the required ones (name, icon, interval, light needs).
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    species: str | None = None
    icon: str | None = None
    location_id: int | None = None
    watering_interval_days: int | None = Field(default=None, le=MAX_WATERING_INTERVAL_DAYS)
    light_needs: str | None = None
    difficulty: Difficulty | None = None
    pet_safety: PetSafety | None = None
    growth_speed: GrowthSpeed | None = None
    soil_type: SoilType | None = None
    soil_moisture: SoilMoisture | None = None
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Name cannot be blank")
        return v.strip() if v is not None else v

    def to_fields(self) -> dict[str, Any]:
        """Only the fields the client sent, in column form."""
        sent = self.model_dump(mode="json", exclude_unset=True)
        return {key: value for key, value in sent.items() if value is not None or key in NULLABLE_FIELDS}
