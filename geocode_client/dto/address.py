"""DTOs derived from a geocoding result."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    latitude: float = Field(description="Latitude of geometry.location")
    longitude: float = Field(description="Longitude of geometry.location")

    model_config = ConfigDict(frozen=True)

    def as_tuple(self) -> tuple[float, float]:
        return self.latitude, self.longitude


class StructuredAddress(BaseModel):
    """Flattened address components of one result.

    Unset components are ``None``, never an empty string.
    """

    street_number: str | None = Field(default=None, description="street_number")
    street_name: str | None = Field(default=None, description="route")
    city: str | None = Field(default=None, description="locality")
    county: str | None = Field(default=None, description="administrative_area_level_2")
    state: str | None = Field(default=None, description="administrative_area_level_1")
    state_short: str | None = Field(
        default=None, description="administrative_area_level_1 (short_name)"
    )
    postal_code: str | None = Field(default=None, description="postal_code")
    country: str | None = Field(default=None, description="country")
    country_short: str | None = Field(default=None, description="country (ISO 3166-1 short_name)")
    formatted_address: str | None = Field(default=None, description="formatted_address")

    model_config = ConfigDict(frozen=True)


__all__ = ["Coordinates", "StructuredAddress"]
