"""Reverse-geocode tag bag attached to a tracker point."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

PLACE_ADDRESS_KEYS = ("city", "town", "village")


class Geocode(BaseModel):
    """Semantic tags returned by the reverse geocoder for a point.

    Only the tags the transport classifier and the statistics aggregator
    read are declared; anything else the provider returned is kept as an
    extra field and echoed back unchanged.
    """

    type: str | None = None
    class_: str | None = Field(default=None, alias="class")
    amenity: str | None = None
    landuse: str | None = None
    name: str | None = None
    display_name: str | None = None
    address: dict[str, Any] | None = None
    error: Any = None

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    @field_validator(
        "type",
        "class_",
        "amenity",
        "landuse",
        "name",
        "display_name",
        mode="before",
    )
    @classmethod
    def drop_non_string_tags(cls, v: Any) -> str | None:
        """Tags of an unexpected type are ignored rather than rejected."""
        return v if isinstance(v, str) else None

    @field_validator("address", mode="before")
    @classmethod
    def drop_non_mapping_address(cls, v: Any) -> dict[str, Any] | None:
        return v if isinstance(v, dict) else None

    @property
    def is_error(self) -> bool:
        """True when the geocoder flagged this lookup as failed.

        The provider marks a failed lookup by including an ``error`` key, so
        the key being present is enough, whatever its value.
        """
        return "error" in self.model_fields_set

    @property
    def place_name(self) -> str | None:
        """City, town or village name from the address, in that order."""
        if not self.address:
            return None
        for key in PLACE_ADDRESS_KEYS:
            value = self.address.get(key)
            if isinstance(value, str) and value:
                return value
        return None

    @property
    def station_name(self) -> str | None:
        return self.name or self.display_name or None
