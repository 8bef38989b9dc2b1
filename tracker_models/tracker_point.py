"""Tracker point models for raw input and enriched output."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from core.casting import safe_float
from core.date_utils import parse_timestamp, to_epoch_ms
from core.exceptions import InvalidTrackerPointError
from core.spatial import GeometryService
from tracker_models.geocode import Geocode
from tracker_models.transport import DetectionReason, TransportMode

logger = logging.getLogger(__name__)


class TrackerPoint(BaseModel):
    """A single location sample as recorded by a tracker client.

    ``speed``, ``distance`` and ``time_spent`` are the client's own
    measurements (m/s, meters from the previous sample, seconds) and are
    preferred over anything recomputed from coordinates.
    """

    recorded_at: datetime
    location: dict[str, Any] | None = None
    country_code: str | None = None
    geocode: Geocode | None = None
    speed: float | None = None
    distance: float | None = None
    time_spent: float | None = None

    model_config = ConfigDict(extra="allow", frozen=True)

    @field_validator("recorded_at", mode="before")
    @classmethod
    def parse_recorded_at(cls, v: Any) -> datetime:
        parsed = parse_timestamp(v)
        if parsed is None:
            msg = f"Unparseable recorded_at value: {v!r}"
            raise ValueError(msg)
        return parsed

    @field_validator("location", mode="before")
    @classmethod
    def normalize_location(cls, v: Any) -> dict[str, Any] | None:
        """Standardize any supported location shape to a GeoJSON Point."""
        if v is None:
            return None
        pair = GeometryService.point_coordinates(v)
        if pair is None:
            logger.warning("Ignoring unusable location value: %r", v)
            return None
        return GeometryService.geojson_point(pair)

    @field_validator("country_code", mode="before")
    @classmethod
    def normalize_country_code(cls, v: Any) -> str | None:
        if isinstance(v, str) and v.strip():
            return v.strip()
        return None

    @field_validator("geocode", mode="before")
    @classmethod
    def parse_geocode(cls, v: Any) -> Any:
        """Accept a mapping or its JSON encoding; anything else means no tags."""
        if v is None or isinstance(v, Geocode):
            return v
        if isinstance(v, str):
            try:
                v = json.loads(v)
            except json.JSONDecodeError:
                logger.warning("Geocode payload is not valid JSON; ignoring it")
                return None
        if not isinstance(v, Mapping):
            logger.warning("Geocode payload of type %s ignored", type(v).__name__)
            return None
        return dict(v)

    @field_validator("speed", "distance", "time_spent", mode="before")
    @classmethod
    def coerce_measurement(cls, v: Any) -> float | None:
        if v is None:
            return None
        return safe_float(v)

    @property
    def recorded_at_ms(self) -> int:
        """Recording time as epoch milliseconds."""
        return to_epoch_ms(self.recorded_at)

    @property
    def coordinates(self) -> list[float] | None:
        """[lon, lat] of the sample, or None when it has no location."""
        if self.location is None:
            return None
        return self.location["coordinates"]

    @property
    def tags(self) -> Geocode | None:
        """Geocode tags usable for classification (None if absent or failed)."""
        if self.geocode is None or self.geocode.is_error:
            return None
        return self.geocode

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON-compatible wire format."""
        data = self.model_dump(mode="json", by_alias=True)
        if self.geocode is not None:
            data["geocode"] = self.geocode.model_dump(
                mode="json",
                by_alias=True,
                exclude_unset=True,
            )
        return data


class EnrichedPoint(TrackerPoint):
    """A tracker point with the metrics and mode of the segment ending at it."""

    velocity: float | None = None
    distance_from_prev: float | None = None
    transport_mode: TransportMode = TransportMode.UNKNOWN
    detection_reason: DetectionReason | None = None


def parse_tracker_point(record: Any) -> TrackerPoint:
    """
    Coerce a raw record into a TrackerPoint.

    Raises:
        InvalidTrackerPointError: If the record cannot be used at all.
    """
    if isinstance(record, TrackerPoint):
        return record
    if not isinstance(record, Mapping):
        msg = f"Tracker record must be a mapping, got {type(record).__name__}"
        raise InvalidTrackerPointError(msg)
    try:
        return TrackerPoint.model_validate(dict(record))
    except ValidationError as e:
        msg = f"Invalid tracker record: {e.error_count()} validation error(s)"
        raise InvalidTrackerPointError(
            msg,
            {"errors": e.errors(include_url=False, include_input=False)},
        ) from e
