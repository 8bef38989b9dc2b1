"""
Spatial and geometry utilities.

Centralizes coordinate validation, GeoJSON point normalization and
great-circle distance calculations used by the tracker pipeline.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

logger = logging.getLogger(__name__)


class GeometryService:
    """Authoritative geometry operations for the application."""

    EARTH_RADIUS_M = 6371000.0

    @staticmethod
    def validate_coordinate_pair(
        coord: Sequence[Any],
    ) -> tuple[bool, list[float] | None]:
        """Validate a [lon, lat] coordinate pair."""
        if not isinstance(coord, (list, tuple)) or len(coord) < 2:
            return False, None
        try:
            lon = float(coord[0])
            lat = float(coord[1])
        except (TypeError, ValueError, IndexError):
            return False, None
        if not (-180 <= lon <= 180 and -90 <= lat <= 90):
            return False, None
        return True, [lon, lat]

    @staticmethod
    def haversine_distance(
        lon1: float,
        lat1: float,
        lon2: float,
        lat2: float,
        unit: str = "meters",
    ) -> float:
        """Calculate the great-circle distance using the Haversine formula."""
        phi1 = math.radians(lat1)
        phi2 = math.radians(lat2)
        dphi = math.radians(lat2 - lat1)
        dlmb = math.radians(lon2 - lon1)
        a = (
            math.sin(dphi / 2) ** 2
            + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
        )
        distance_m = (
            2 * GeometryService.EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(a)))
        )
        if unit == "meters":
            return distance_m
        if unit == "km":
            return distance_m / 1000.0
        raise ValueError("Invalid unit. Use 'meters' or 'km'.")

    @staticmethod
    def point_coordinates(value: Any) -> list[float] | None:
        """
        Extract a validated [lon, lat] pair from a location value.

        Accepts a GeoJSON Point, a mapping with ``lat`` and ``lon``/``lng``
        keys, or a bare [lon, lat] sequence.
        """
        if value is None:
            return None

        candidate: Any = None
        if isinstance(value, Mapping):
            if "coordinates" in value:
                if value.get("type", "Point") != "Point":
                    return None
                candidate = value.get("coordinates")
            elif "lat" in value:
                lon = value.get("lon", value.get("lng"))
                candidate = [lon, value.get("lat")]
        elif isinstance(value, (list, tuple)):
            candidate = value

        if candidate is None:
            return None
        is_valid, pair = GeometryService.validate_coordinate_pair(candidate)
        if not is_valid or pair is None:
            return None
        if not all(math.isfinite(c) for c in pair):
            return None
        return pair

    @staticmethod
    def geojson_point(pair: Sequence[float]) -> dict[str, Any]:
        """Build a GeoJSON Point from a [lon, lat] pair."""
        return {"type": "Point", "coordinates": [float(pair[0]), float(pair[1])]}
