"""
First detection pass: initial per-segment transport mode.

Semantic geocode tags are trusted over speed. Rules are evaluated in a
fixed priority order and the first one that matches decides the segment.
Only when no tag rule applies does the speed bracket table decide.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence

from tracker_models import DetectionReason, Geocode, TrackerPoint, TransportMode
from transport_detection.constants import (
    AERODROME_PLANE_KMH,
    CAR_KMH,
    CYCLING_KMH,
    FAST_CAR_KMH,
    HIGH_VELOCITY_PLANE_KMH,
    LANDUSE_MOVING_KMH,
    PARK_CYCLING_KMH,
    PLANE_KMH,
    RESIDENTIAL_CAR_KMH,
    TRAIN_KMH,
    WALKING_MAX_KMH,
    WALKING_MIN_KMH,
)
from transport_detection.labels import FIRST_POINT_LABEL, SegmentLabel
from transport_detection.segment_metrics import comparable_speed

logger = logging.getLogger(__name__)

Mode = TransportMode
Reason = DetectionReason

# amenity tag -> label, checked after the aerodrome and railway rules
_AMENITY_RULES: tuple[tuple[str, SegmentLabel], ...] = (
    ("airport", SegmentLabel(Mode.AIRPLANE, Reason.AIRPORT_AND_PLANE_SPEED)),
    # No dedicated bus or ferry modes yet; both travel like a car.
    ("bus_station", SegmentLabel(Mode.CAR, Reason.HIGHWAY_OR_MOTORWAY)),
    ("subway_entrance", SegmentLabel(Mode.TRAIN, Reason.TRAIN_STATION_AND_SPEED)),
    ("ferry_terminal", SegmentLabel(Mode.CAR, Reason.HIGHWAY_OR_MOTORWAY)),
)


def classify_by_speed(speed_kmh: float) -> SegmentLabel:
    """Speed bracket fallback used when no semantic tag applies."""
    if speed_kmh > HIGH_VELOCITY_PLANE_KMH:
        return SegmentLabel(Mode.AIRPLANE, Reason.HIGH_VELOCITY_PLANE)
    if speed_kmh > PLANE_KMH:
        return SegmentLabel(Mode.AIRPLANE, Reason.PLANE_SPEED_ONLY)
    if speed_kmh > TRAIN_KMH:
        return SegmentLabel(Mode.TRAIN, Reason.TRAIN_SPEED_ONLY)
    if speed_kmh > FAST_CAR_KMH:
        return SegmentLabel(Mode.CAR, Reason.CAR_SPEED_ONLY)
    if speed_kmh > CAR_KMH:
        return SegmentLabel(Mode.CAR, Reason.CAR_SPEED_ONLY)
    if speed_kmh > CYCLING_KMH:
        return SegmentLabel(Mode.CYCLING, Reason.CYCLING_SPEED_ONLY)
    if WALKING_MIN_KMH <= speed_kmh <= WALKING_MAX_KMH:
        return SegmentLabel(Mode.WALKING, Reason.WALKING_SPEED_ONLY)
    if 0 < speed_kmh < WALKING_MIN_KMH:
        return SegmentLabel(Mode.STATIONARY, Reason.STATIONARY_SPEED_ONLY)
    return SegmentLabel(Mode.UNKNOWN, Reason.DEFAULT)


def _classify_landuse(
    landuse: str | None,
    speed_kmh: float,
) -> SegmentLabel | None:
    if landuse == "railway":
        return SegmentLabel(Mode.TRAIN, Reason.TRAIN_STATION_AND_SPEED)
    if landuse == "industrial":
        return SegmentLabel(Mode.CAR, Reason.CAR_SPEED_ONLY)
    if landuse == "residential":
        if speed_kmh > RESIDENTIAL_CAR_KMH:
            return SegmentLabel(Mode.CAR, Reason.CAR_SPEED_ONLY)
        if speed_kmh > LANDUSE_MOVING_KMH:
            return SegmentLabel(Mode.WALKING, Reason.WALKING_SPEED_ONLY)
        return SegmentLabel(Mode.STATIONARY, Reason.STATIONARY_SPEED_ONLY)
    if landuse == "park":
        if speed_kmh > PARK_CYCLING_KMH:
            return SegmentLabel(Mode.CYCLING, Reason.CYCLING_SPEED_ONLY)
        if speed_kmh > LANDUSE_MOVING_KMH:
            return SegmentLabel(Mode.WALKING, Reason.WALKING_SPEED_ONLY)
        return SegmentLabel(Mode.STATIONARY, Reason.STATIONARY_SPEED_ONLY)
    return None


def classify_by_tags(tags: Geocode, speed_kmh: float) -> SegmentLabel | None:
    """Apply the semantic tag rules; None when no tag rule matches."""
    if (tags.class_ == "aeroway" or tags.type == "aerodrome") and (
        speed_kmh > AERODROME_PLANE_KMH
    ):
        return SegmentLabel(Mode.AIRPLANE, Reason.AIRPORT_AND_PLANE_SPEED)

    if tags.type == "railway_station" or tags.class_ == "railway":
        return SegmentLabel(Mode.TRAIN, Reason.TRAIN_STATION_AND_SPEED)

    for amenity, label in _AMENITY_RULES:
        if tags.amenity == amenity:
            return label

    landuse_label = _classify_landuse(tags.landuse, speed_kmh)
    if landuse_label is not None:
        return landuse_label

    if tags.type == "golf_course":
        return SegmentLabel(Mode.WALKING, Reason.GOLF_COURSE_WALKING)

    return None


def classify_segment(point: TrackerPoint, speed_kmh: float) -> SegmentLabel:
    """Classify the segment ending at ``point``."""
    tags = point.tags
    if tags is not None:
        label = classify_by_tags(tags, speed_kmh)
        if label is not None:
            return label
    return classify_by_speed(speed_kmh)


def classify_segments(
    points: Sequence[TrackerPoint],
    speeds: Sequence[float | None],
) -> list[SegmentLabel]:
    """Run the first pass over every segment of a sorted sequence."""
    if not points:
        return []

    labels = [FIRST_POINT_LABEL]
    for i in range(1, len(points)):
        labels.append(classify_segment(points[i], comparable_speed(speeds, i)))

    if logger.isEnabledFor(logging.DEBUG):
        counts = Counter(label.mode.value for label in labels[1:])
        logger.debug("Initial classification: %s", dict(counts))
    return labels
