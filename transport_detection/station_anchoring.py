"""
Third detection pass: relabel travel between train stations as train.

Two consecutive samples geocoded as train stations bracket a candidate
rail journey. When the segments between them move at rail-like speeds,
every moving segment in between is relabelled as train, regardless of what
the earlier passes concluded.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tracker_models import DetectionReason, TrackerPoint, TransportMode
from transport_detection.constants import (
    STATION_MEAN_SPEED_KMH,
    STATION_RELABEL_MIN_KMH,
    STATION_TRAIN_SPEED_MAX_KMH,
    STATION_TRAIN_SPEED_MIN_KMH,
)
from transport_detection.labels import SegmentLabel
from transport_detection.segment_metrics import comparable_speed

logger = logging.getLogger(__name__)

TRAIN_LABEL = SegmentLabel(TransportMode.TRAIN, DetectionReason.TRAIN_STATION_AND_SPEED)


def find_station_anchors(points: Sequence[TrackerPoint]) -> list[int]:
    """Indices of points tagged as a train station, in temporal order."""
    return [
        i
        for i, point in enumerate(points)
        if point.tags is not None and point.tags.amenity == "train_station"
    ]


def _journey_has_train_speed(speeds: Sequence[float]) -> bool:
    moving = [speed for speed in speeds if speed > 0]
    if not moving:
        return False
    has_rail_speed = any(
        STATION_TRAIN_SPEED_MIN_KMH < speed < STATION_TRAIN_SPEED_MAX_KMH
        for speed in moving
    )
    mean_speed = sum(moving) / len(moving)
    return has_rail_speed and mean_speed > STATION_MEAN_SPEED_KMH


def apply_station_anchors(
    labels: Sequence[SegmentLabel],
    points: Sequence[TrackerPoint],
    speeds: Sequence[float | None],
) -> list[SegmentLabel]:
    """Return a new label buffer with station-bracketed journeys set to train."""
    result = list(labels)
    anchors = find_station_anchors(points)
    relabelled = 0

    for start, end in zip(anchors, anchors[1:], strict=False):
        between = range(start + 1, end)
        if not between:
            continue
        journey_speeds = [comparable_speed(speeds, j) for j in between]
        if not _journey_has_train_speed(journey_speeds):
            continue
        for j, speed in zip(between, journey_speeds, strict=True):
            if speed > STATION_RELABEL_MIN_KMH:
                result[j] = TRAIN_LABEL
                relabelled += 1

    logger.debug(
        "Station anchoring: %d anchors, %d segments relabelled",
        len(anchors),
        relabelled,
    )
    return result
