"""
Segment speed and distance calculation.

A segment is the interval between ``points[i - 1]`` and ``points[i]``; its
metrics are stored at index ``i``. Index 0 never carries a segment.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from core.casting import finite_or_none
from core.spatial import GeometryService
from tracker_models import TrackerPoint
from transport_detection.constants import MS_TO_KMH

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SegmentMetrics:
    """Per-segment speeds (km/h) and distances (m), plus diagnostic counters."""

    speeds: list[float | None] = field(default_factory=list)
    distances: list[float | None] = field(default_factory=list)
    missing_coords: int = 0
    zero_time_diff: int = 0


def comparable_speed(speeds: Sequence[float | None], index: int) -> float:
    """Speed used in threshold comparisons; an undefined speed counts as 0."""
    if index < 0 or index >= len(speeds):
        return 0.0
    speed = speeds[index]
    return speed if speed is not None else 0.0


def _geometric_distance(prev: TrackerPoint, curr: TrackerPoint) -> float | None:
    prev_coords = prev.coordinates
    curr_coords = curr.coordinates
    if prev_coords is None or curr_coords is None:
        return None
    return GeometryService.haversine_distance(
        prev_coords[0],
        prev_coords[1],
        curr_coords[0],
        curr_coords[1],
    )


def calculate_segment_metrics(points: Sequence[TrackerPoint]) -> SegmentMetrics:
    """
    Derive speed and distance for every segment of a sorted point sequence.

    Speed prefers, in order: the client-reported ``speed`` of the later
    point, its reported ``distance`` over ``time_spent``, and finally the
    haversine distance over the elapsed recording time.
    """
    metrics = SegmentMetrics()
    if not points:
        return metrics

    metrics.speeds.append(None)
    metrics.distances.append(None)

    for i in range(1, len(points)):
        prev = points[i - 1]
        curr = points[i]

        reported_speed = finite_or_none(curr.speed)
        reported_distance = finite_or_none(curr.distance)
        reported_duration = finite_or_none(curr.time_spent)
        geometric = _geometric_distance(prev, curr)

        speed_kmh: float | None = None
        if reported_speed is not None and reported_speed >= 0:
            speed_kmh = reported_speed * MS_TO_KMH
        elif (
            reported_distance is not None
            and reported_duration is not None
            and reported_duration > 0
        ):
            speed_kmh = (reported_distance / reported_duration) * MS_TO_KMH
        elif geometric is not None:
            elapsed_s = (curr.recorded_at_ms - prev.recorded_at_ms) / 1000.0
            if elapsed_s > 0:
                speed_kmh = (geometric / elapsed_s) * MS_TO_KMH
            else:
                metrics.zero_time_diff += 1
        else:
            metrics.missing_coords += 1

        if reported_distance is not None:
            distance_m = reported_distance
        elif geometric is not None:
            distance_m = geometric
        else:
            distance_m = 0.0

        metrics.speeds.append(speed_kmh)
        metrics.distances.append(distance_m)

    logger.debug(
        "Computed metrics for %d segments (missing coords: %d, zero time diff: %d)",
        len(points) - 1,
        metrics.missing_coords,
        metrics.zero_time_diff,
    )
    return metrics
