"""
Transport mode detection pipeline.

Runs the sequencer, the metric calculator and the five labelling passes in
order. Each pass is a pure function from one label buffer to the next, so
the buffers can be inspected (and tested) independently.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from tracker_models import EnrichedPoint, SegmentDiagnostics, TrackerPoint
from transport_detection.classifier import classify_segments
from transport_detection.continuity import enforce_continuity
from transport_detection.gap_filling import fill_unknown_gaps
from transport_detection.labels import FIRST_POINT_LABEL, SegmentLabel
from transport_detection.plane_marking import mark_plane_runs
from transport_detection.segment_metrics import (
    SegmentMetrics,
    calculate_segment_metrics,
)
from transport_detection.sequencer import sequence_points
from transport_detection.station_anchoring import apply_station_anchors

logger = logging.getLogger(__name__)


def label_segments(
    points: Sequence[TrackerPoint],
    metrics: SegmentMetrics,
) -> list[SegmentLabel]:
    """Run all five labelling passes over a sorted sequence."""
    labels = classify_segments(points, metrics.speeds)
    labels = enforce_continuity(labels, metrics.speeds)
    labels = apply_station_anchors(labels, points, metrics.speeds)
    labels = mark_plane_runs(labels, metrics.speeds)
    return fill_unknown_gaps(labels)


def _enrich(
    point: TrackerPoint,
    velocity: float | None,
    distance: float | None,
    label: SegmentLabel,
) -> EnrichedPoint:
    return EnrichedPoint.model_validate(
        {
            **dict(point),
            "velocity": velocity,
            "distance_from_prev": distance,
            "transport_mode": label.mode,
            "detection_reason": label.reason,
        }
    )


def detect_transport_modes(
    points: Iterable[TrackerPoint],
) -> tuple[list[EnrichedPoint], SegmentDiagnostics]:
    """
    Enrich every point with the metrics and mode of the segment ending at it.

    Args:
        points: Tracker points in any order

    Returns:
        Tuple of (enriched points in temporal order, diagnostic counters)
    """
    ordered = sequence_points(points)
    if not ordered:
        return [], SegmentDiagnostics()

    metrics = calculate_segment_metrics(ordered)
    labels = label_segments(ordered, metrics)

    enriched = [_enrich(ordered[0], None, None, FIRST_POINT_LABEL)]
    for i in range(1, len(ordered)):
        enriched.append(
            _enrich(ordered[i], metrics.speeds[i], metrics.distances[i], labels[i])
        )

    diagnostics = SegmentDiagnostics(
        missingCoords=metrics.missing_coords,
        zeroTimeDiff=metrics.zero_time_diff,
        total=len(ordered),
    )
    return enriched, diagnostics
