"""
Transport Detection Package.

This package provides a rule-based transport mode detection pipeline with:
- Temporal sequencing and segment speed/distance metrics
- First-pass classification from geocode tags and speed brackets
- Continuity, station-anchoring, plane-run and gap-filling correction passes
- An orchestrating processor that also aggregates trip statistics

Usage:
    from transport_detection import TrackerDataProcessor

    result = TrackerDataProcessor().process(records, start_date="2024-05-01")
    payload = result.to_dict()
"""

from transport_detection.classifier import classify_segment, classify_segments
from transport_detection.continuity import enforce_continuity, is_forbidden_transition
from transport_detection.date_range import DateRange, filter_points_by_date_range
from transport_detection.gap_filling import fill_unknown_gaps
from transport_detection.labels import FIRST_POINT_LABEL, SegmentLabel
from transport_detection.pipeline import detect_transport_modes, label_segments
from transport_detection.plane_marking import mark_plane_runs
from transport_detection.processor import TrackerDataProcessor, process_tracker_data
from transport_detection.segment_metrics import (
    SegmentMetrics,
    calculate_segment_metrics,
)
from transport_detection.sequencer import sequence_points
from transport_detection.station_anchoring import (
    apply_station_anchors,
    find_station_anchors,
)

__all__ = [
    # Main processor
    "TrackerDataProcessor",
    "detect_transport_modes",
    "label_segments",
    "process_tracker_data",
    # Pipeline stages
    "apply_station_anchors",
    "calculate_segment_metrics",
    "classify_segment",
    "classify_segments",
    "enforce_continuity",
    "fill_unknown_gaps",
    "find_station_anchors",
    "mark_plane_runs",
    "sequence_points",
    # Supporting types
    "DateRange",
    "FIRST_POINT_LABEL",
    "SegmentLabel",
    "SegmentMetrics",
    "filter_points_by_date_range",
    "is_forbidden_transition",
]
