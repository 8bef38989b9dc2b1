"""Pydantic data models for tracker transport analytics.

This package contains models for:
- TrackerPoint / EnrichedPoint: raw and enriched location samples
- Geocode: reverse-geocode tags attached to a sample
- TransportMode / DetectionReason: closed classification vocabularies
- TripStatistics / TrackerDataResult: aggregate output contract
"""

from tracker_models.geocode import Geocode
from tracker_models.statistics import (
    ActivityEntry,
    CountryDistribution,
    DataRange,
    DateFilterSummary,
    SegmentDiagnostics,
    StationVisit,
    TrackerDataResult,
    TransportEntry,
    TripStatistics,
)
from tracker_models.tracker_point import (
    EnrichedPoint,
    TrackerPoint,
    parse_tracker_point,
)
from tracker_models.transport import (
    DETECTION_REASON_LABELS,
    DetectionReason,
    TransportMode,
    get_detection_reason_label,
)

__all__ = [
    # Points
    "EnrichedPoint",
    "Geocode",
    "TrackerPoint",
    "parse_tracker_point",
    # Classification
    "DETECTION_REASON_LABELS",
    "DetectionReason",
    "TransportMode",
    "get_detection_reason_label",
    # Statistics
    "ActivityEntry",
    "CountryDistribution",
    "DataRange",
    "DateFilterSummary",
    "SegmentDiagnostics",
    "StationVisit",
    "TrackerDataResult",
    "TransportEntry",
    "TripStatistics",
]
