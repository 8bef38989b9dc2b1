"""Immutable per-segment classification record shared by all passes."""

from __future__ import annotations

from typing import NamedTuple

from tracker_models import DetectionReason, TransportMode


class SegmentLabel(NamedTuple):
    """Mode assigned to a segment and the rule that assigned it."""

    mode: TransportMode
    reason: DetectionReason | None


# Index 0 is the first point, which never ends a segment.
FIRST_POINT_LABEL = SegmentLabel(TransportMode.UNKNOWN, None)


def keep_continuity(mode: TransportMode) -> SegmentLabel:
    return SegmentLabel(mode, DetectionReason.KEEP_CONTINUITY)
