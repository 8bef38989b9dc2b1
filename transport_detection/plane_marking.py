"""
Fourth detection pass: widen confident airplane detections.

A segment flown above 400 km/h anchors an airplane run. The run extends
backward and forward over every contiguous segment above 100 km/h, which
picks up the climb and descent legs that fall below the cruise trigger.

Widening never produces an airplane segment directly next to car, walking
or cycling. A widened segment at the edge of a run that would do so keeps
the label it had before this pass.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tracker_models import DetectionReason, TransportMode
from transport_detection.constants import PLANE_RUN_MIN_KMH, PLANE_RUN_TRIGGER_KMH
from transport_detection.continuity import is_forbidden_transition
from transport_detection.labels import SegmentLabel
from transport_detection.segment_metrics import comparable_speed

logger = logging.getLogger(__name__)

PLANE_LABEL = SegmentLabel(TransportMode.AIRPLANE, DetectionReason.HIGH_VELOCITY_PLANE)


def _trim_forbidden_edges(
    result: list[SegmentLabel],
    labels: Sequence[SegmentLabel],
    speeds: Sequence[float | None],
    widened: set[int],
) -> int:
    """Revert widened edge segments that touch a forbidden neighbour."""
    reverted = 0
    changed = True
    while changed:
        changed = False
        for i in range(1, len(result)):
            if not is_forbidden_transition(
                result[i - 1].mode,
                result[i].mode,
                comparable_speed(speeds, i),
            ):
                continue
            for j in (i - 1, i):
                if j in widened:
                    result[j] = labels[j]
                    widened.discard(j)
                    reverted += 1
                    changed = True
                    break
    return reverted


def mark_plane_runs(
    labels: Sequence[SegmentLabel],
    speeds: Sequence[float | None],
) -> list[SegmentLabel]:
    """Return a new label buffer with airplane runs widened."""
    result = list(labels)
    count = len(labels)
    triggers = [
        i
        for i in range(1, count)
        if labels[i].mode is TransportMode.AIRPLANE
        and comparable_speed(speeds, i) > PLANE_RUN_TRIGGER_KMH
    ]

    widened: set[int] = set()
    for i in triggers:
        j = i - 1
        while j > 0 and comparable_speed(speeds, j) > PLANE_RUN_MIN_KMH:
            if labels[j].mode is not TransportMode.AIRPLANE:
                widened.add(j)
            result[j] = PLANE_LABEL
            j -= 1
        j = i + 1
        while j < count and comparable_speed(speeds, j) > PLANE_RUN_MIN_KMH:
            if labels[j].mode is not TransportMode.AIRPLANE:
                widened.add(j)
            result[j] = PLANE_LABEL
            j += 1

    reverted = _trim_forbidden_edges(result, labels, speeds, widened)

    logger.debug(
        "Plane marking: %d trigger segments, %d edge segments left unwidened",
        len(triggers),
        reverted,
    )
    return result
