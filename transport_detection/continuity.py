"""
Second detection pass: suppress physically implausible mode changes.

Segments are walked left to right and each decision sees the already
corrected mode of the previous segment, so a run of implausible labels is
absorbed into the mode that preceded it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tracker_models import TransportMode
from transport_detection.constants import (
    FAST_CAR_KMH,
    HIGH_SPEED_CONTINUITY_KMH,
    SPEED_SIMILARITY_KMH,
)
from transport_detection.labels import SegmentLabel, keep_continuity
from transport_detection.segment_metrics import comparable_speed

logger = logging.getLogger(__name__)

Mode = TransportMode

_ALWAYS_FORBIDDEN: frozenset[frozenset[TransportMode]] = frozenset(
    {
        frozenset({Mode.AIRPLANE, Mode.CAR}),
        frozenset({Mode.AIRPLANE, Mode.WALKING}),
        frozenset({Mode.AIRPLANE, Mode.CYCLING}),
        frozenset({Mode.CYCLING, Mode.TRAIN}),
    }
)
_FORBIDDEN_AT_SPEED = frozenset({Mode.TRAIN, Mode.CAR})
_WALKING_OSCILLATION = frozenset({Mode.WALKING, Mode.UNKNOWN})


def is_forbidden_transition(
    prev_mode: TransportMode,
    curr_mode: TransportMode,
    speed_kmh: float,
) -> bool:
    """True when switching directly between the two modes is implausible."""
    pair = frozenset({prev_mode, curr_mode})
    if pair in _ALWAYS_FORBIDDEN:
        return True
    return pair == _FORBIDDEN_AT_SPEED and speed_kmh > FAST_CAR_KMH


def _resolve(
    prev: SegmentLabel,
    curr: SegmentLabel,
    speed: float,
    prev_speed: float,
) -> SegmentLabel:
    if is_forbidden_transition(prev.mode, curr.mode, speed):
        return keep_continuity(prev.mode)

    if frozenset({prev.mode, curr.mode}) == _WALKING_OSCILLATION:
        return keep_continuity(Mode.WALKING)

    if (
        speed > HIGH_SPEED_CONTINUITY_KMH
        and prev_speed > HIGH_SPEED_CONTINUITY_KMH
        and abs(speed - prev_speed) < SPEED_SIMILARITY_KMH
        and prev.mode is not Mode.UNKNOWN
    ):
        return keep_continuity(prev.mode)

    if curr.mode is Mode.UNKNOWN and prev.mode is not Mode.UNKNOWN:
        return keep_continuity(prev.mode)

    return curr


def enforce_continuity(
    labels: Sequence[SegmentLabel],
    speeds: Sequence[float | None],
) -> list[SegmentLabel]:
    """Return a new label buffer with implausible transitions resolved."""
    if not labels:
        return []

    result = [labels[0]]
    changed = 0
    for i in range(1, len(labels)):
        resolved = _resolve(
            result[i - 1],
            labels[i],
            comparable_speed(speeds, i),
            comparable_speed(speeds, i - 1),
        )
        if resolved != labels[i]:
            changed += 1
        result.append(resolved)

    logger.debug("Continuity pass relabelled %d segments", changed)
    return result
