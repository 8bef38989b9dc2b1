"""Fifth detection pass: forward-fill unknown segments."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tracker_models import TransportMode
from transport_detection.labels import SegmentLabel, keep_continuity

logger = logging.getLogger(__name__)


def fill_unknown_gaps(labels: Sequence[SegmentLabel]) -> list[SegmentLabel]:
    """Carry the last known mode into any segment still labelled unknown."""
    if not labels:
        return []

    result = [labels[0]]
    last_known = TransportMode.UNKNOWN
    filled = 0
    for label in labels[1:]:
        if label.mode is not TransportMode.UNKNOWN:
            last_known = label.mode
            result.append(label)
        elif last_known is not TransportMode.UNKNOWN:
            result.append(keep_continuity(last_known))
            filled += 1
        else:
            result.append(label)

    logger.debug("Gap filling: %d unknown segments filled", filled)
    return result
