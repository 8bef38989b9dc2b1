"""Canonical temporal ordering of tracker points."""

from __future__ import annotations

from collections.abc import Iterable

from tracker_models import TrackerPoint


def sequence_points(points: Iterable[TrackerPoint]) -> list[TrackerPoint]:
    """
    Sort points ascending by recording time.

    The sort is stable, so samples sharing a timestamp keep their input
    order. Every later pass assumes index ``i`` directly follows ``i - 1``.
    """
    return sorted(points, key=lambda point: point.recorded_at_ms)
