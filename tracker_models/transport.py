"""Transport mode and detection reason enumerations."""

from __future__ import annotations

from enum import Enum


class TransportMode(str, Enum):
    """Mode of travel inferred for a segment."""

    WALKING = "walking"
    CYCLING = "cycling"
    CAR = "car"
    TRAIN = "train"
    AIRPLANE = "airplane"
    STATIONARY = "stationary"
    UNKNOWN = "unknown"


class DetectionReason(str, Enum):
    """Rule that produced a segment's transport mode."""

    HIGH_VELOCITY_PLANE = "high-velocity-plane"
    TRAIN_STATION_AND_SPEED = "train-station-and-speed"
    AIRPORT_AND_PLANE_SPEED = "airport-and-plane-speed"
    PLANE_SPEED_ONLY = "plane-speed-only"
    TRAIN_SPEED_ONLY = "train-speed-only"
    CAR_SPEED_ONLY = "car-speed-only"
    WALKING_SPEED_ONLY = "walking-speed-only"
    CYCLING_SPEED_ONLY = "cycling-speed-only"
    STATIONARY_SPEED_ONLY = "stationary-speed-only"
    HIGHWAY_OR_MOTORWAY = "highway-or-motorway"
    GOLF_COURSE_WALKING = "golf-course-walking"
    KEEP_CONTINUITY = "keep-continuity"
    DEFAULT = "default"


DETECTION_REASON_LABELS: dict[DetectionReason, str] = {
    DetectionReason.HIGH_VELOCITY_PLANE: "Velocity above 400 km/h, segment marked as plane",
    DetectionReason.TRAIN_STATION_AND_SPEED: (
        "Visited train station and then travelled at train-like speed"
    ),
    DetectionReason.AIRPORT_AND_PLANE_SPEED: (
        "Visited airport and then travelled at plane speed"
    ),
    DetectionReason.PLANE_SPEED_ONLY: "Speed above 350 km/h, likely plane",
    DetectionReason.TRAIN_SPEED_ONLY: "Speed in train range, likely train",
    DetectionReason.CAR_SPEED_ONLY: "Speed in car range, likely car",
    DetectionReason.WALKING_SPEED_ONLY: "Speed in walking range, likely walking",
    DetectionReason.CYCLING_SPEED_ONLY: "Speed in cycling range, likely cycling",
    DetectionReason.STATIONARY_SPEED_ONLY: (
        "Speed below 2 km/h, likely stationary or idle"
    ),
    DetectionReason.HIGHWAY_OR_MOTORWAY: "Detected motorway or highway, assumed car",
    DetectionReason.GOLF_COURSE_WALKING: "Walking on a golf course, likely walking",
    DetectionReason.KEEP_CONTINUITY: "Continuity maintained, mode preserved",
    DetectionReason.DEFAULT: "Default mode assignment",
}


def get_detection_reason_label(reason: DetectionReason | str | None) -> str:
    """
    Return the user-facing description of a detection reason.

    Unrecognized values are returned unchanged so that legacy strings
    stored by older clients still render.
    """
    if reason is None:
        return ""
    try:
        return DETECTION_REASON_LABELS[DetectionReason(reason)]
    except ValueError:
        return str(reason)
