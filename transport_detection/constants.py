"""Thresholds used by the transport mode detection passes (km/h unless noted)."""

from __future__ import annotations

from typing import Final

MS_TO_KMH: Final[float] = 3.6

# Speed-only fallback brackets
HIGH_VELOCITY_PLANE_KMH: Final[float] = 400.0
PLANE_KMH: Final[float] = 350.0
TRAIN_KMH: Final[float] = 150.0
FAST_CAR_KMH: Final[float] = 80.0
CAR_KMH: Final[float] = 30.0
CYCLING_KMH: Final[float] = 15.0
WALKING_MIN_KMH: Final[float] = 2.0
WALKING_MAX_KMH: Final[float] = 6.0

# Tag-assisted rules
AERODROME_PLANE_KMH: Final[float] = 100.0
RESIDENTIAL_CAR_KMH: Final[float] = 30.0
PARK_CYCLING_KMH: Final[float] = 15.0
LANDUSE_MOVING_KMH: Final[float] = 1.0

# Continuity
HIGH_SPEED_CONTINUITY_KMH: Final[float] = 80.0
SPEED_SIMILARITY_KMH: Final[float] = 30.0

# Station anchoring
STATION_TRAIN_SPEED_MIN_KMH: Final[float] = 50.0
STATION_TRAIN_SPEED_MAX_KMH: Final[float] = 200.0
STATION_MEAN_SPEED_KMH: Final[float] = 60.0
STATION_RELABEL_MIN_KMH: Final[float] = 30.0

# Retroactive plane marking
PLANE_RUN_TRIGGER_KMH: Final[float] = 400.0
PLANE_RUN_MIN_KMH: Final[float] = 100.0
