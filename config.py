"""Centralized configuration for environment variables.

This module is the single source of truth for configuration used across the
application. Import constants and getters from here rather than calling
os.getenv directly in multiple places.

Threshold getters read the environment at call time so that a long-lived
process (or a test) can change them without re-importing this module.
"""

from __future__ import annotations

import os
from typing import Final

from dotenv import load_dotenv

from core.exceptions import ConfigurationError

# Load environment variables from .env if present
load_dotenv()


# --- Logging ---
LOG_LEVEL: Final[str] = os.getenv("TRACKER_LOG_LEVEL", "INFO").upper()


# --- Statistics thresholds ---
DEFAULT_PLACE_DWELL_MS: Final[int] = 3_600_000
DEFAULT_STATION_VISIT_COOLDOWN_MS: Final[int] = 3_600_000
DEFAULT_STEP_LENGTH_M: Final[float] = 0.7


def _positive_number_from_env(name: str, default: float, cast: type) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError:
        msg = f"{name} must be a number, got {raw!r}"
        raise ConfigurationError(msg, {"variable": name, "value": raw}) from None
    if value <= 0:
        msg = f"{name} must be positive, got {raw!r}"
        raise ConfigurationError(msg, {"variable": name, "value": raw})
    return value


def get_log_level() -> str:
    """Return the configured log level name."""
    return os.getenv("TRACKER_LOG_LEVEL", LOG_LEVEL).upper()


def get_place_dwell_threshold_ms() -> int:
    """Minimum time spent in a city before it counts as a visited place."""
    return int(
        _positive_number_from_env(
            "TRACKER_PLACE_DWELL_MS",
            DEFAULT_PLACE_DWELL_MS,
            int,
        )
    )


def get_station_visit_cooldown_ms() -> int:
    """Minimum gap between two counted visits to the same train station."""
    return int(
        _positive_number_from_env(
            "TRACKER_STATION_VISIT_COOLDOWN_MS",
            DEFAULT_STATION_VISIT_COOLDOWN_MS,
            int,
        )
    )


def get_step_length_m() -> float:
    """Average stride length used to estimate steps from walking distance."""
    return float(
        _positive_number_from_env(
            "TRACKER_STEP_LENGTH_M",
            DEFAULT_STEP_LENGTH_M,
            float,
        )
    )


__all__ = [
    "DEFAULT_PLACE_DWELL_MS",
    "DEFAULT_STATION_VISIT_COOLDOWN_MS",
    "DEFAULT_STEP_LENGTH_M",
    "LOG_LEVEL",
    "get_log_level",
    "get_place_dwell_threshold_ms",
    "get_station_visit_cooldown_ms",
    "get_step_length_m",
]
