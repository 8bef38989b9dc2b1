import math
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402

BASE_TIME = datetime(2024, 5, 1, 8, 0, 0, tzinfo=UTC)
BASE_LON = 4.9
BASE_LAT = 52.37


def meters_to_lat_degrees(meters: float) -> float:
    """Latitude offset that the haversine formula measures as ``meters``."""
    return math.degrees(meters / 6371000.0)


def make_record(
    seconds: float,
    *,
    north_m: float | None = 0.0,
    **fields: Any,
) -> dict[str, Any]:
    """Tracker record ``seconds`` after BASE_TIME, ``north_m`` north of base."""
    record: dict[str, Any] = {
        "recorded_at": (BASE_TIME + timedelta(seconds=seconds)).isoformat(),
    }
    if north_m is not None:
        record["location"] = {
            "type": "Point",
            "coordinates": [BASE_LON, BASE_LAT + meters_to_lat_degrees(north_m)],
        }
    record.update(fields)
    return record


def kmh(speed_kmh: float) -> float:
    """Reported speed field (m/s) for a given km/h value."""
    return speed_kmh / 3.6


@pytest.fixture(autouse=True)
def _default_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TRACKER_LOG_LEVEL",
        "TRACKER_PLACE_DWELL_MS",
        "TRACKER_STATION_VISIT_COOLDOWN_MS",
        "TRACKER_STEP_LENGTH_M",
    ):
        monkeypatch.delenv(name, raising=False)
