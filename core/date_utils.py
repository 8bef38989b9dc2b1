"""
Centralized date and time utilities for tracker processing.

All timestamps handled by the engine are timezone-aware UTC datetimes.
Ordering and elapsed-time arithmetic is done on integer epoch milliseconds
so that every pass compares the same values.

Key Features:
-   **Timezone-Aware Parsing**: naive inputs are assumed to be UTC.
-   **Epoch Conversion**: numeric inputs are read as epoch milliseconds,
    matching the tracker clients that produce them.
-   **Dependency Abstraction**: wraps `dateutil` so the rest of the code base
    never imports it directly.
"""

from __future__ import annotations

import logging
import math
from datetime import UTC, date, datetime, time

from dateutil import parser

logger = logging.getLogger(__name__)

MS_PER_HOUR = 3_600_000
MS_PER_DAY = 86_400_000


def parse_timestamp(ts: str | datetime | int | float | None) -> datetime | None:
    """
    Parse a timestamp and return it as a UTC-aware datetime.

    Args:
        ts: ISO 8601 string, datetime, or epoch milliseconds.

    Returns:
        A timezone-aware datetime in UTC, or None if parsing fails.
    """
    if ts is None or ts == "":
        logger.debug("Received empty timestamp; returning None.")
        return None

    if isinstance(ts, bool):
        logger.warning("Refusing boolean timestamp %r", ts)
        return None

    if isinstance(ts, datetime):
        return ensure_utc(ts)

    if isinstance(ts, int | float):
        if not math.isfinite(ts):
            logger.warning("Non-finite epoch timestamp %r", ts)
            return None
        try:
            return datetime.fromtimestamp(ts / 1000.0, tz=UTC)
        except (OverflowError, OSError, ValueError) as e:
            logger.warning("Epoch timestamp %r out of range: %s", ts, e)
            return None

    if not isinstance(ts, str):
        logger.warning("Unsupported timestamp type '%s'", type(ts).__name__)
        return None

    try:
        parsed_time = parser.isoparse(ts.strip())
    except (ValueError, TypeError, OverflowError):
        # Postgres-style "2024-01-01 10:00:00+00" is not strict ISO.
        try:
            parsed_time = parser.parse(ts)
        except (ValueError, TypeError, OverflowError) as e:
            logger.warning("Failed to parse timestamp '%s': %s", ts, e)
            return None
    return ensure_utc(parsed_time)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Return the datetime as an explicit UTC-aware value."""

    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def to_epoch_ms(dt: datetime) -> int:
    """Convert an aware datetime to integer epoch milliseconds."""
    return round(ensure_utc(dt).timestamp() * 1000)


def parse_range_boundary(
    value: str | datetime | date | None,
    *,
    end_of_day: bool = False,
) -> datetime | None:
    """
    Interpret a date-range boundary supplied by a caller.

    A bare calendar date (``YYYY-MM-DD`` or a ``date``) expands to the start
    of that day, or to 23:59:59 of that day when ``end_of_day`` is set.
    Full timestamps are used as-is.

    Returns:
        UTC-aware datetime, or None when the value is empty or unparseable.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return ensure_utc(value)

    boundary_time = time(23, 59, 59) if end_of_day else time.min

    if isinstance(value, date):
        return datetime.combine(value, boundary_time, tzinfo=UTC)

    if isinstance(value, str):
        try:
            parsed_date = datetime.strptime(value.strip(), "%Y-%m-%d").date()
        except ValueError:
            return parse_timestamp(value)
        return datetime.combine(parsed_date, boundary_time, tzinfo=UTC)

    logger.warning("Unsupported date range boundary type '%s'", type(value))
    return None
