"""Optional in-memory date range restriction applied before detection."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime

from core.date_utils import parse_range_boundary
from core.exceptions import InvalidDateRangeError
from tracker_models import DataRange, DateFilterSummary, TrackerPoint

logger = logging.getLogger(__name__)

DateInput = str | date | datetime | None


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive recording-time window; either side may be open."""

    start: datetime | None = None
    end: datetime | None = None

    @classmethod
    def from_inputs(cls, start_date: DateInput, end_date: DateInput) -> DateRange:
        """
        Build a range from caller-supplied boundaries.

        A calendar-date ``end_date`` covers that whole day (up to 23:59:59).

        Raises:
            InvalidDateRangeError: If a boundary cannot be parsed or the
                start falls after the end.
        """
        start = parse_range_boundary(start_date)
        if start_date not in (None, "") and start is None:
            msg = f"Invalid start_date: {start_date!r}"
            raise InvalidDateRangeError(msg, {"start_date": str(start_date)})

        end = parse_range_boundary(end_date, end_of_day=True)
        if end_date not in (None, "") and end is None:
            msg = f"Invalid end_date: {end_date!r}"
            raise InvalidDateRangeError(msg, {"end_date": str(end_date)})

        if start is not None and end is not None and start > end:
            msg = "start_date must not be after end_date"
            raise InvalidDateRangeError(
                msg,
                {"start_date": start.isoformat(), "end_date": end.isoformat()},
            )
        return cls(start=start, end=end)

    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, point: TrackerPoint) -> bool:
        if self.start is not None and point.recorded_at < self.start:
            return False
        return not (self.end is not None and point.recorded_at > self.end)


def filter_points_by_date_range(
    points: Sequence[TrackerPoint],
    start_date: DateInput = None,
    end_date: DateInput = None,
) -> tuple[list[TrackerPoint], DateFilterSummary]:
    """Keep only points recorded inside the requested window."""
    date_range = DateRange.from_inputs(start_date, end_date)
    if date_range.is_open:
        kept = list(points)
    else:
        kept = [point for point in points if date_range.contains(point)]

    if len(kept) != len(points):
        logger.debug(
            "Date filter dropped %d of %d points",
            len(points) - len(kept),
            len(points),
        )

    actual_range = None
    if kept:
        recorded = [p.recorded_at for p in kept]
        actual_range = DataRange(
            earliest=min(recorded).isoformat(),
            latest=max(recorded).isoformat(),
        )

    summary = DateFilterSummary(
        startDate=str(start_date) if start_date not in (None, "") else "none",
        endDate=str(end_date) if end_date not in (None, "") else "none",
        dateRangeApplied=not date_range.is_open,
        actualDataRange=actual_range,
    )
    return kept, summary
