"""
Tracker Data Processor Module.

Main orchestrator that turns a caller-supplied batch of tracker records into
enriched points, diagnostics and (optionally) trip statistics.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from analytics.services import TrackerStatisticsService
from core.exceptions import InvalidTrackerPointError
from tracker_models import TrackerDataResult, TrackerPoint, parse_tracker_point
from transport_detection.date_range import DateInput, filter_points_by_date_range
from transport_detection.pipeline import detect_transport_modes

logger = logging.getLogger(__name__)


class TrackerDataProcessor:
    """
    Orchestrates record coercion, date filtering, transport detection and
    statistics aggregation for one batch of tracker points.

    The processor holds no per-batch state; a single instance can serve any
    number of concurrent callers.
    """

    def __init__(
        self,
        statistics_service: TrackerStatisticsService | None = None,
    ) -> None:
        """
        Initialize the processor.

        Args:
            statistics_service: Optional statistics service (for testing/DI)
        """
        self._statistics_service = statistics_service or TrackerStatisticsService()

    @staticmethod
    def coerce_records(
        records: Iterable[Any],
    ) -> tuple[list[TrackerPoint], int]:
        """
        Convert raw records to TrackerPoints, skipping unusable ones.

        Returns:
            Tuple of (valid points, number of skipped records)
        """
        points: list[TrackerPoint] = []
        skipped = 0
        for index, record in enumerate(records):
            try:
                points.append(parse_tracker_point(record))
            except InvalidTrackerPointError as e:
                skipped += 1
                logger.warning("Skipping tracker record %d: %s", index, e.message)
        return points, skipped

    def process(
        self,
        records: Iterable[Any],
        *,
        include_statistics: bool = True,
        start_date: DateInput = None,
        end_date: DateInput = None,
    ) -> TrackerDataResult:
        """
        Run the full engine over a batch of tracker records.

        Args:
            records: Raw dict records or TrackerPoint instances, any order
            include_statistics: Whether to aggregate trip statistics
            start_date: Optional inclusive lower bound on recording time
            end_date: Optional inclusive upper bound; a bare date covers the
                whole day

        Returns:
            TrackerDataResult holding enriched points, statistics and debug
            counters

        Raises:
            InvalidDateRangeError: If the requested date range is unusable
        """
        points, skipped = self.coerce_records(records)

        date_filters = None
        if start_date not in (None, "") or end_date not in (None, ""):
            points, date_filters = filter_points_by_date_range(
                points,
                start_date,
                end_date,
            )

        enriched, diagnostics = detect_transport_modes(points)
        updates: dict[str, Any] = {}
        if skipped:
            updates["skipped"] = skipped
        if date_filters is not None:
            updates["dateFilters"] = date_filters
        if updates:
            diagnostics = diagnostics.model_copy(update=updates)

        statistics = None
        if include_statistics:
            statistics = self._statistics_service.calculate_statistics(enriched)

        logger.info(
            "Processed %d tracker points (%d skipped, %d missing coords, "
            "%d zero time diffs)",
            diagnostics.total,
            skipped,
            diagnostics.missingCoords,
            diagnostics.zeroTimeDiff,
        )
        return TrackerDataResult(
            enrichedPoints=enriched,
            statistics=statistics,
            debug=diagnostics,
        )


def process_tracker_data(
    records: Iterable[Any],
    *,
    include_statistics: bool = True,
    start_date: DateInput = None,
    end_date: DateInput = None,
) -> TrackerDataResult:
    """Process a batch with a default TrackerDataProcessor."""
    return TrackerDataProcessor().process(
        records,
        include_statistics=include_statistics,
        start_date=start_date,
        end_date=end_date,
    )
