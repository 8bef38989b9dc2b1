"""Business logic for tracker trip statistics."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

import config
from core.date_utils import MS_PER_DAY, MS_PER_HOUR
from tracker_models import (
    ActivityEntry,
    CountryDistribution,
    EnrichedPoint,
    StationVisit,
    TransportEntry,
    TransportMode,
    TripStatistics,
)

logger = logging.getLogger(__name__)

EARTH_CIRCUMFERENCE_KM = 40075
TOTAL_DISTANCE_LABEL = "Total Distance"


@dataclass(slots=True)
class _ModeTotals:
    distance_m: float = 0.0
    time_ms: int = 0
    points: int = 0


def normalize_percentages(parts: Sequence[float]) -> list[float]:
    """
    Convert parts to percentages of their sum, rounded to 2 decimals.

    The rounding residual is added to the last entry so that ``sum()`` of
    the result is exactly ``100.0``. When every part is zero the last entry
    takes the full 100.
    """
    if not parts:
        return []
    total = sum(parts)
    if total > 0:
        percentages = [round(part / total * 100, 2) for part in parts]
    else:
        percentages = [0.0] * len(parts)

    percentages[-1] = 100.0 - sum(percentages[:-1])
    # sum() may use compensated summation; settle any last-ulp drift.
    for _ in range(3):
        drift = 100.0 - sum(percentages)
        if not drift:
            break
        percentages[-1] += drift
    return percentages


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_total_distance(total_km: float) -> str:
    """Render a distance as ``"X.X km"``, or ``"X.Xk km"`` from 1000 km up."""
    if total_km >= 1000:
        return f"{total_km / 1000:.1f}k km"
    return f"{total_km:.1f} km"


def count_station_visits(
    visits: dict[str, list[int]],
    cooldown_ms: int,
) -> list[StationVisit]:
    """
    Count distinct visits per station.

    Samples recorded within ``cooldown_ms`` of the previous counted visit
    to the same station are treated as the same visit.
    """
    results: list[StationVisit] = []
    for name, timestamps in visits.items():
        count = 0
        last_counted: int | None = None
        for ts in sorted(timestamps):
            if last_counted is None or ts - last_counted > cooldown_ms:
                count += 1
                last_counted = ts
        if count > 0:
            results.append(StationVisit(name=name, count=count))
    results.sort(key=lambda visit: visit.count, reverse=True)
    return results


class TrackerStatisticsService:
    """Service class for aggregating enriched tracker points."""

    @staticmethod
    def calculate_statistics(points: Sequence[EnrichedPoint]) -> TripStatistics:
        """Aggregate an enriched, time-ordered point sequence.

        Args:
            points: Output of the transport detection pipeline

        Returns:
            TripStatistics with all percentage lists normalized to 100
        """
        if not points:
            return TripStatistics()

        dwell_threshold_ms = config.get_place_dwell_threshold_ms()
        cooldown_ms = config.get_station_visit_cooldown_ms()
        step_length_m = config.get_step_length_m()

        total_distance_m = 0.0
        moving_ms = 0
        by_mode: dict[str, _ModeTotals] = defaultdict(_ModeTotals)
        by_country: dict[str, float] = defaultdict(float)
        place_dwell_ms: dict[str, int] = defaultdict(int)
        station_visits: dict[str, list[int]] = defaultdict(list)
        countries: set[str] = set()

        prev: EnrichedPoint | None = None
        for point in points:
            point_ms = point.recorded_at_ms
            tags = point.tags

            if point.country_code:
                countries.add(point.country_code)
            if tags is not None and tags.amenity == "train_station" and tags.station_name:
                station_visits[tags.station_name].append(point_ms)

            if prev is not None:
                mode = point.transport_mode
                distance_m = point.distance_from_prev or 0.0
                elapsed_ms = point_ms - prev.recorded_at_ms

                totals = by_mode[mode.value]
                totals.distance_m += distance_m
                totals.points += 1
                if elapsed_ms > 0:
                    totals.time_ms += elapsed_ms

                if mode is not TransportMode.STATIONARY:
                    total_distance_m += distance_m
                    if elapsed_ms > 0:
                        moving_ms += elapsed_ms
                    if point.country_code:
                        by_country[point.country_code] += distance_m

                prev_tags = prev.tags
                place = tags.place_name if tags is not None else None
                prev_place = prev_tags.place_name if prev_tags is not None else None
                if place and place == prev_place and elapsed_ms > 0:
                    place_dwell_ms[place] += elapsed_ms

            prev = point

        unique_places = sum(1 for ms in place_dwell_ms.values() if ms > dwell_threshold_ms)
        total_km = total_distance_m / 1000
        total_time_ms = points[-1].recorded_at_ms - points[0].recorded_at_ms

        walking = by_mode.get(TransportMode.WALKING.value)
        steps = round_half_up(walking.distance_m / step_length_m) if walking else 0

        statistics = TripStatistics(
            totalDistance=format_total_distance(total_km),
            earthCircumferences=total_km / EARTH_CIRCUMFERENCE_KM,
            locationsVisited=str(unique_places),
            timeSpent=f"{round_half_up(total_time_ms / MS_PER_DAY)} days",
            timeSpentMoving=f"{moving_ms / MS_PER_HOUR:.1f}h",
            geopoints=len(points),
            steps=steps,
            uniquePlaces=unique_places,
            countriesVisited=len(countries),
            activity=[
                ActivityEntry(
                    label=TOTAL_DISTANCE_LABEL,
                    distance=round(total_km, 2),
                    locations=unique_places,
                ),
            ],
            transport=TrackerStatisticsService._transport_breakdown(by_mode),
            countryTimeDistribution=TrackerStatisticsService._country_breakdown(
                by_country,
            ),
            visitedPlaces=unique_places,
            trainStationVisits=count_station_visits(station_visits, cooldown_ms),
        )
        logger.debug(
            "Statistics: %s over %d points, %d modes, %d countries",
            statistics.totalDistance,
            statistics.geopoints,
            len(statistics.transport),
            statistics.countriesVisited,
        )
        return statistics

    @staticmethod
    def _transport_breakdown(by_mode: dict[str, _ModeTotals]) -> list[TransportEntry]:
        """Per-mode entries sorted by distance, largest first."""
        ordered = sorted(
            by_mode.items(),
            key=lambda item: item[1].distance_m,
            reverse=True,
        )
        percentages = normalize_percentages([totals.distance_m for _, totals in ordered])
        return [
            TransportEntry(
                mode=mode,
                distance=round(totals.distance_m / 1000, 2),
                percentage=percentage,
                time=round_half_up(totals.time_ms / 1000),
                points=totals.points,
            )
            for (mode, totals), percentage in zip(ordered, percentages, strict=True)
        ]

    @staticmethod
    def _country_breakdown(by_country: dict[str, float]) -> list[CountryDistribution]:
        """Per-country entries sorted by distance, largest first."""
        ordered = sorted(by_country.items(), key=lambda item: item[1], reverse=True)
        percentages = normalize_percentages([distance for _, distance in ordered])
        return [
            CountryDistribution(
                country_code=country_code,
                distance=round(distance_m / 1000, 2),
                percent=percentage,
            )
            for (country_code, distance_m), percentage in zip(
                ordered, percentages, strict=True
            )
        ]
