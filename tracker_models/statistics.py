"""Aggregate statistics and processing result models.

Field names on these models are part of the public response contract and
are consumed verbatim by existing clients, hence the camelCase.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from tracker_models.tracker_point import EnrichedPoint


class ActivityEntry(BaseModel):
    label: str
    distance: float
    locations: int


class TransportEntry(BaseModel):
    """Per-mode share of the travelled distance."""

    mode: str
    distance: float  # km
    percentage: float
    time: int  # seconds
    points: int


class CountryDistribution(BaseModel):
    country_code: str
    distance: float  # km
    percent: float


class StationVisit(BaseModel):
    name: str
    count: int


class TripStatistics(BaseModel):
    """Summary statistics for one batch of tracker points.

    The defaults are the values reported for an empty batch.
    """

    totalDistance: str = "0 km"
    earthCircumferences: float = 0.0
    locationsVisited: str = "0"
    timeSpent: str = "0 days"
    timeSpentMoving: str = "0h"
    geopoints: int = 0
    steps: int = 0
    uniquePlaces: int = 0
    countriesVisited: int = 0
    activity: list[ActivityEntry] = Field(default_factory=list)
    transport: list[TransportEntry] = Field(default_factory=list)
    countryTimeDistribution: list[CountryDistribution] = Field(default_factory=list)
    visitedPlaces: int = 0
    trainStationVisits: list[StationVisit] = Field(default_factory=list)


class DataRange(BaseModel):
    earliest: str
    latest: str


class DateFilterSummary(BaseModel):
    """Echo of the date filter applied before detection."""

    startDate: str = "none"
    endDate: str = "none"
    dateRangeApplied: bool = False
    actualDataRange: DataRange | None = None


class SegmentDiagnostics(BaseModel):
    """Non-fatal counters collected while computing segment metrics."""

    missingCoords: int = 0
    zeroTimeDiff: int = 0
    total: int = 0
    skipped: int | None = None
    dateFilters: DateFilterSummary | None = None


class TrackerDataResult(BaseModel):
    """Full engine output for one invocation."""

    enrichedPoints: list[EnrichedPoint] = Field(default_factory=list)
    statistics: TripStatistics | None = None
    debug: SegmentDiagnostics = Field(default_factory=SegmentDiagnostics)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON response contract."""
        debug = self.debug.model_dump(mode="json", exclude_none=True)
        if self.debug.dateFilters is not None:
            # actualDataRange is reported as null when the filter kept nothing
            debug["dateFilters"] = self.debug.dateFilters.model_dump(mode="json")
        return {
            "enrichedPoints": [point.to_dict() for point in self.enrichedPoints],
            "statistics": (
                self.statistics.model_dump(mode="json")
                if self.statistics is not None
                else None
            ),
            "debug": debug,
        }
