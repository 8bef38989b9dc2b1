import pytest
from conftest import make_record

from analytics.services.tracker_statistics_service import (
    TrackerStatisticsService,
    count_station_visits,
    format_total_distance,
    normalize_percentages,
    round_half_up,
)
from core.exceptions import ConfigurationError
from transport_detection import process_tracker_data


def _statistics(records):
    return process_tracker_data(records).statistics


def test_normalize_percentages_assigns_residual_to_last() -> None:
    assert normalize_percentages([1, 1, 1]) == pytest.approx([33.33, 33.33, 33.34])
    assert normalize_percentages([2, 1]) == pytest.approx([66.67, 33.33])
    assert normalize_percentages([5]) == [100.0]
    assert normalize_percentages([]) == []


def test_normalize_percentages_with_zero_total() -> None:
    assert normalize_percentages([0.0, 0.0]) == [0.0, 100.0]


@pytest.mark.parametrize(
    "parts",
    [
        [1] * 7,
        [7, 3] * 6,
        [1, 2, 3] * 5,
        *([1] * n for n in range(2, 40)),
        *([n, 1, 1] for n in range(1, 40)),
    ],
)
def test_normalize_percentages_sum_is_exactly_100(parts) -> None:
    assert sum(normalize_percentages(parts)) == 100.0


def test_format_total_distance() -> None:
    assert format_total_distance(0) == "0.0 km"
    assert format_total_distance(12.345) == "12.3 km"
    assert format_total_distance(999.94) == "999.9 km"
    assert format_total_distance(1234.5) == "1.2k km"


def test_count_station_visits_deduplicates_loitering() -> None:
    visits = count_station_visits(
        {
            "Den Haag HS": [5],
            "Rotterdam Centraal": [3_600_001, 0, 1_000, 3_600_000],
        },
        3_600_000,
    )
    assert [(v.name, v.count) for v in visits] == [
        ("Rotterdam Centraal", 2),
        ("Den Haag HS", 1),
    ]


def test_empty_points_give_defaults() -> None:
    statistics = TrackerStatisticsService.calculate_statistics([])
    assert statistics.totalDistance == "0 km"
    assert statistics.timeSpent == "0 days"
    assert statistics.timeSpentMoving == "0h"
    assert statistics.locationsVisited == "0"
    assert statistics.geopoints == 0
    assert statistics.transport == []


def test_single_point_batch() -> None:
    statistics = _statistics([make_record(0, country_code="NL")])
    assert statistics.geopoints == 1
    assert statistics.totalDistance == "0.0 km"
    assert statistics.countriesVisited == 1
    assert statistics.transport == []
    assert statistics.countryTimeDistribution == []


def test_distance_time_and_earth_fraction() -> None:
    records = [
        make_record(0),
        make_record(1800, north_m=50_000),
        make_record(3600, north_m=100_000),
        make_record(2 * 86_400),
    ]
    statistics = _statistics(records)

    car = next(entry for entry in statistics.transport if entry.mode == "car")
    assert car.points == 2
    assert car.time == 3600
    assert car.distance == pytest.approx(100.0)
    assert statistics.timeSpent == "2 days"
    assert statistics.activity[0].label == "Total Distance"
    assert statistics.earthCircumferences == pytest.approx(
        float(statistics.activity[0].distance) / 40075,
        rel=1e-3,
    )


def test_transport_percentages_close_to_100() -> None:
    speeds = [4, 4, 20, 60, 60, 120, 200, 4, 1]
    records = [make_record(0, country_code="NL")]
    north_m = 0.0
    for i, speed in enumerate(speeds, start=1):
        north_m += speed / 3.6 * 60
        records.append(
            make_record(
                i * 60,
                north_m=north_m,
                country_code="NL" if i < 5 else "DE",
            )
        )
    statistics = _statistics(records)

    assert len(statistics.transport) > 2
    assert sum(e.percentage for e in statistics.transport) == 100.0
    assert sum(e.percent for e in statistics.countryTimeDistribution) == 100.0
    distances = [entry.distance for entry in statistics.transport]
    assert distances == sorted(distances, reverse=True)


def test_country_distance_goes_to_destination_point() -> None:
    records = [
        make_record(0, country_code="NL"),
        make_record(60, north_m=1000, country_code="NL"),
        make_record(180, north_m=3000, country_code="DE"),
    ]
    statistics = _statistics(records)

    assert statistics.countriesVisited == 2
    distribution = statistics.countryTimeDistribution
    assert [(entry.country_code, entry.distance) for entry in distribution] == [
        ("DE", 2.0),
        ("NL", 1.0),
    ]
    assert [entry.percent for entry in distribution] == pytest.approx([66.67, 33.33])


def test_steps_from_walking_distance(monkeypatch: pytest.MonkeyPatch) -> None:
    records = [make_record(0), make_record(3600, north_m=4000)]
    assert _statistics(records).steps == 5714

    monkeypatch.setenv("TRACKER_STEP_LENGTH_M", "0.8")
    assert _statistics(records).steps == 5000


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.5, 1), (1.5, 2), (2.5, 3), (2.4999, 2), (0.0, 0)],
)
def test_round_half_up(value, expected) -> None:
    assert round_half_up(value) == expected


def test_half_day_and_half_step_round_up(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRACKER_STEP_LENGTH_M", "1")
    records = [
        make_record(0, north_m=None),
        make_record(60, north_m=None, speed=4 / 3.6, distance=2.5),
        make_record(2.5 * 86_400, north_m=None, speed=0.5 / 3.6),
    ]
    statistics = _statistics(records)
    assert statistics.steps == 3
    assert statistics.timeSpent == "3 days"


def test_no_walking_means_no_steps() -> None:
    records = [make_record(0), make_record(60, north_m=1000)]
    assert _statistics(records).steps == 0


def test_place_needs_an_hour_of_contiguous_dwell(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    amsterdam = {"address": {"city": "Amsterdam"}}
    short_stay = [
        make_record(0, geocode=amsterdam),
        make_record(1800, geocode=amsterdam),
    ]
    long_stay = [*short_stay, make_record(3601, geocode=amsterdam)]

    assert _statistics(short_stay).uniquePlaces == 0
    statistics = _statistics(long_stay)
    assert statistics.uniquePlaces == 1
    assert statistics.visitedPlaces == 1
    assert statistics.locationsVisited == "1"

    monkeypatch.setenv("TRACKER_PLACE_DWELL_MS", "60000")
    assert _statistics(short_stay).uniquePlaces == 1


def test_time_away_from_a_place_is_not_dwell() -> None:
    amsterdam = {"address": {"city": "Amsterdam"}}
    haarlem = {"address": {"town": "Haarlem"}}
    records = [
        make_record(0, geocode=amsterdam),
        make_record(2000, geocode=amsterdam),
        make_record(2100, geocode=haarlem),
        make_record(4000, geocode=amsterdam),
        make_record(5000, geocode=amsterdam),
    ]
    assert _statistics(records).uniquePlaces == 0

    # separate stays still add up
    records.append(make_record(5700, geocode=amsterdam))
    assert _statistics(records).uniquePlaces == 1


def test_train_station_visits_are_counted() -> None:
    centraal = {"amenity": "train_station", "name": "Amsterdam Centraal"}
    zuid = {"amenity": "train_station", "display_name": "Amsterdam Zuid"}
    records = [
        make_record(0, geocode=centraal),
        make_record(600, geocode=centraal),
        make_record(1200, geocode=zuid),
        make_record(7200, geocode=centraal),
    ]
    visits = _statistics(records).trainStationVisits
    assert [(v.name, v.count) for v in visits] == [
        ("Amsterdam Centraal", 2),
        ("Amsterdam Zuid", 1),
    ]


def test_invalid_threshold_override_is_reported(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("TRACKER_STATION_VISIT_COOLDOWN_MS", "soon")
    with pytest.raises(ConfigurationError):
        _statistics([make_record(0), make_record(60, north_m=100)])
