from datetime import UTC, datetime

import pytest
from conftest import make_record

from core.exceptions import InvalidTrackerPointError
from tracker_models import (
    DETECTION_REASON_LABELS,
    DetectionReason,
    Geocode,
    TrackerPoint,
    get_detection_reason_label,
    parse_tracker_point,
)


def test_tracker_point_normalizes_location_shapes() -> None:
    point = TrackerPoint.model_validate(
        {"recorded_at": "2024-05-01T08:00:00Z", "location": {"lat": 52.37, "lng": 4.9}}
    )
    assert point.location == {"type": "Point", "coordinates": [4.9, 52.37]}
    assert point.coordinates == [4.9, 52.37]
    assert point.recorded_at == datetime(2024, 5, 1, 8, 0, tzinfo=UTC)


def test_tracker_point_drops_unusable_location() -> None:
    point = TrackerPoint.model_validate(
        {"recorded_at": "2024-05-01T08:00:00Z", "location": {"lat": "north"}}
    )
    assert point.location is None
    assert point.coordinates is None


def test_tracker_point_parses_geocode_json_string() -> None:
    point = TrackerPoint.model_validate(
        make_record(0, geocode='{"amenity": "train_station", "name": "Centraal"}')
    )
    assert point.tags is not None
    assert point.tags.amenity == "train_station"
    assert point.tags.station_name == "Centraal"


def test_tracker_point_ignores_malformed_geocode() -> None:
    point = TrackerPoint.model_validate(make_record(0, geocode="{not json"))
    assert point.geocode is None

    point = TrackerPoint.model_validate(make_record(0, geocode=["railway"]))
    assert point.geocode is None


def test_error_geocode_is_kept_but_not_usable() -> None:
    point = TrackerPoint.model_validate(
        make_record(0, geocode={"error": "Rate limited", "type": "railway_station"})
    )
    assert point.geocode is not None
    assert point.geocode.is_error
    assert point.tags is None


@pytest.mark.parametrize("marker", [None, False, ""])
def test_error_key_marks_failure_whatever_its_value(marker) -> None:
    point = TrackerPoint.model_validate(
        make_record(0, geocode={"error": marker, "type": "railway_station"})
    )
    assert point.geocode.is_error
    assert point.tags is None


def test_geocode_without_error_key_is_usable() -> None:
    geocode = Geocode.model_validate({"type": "golf_course"})
    assert not geocode.is_error


def test_geocode_reads_class_alias_and_place_name() -> None:
    geocode = Geocode.model_validate(
        {"class": "railway", "address": {"town": "Delft", "country": "NL"}, "osm_id": 7}
    )
    assert geocode.class_ == "railway"
    assert geocode.place_name == "Delft"
    assert geocode.model_dump(by_alias=True, exclude_unset=True) == {
        "class": "railway",
        "address": {"town": "Delft", "country": "NL"},
        "osm_id": 7,
    }


def test_geocode_ignores_non_string_tags() -> None:
    geocode = Geocode.model_validate({"amenity": 12, "address": "Main St"})
    assert geocode.amenity is None
    assert geocode.address is None
    assert geocode.place_name is None


def test_measurements_are_coerced_or_dropped() -> None:
    point = TrackerPoint.model_validate(
        make_record(0, speed="3.5", distance="far", time_spent=None)
    )
    assert point.speed == 3.5
    assert point.distance is None
    assert point.time_spent is None


def test_extra_fields_are_echoed() -> None:
    point = TrackerPoint.model_validate(make_record(0, user_id="u-1", altitude=12.5))
    data = point.to_dict()
    assert data["user_id"] == "u-1"
    assert data["altitude"] == 12.5
    assert data["recorded_at"].startswith("2024-05-01T08:00:00")


def test_parse_tracker_point_rejects_unusable_records() -> None:
    with pytest.raises(InvalidTrackerPointError):
        parse_tracker_point({"recorded_at": "yesterday-ish"})
    with pytest.raises(InvalidTrackerPointError):
        parse_tracker_point({"location": [4.9, 52.37]})
    with pytest.raises(InvalidTrackerPointError):
        parse_tracker_point("2024-05-01T08:00:00Z")


def test_parse_tracker_point_passes_models_through() -> None:
    point = TrackerPoint.model_validate(make_record(0))
    assert parse_tracker_point(point) is point


def test_every_detection_reason_has_a_label() -> None:
    assert set(DETECTION_REASON_LABELS) == set(DetectionReason)
    assert get_detection_reason_label("keep-continuity") == (
        "Continuity maintained, mode preserved"
    )
    assert get_detection_reason_label("LEGACY_REASON") == "LEGACY_REASON"
    assert get_detection_reason_label(None) == ""
