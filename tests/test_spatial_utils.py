import pytest

from core.spatial import GeometryService


def test_validate_coordinate_pair() -> None:
    valid, coords = GeometryService.validate_coordinate_pair([-97.0, 32.0])
    assert valid
    assert coords == [-97.0, 32.0]

    invalid, coords = GeometryService.validate_coordinate_pair([200.0, 0.0])
    assert not invalid
    assert coords is None


def test_haversine_distance_one_degree_of_latitude() -> None:
    distance = GeometryService.haversine_distance(0.0, 0.0, 0.0, 1.0)
    assert distance == pytest.approx(111_194.9, abs=0.1)
    assert GeometryService.haversine_distance(0.0, 0.0, 0.0, 1.0, unit="km") == (
        pytest.approx(111.1949, abs=1e-4)
    )


def test_haversine_distance_rejects_unknown_unit() -> None:
    with pytest.raises(ValueError):
        GeometryService.haversine_distance(0.0, 0.0, 0.0, 1.0, unit="furlongs")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ({"type": "Point", "coordinates": [4.9, 52.37]}, [4.9, 52.37]),
        ({"lat": 52.37, "lon": 4.9}, [4.9, 52.37]),
        ({"lat": 52.37, "lng": 4.9}, [4.9, 52.37]),
        ([4.9, 52.37], [4.9, 52.37]),
        ({"type": "LineString", "coordinates": [[4.9, 52.37], [4.8, 52.3]]}, None),
        ({"type": "Point", "coordinates": ["x", 52.37]}, None),
        ({"lat": 95.0, "lon": 4.9}, None),
        ("52.37,4.9", None),
        (None, None),
    ],
)
def test_point_coordinates_shapes(value, expected) -> None:
    assert GeometryService.point_coordinates(value) == expected
