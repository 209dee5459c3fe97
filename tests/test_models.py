from __future__ import annotations

import math

import pytest

from trackme.core.models import Empty, EmptyReason, GeoPoint, Loaded


def test_geopoint_value_equality_and_hashing() -> None:
    assert GeoPoint(1.0, 2.0) == GeoPoint(1.0, 2.0)
    assert GeoPoint(1.0, 2.0) != GeoPoint(2.0, 1.0)
    assert len({GeoPoint(1.0, 2.0), GeoPoint(1.0, 2.0)}) == 1


def test_geopoint_is_immutable() -> None:
    point = GeoPoint(1.0, 2.0)
    with pytest.raises(AttributeError):
        point.latitude = 5.0  # type: ignore[misc]


def test_to_json_uses_long_field_names() -> None:
    assert GeoPoint(37.7749, -122.4194).to_json() == {"latitude": 37.7749, "longitude": -122.4194}


@pytest.mark.parametrize(
    "payload",
    [
        {"latitude": 10.5, "longitude": -20.25},
        {"lat": 10.5, "lng": -20.25},
        {"lat": 10.5, "lon": -20.25},
        {"coordinates": [-20.25, 10.5]},
        {"latitude": 10.5, "longitude": -20.25, "accuracy": 4.0},
    ],
)
def test_from_json_accepts_known_shapes(payload) -> None:
    assert GeoPoint.from_json(payload) == GeoPoint(10.5, -20.25)


@pytest.mark.parametrize(
    "payload",
    [
        [1.0, 2.0],
        {"latitude": 1.0},
        {"latitude": True, "longitude": 2.0},
        {"latitude": None, "longitude": 2.0},
        {"latitude": math.nan, "longitude": 2.0},
        {"latitude": math.inf, "longitude": 2.0},
        {"latitude": "37.0", "longitude": "inf"},
        {"latitude": "10.5", "longitude": -20.25},
        {"latitude": 10 ** 400, "longitude": 2.0},
        {"coordinates": [1.0]},
        {"coordinates": "1,2"},
    ],
)
def test_from_json_rejects_bad_payloads(payload) -> None:
    with pytest.raises(ValueError):
        GeoPoint.from_json(payload)


def test_out_of_range_coordinates_are_not_validated() -> None:
    assert GeoPoint.from_json({"lat": 123.0, "lng": 500.0}) == GeoPoint(123.0, 500.0)


def test_load_results_expose_points_and_reason() -> None:
    loaded = Loaded((GeoPoint(1.0, 2.0),))
    empty = Empty(EmptyReason.MALFORMED, "Expecting value")

    assert loaded.ok and loaded.points == (GeoPoint(1.0, 2.0),)
    assert not empty.ok and empty.points == ()
    assert empty.reason is EmptyReason.MALFORMED


@pytest.mark.parametrize(
    "lat, lng",
    [(math.nan, 5.0), (1.0, math.inf), (-math.inf, 0.0), ("1.0", 2.0), (True, 2.0), (10 ** 400, 0.0)],
)
def test_constructor_rejects_non_finite_or_non_numeric(lat, lng) -> None:
    with pytest.raises(ValueError):
        GeoPoint(lat, lng)


def test_constructor_normalizes_ints_to_float() -> None:
    point = GeoPoint(37, -122)
    assert isinstance(point.latitude, float)
    assert point == GeoPoint(37.0, -122.0)
