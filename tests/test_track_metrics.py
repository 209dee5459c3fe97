from __future__ import annotations

import numpy as np
import pytest

from trackme.analysis.track_metrics import (
    bounds,
    haversine_m,
    path_length_m,
    segment_lengths_m,
    summarize,
)
from trackme.core.models import GeoPoint


def test_haversine_one_degree_of_latitude() -> None:
    assert haversine_m(0.0, 0.0, 1.0, 0.0) == pytest.approx(111195.0, rel=1e-3)


def test_haversine_is_zero_for_same_point() -> None:
    assert haversine_m(37.7749, -122.4194, 37.7749, -122.4194) == pytest.approx(0.0)


def test_haversine_vectorised() -> None:
    result = haversine_m(np.array([0.0, 0.0]), np.array([0.0, 0.0]), np.array([1.0, 0.0]), np.array([0.0, 1.0]))
    assert result.shape == (2,)
    np.testing.assert_allclose(result, [111195.0, 111195.0], rtol=1e-3)


def test_segment_lengths_and_path_length() -> None:
    points = [GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0), GeoPoint(1.0, 0.0)]

    segments = segment_lengths_m(points)

    assert segments.shape == (2,)
    assert segments[1] == pytest.approx(0.0)
    assert path_length_m(points) == pytest.approx(111195.0, rel=1e-3)


def test_short_tracks_have_zero_length() -> None:
    assert path_length_m([]) == 0.0
    assert path_length_m([GeoPoint(5.0, 5.0)]) == 0.0


def test_bounds_and_center() -> None:
    b = bounds([GeoPoint(1.0, -3.0), GeoPoint(-1.0, 5.0), GeoPoint(0.5, 0.0)])

    assert b is not None
    assert (b.min_latitude, b.max_latitude) == (-1.0, 1.0)
    assert (b.min_longitude, b.max_longitude) == (-3.0, 5.0)
    assert b.center == GeoPoint(0.0, 1.0)
    assert bounds([]) is None


def test_summarize_empty_and_non_empty() -> None:
    empty = summarize([])
    assert empty.count == 0
    assert empty.length_m == 0.0
    assert empty.first is None and empty.last is None and empty.bounds is None
    assert empty.lines() == ["points: 0", "length: 0.0 m"]

    summary = summarize([GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0)])
    assert summary.count == 2
    assert summary.first == GeoPoint(0.0, 0.0)
    assert summary.last == GeoPoint(0.0, 1.0)
    assert len(summary.lines()) == 5
