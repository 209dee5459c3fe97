from __future__ import annotations

import io
import json
import threading
import time

from trackme.core.models import GeoPoint
from trackme.core.position_stream import parse_position, start_reader, stream_positions


def _line(**fields: object) -> str:
    return json.dumps(fields)


def test_parse_position_handles_json_and_csv() -> None:
    assert parse_position(_line(latitude=37.0, longitude=-122.0)) == GeoPoint(37.0, -122.0)
    assert parse_position(_line(lat=37.0, lng=-122.0, timestamp="2024-01-01T00:00:00Z")) == GeoPoint(37.0, -122.0)
    assert parse_position(" 37.5 , -122.5 \n") == GeoPoint(37.5, -122.5)


def test_parse_position_skips_unusable_lines() -> None:
    assert parse_position("") is None
    assert parse_position("   \n") is None
    assert parse_position("{not json") is None
    assert parse_position("[1, 2]") is None
    assert parse_position(_line(latitude=1.0)) is None
    assert parse_position("1.0,2.0,3.0") is None
    assert parse_position("north,west") is None


def test_stream_positions_forwards_points_in_order() -> None:
    received: list[GeoPoint] = []
    lines = [
        _line(latitude=1.0, longitude=2.0),
        "garbage",
        "",
        "3.0,4.0",
        _line(lat=5.0, lon=6.0),
    ]

    count = stream_positions(lines, received.append)

    assert count == 3
    assert received == [GeoPoint(1.0, 2.0), GeoPoint(3.0, 4.0), GeoPoint(5.0, 6.0)]


def test_stream_positions_survives_callback_errors() -> None:
    received: list[GeoPoint] = []

    def _callback(point: GeoPoint) -> None:
        if point.latitude == 1.0:
            raise RuntimeError("boom")
        received.append(point)

    count = stream_positions(["1.0,1.0", "2.0,2.0"], _callback)

    assert count == 1
    assert received == [GeoPoint(2.0, 2.0)]


def test_stream_positions_honours_stop_event() -> None:
    stop = threading.Event()
    stop.set()
    received: list[GeoPoint] = []

    assert stream_positions(["1.0,1.0"], received.append, stop_event=stop) == 0
    assert received == []


def test_start_reader_background_thread() -> None:
    received: list[GeoPoint] = []
    buffer = io.StringIO("\n".join(["1.0,2.0", _line(latitude=3.0, longitude=4.0)]) + "\n")

    handle = start_reader(buffer, received.append)

    # Allow background thread to drain the buffer
    timeout = time.time() + 1.0
    while time.time() < timeout and handle.is_alive():
        time.sleep(0.01)

    handle.stop(join=True, timeout=1.0)

    assert not handle.is_alive()
    assert received == [GeoPoint(1.0, 2.0), GeoPoint(3.0, 4.0)]


def test_parse_position_drops_non_finite_and_oversized_values() -> None:
    assert parse_position("inf,1.0") is None
    assert parse_position("nan,2") is None
    assert parse_position('{"latitude": NaN, "longitude": 1.0}') is None
    assert parse_position('{"latitude": "37.0", "longitude": "inf"}') is None
    assert parse_position('{"latitude": 1' + "0" * 400 + ', "longitude": 0.0}') is None
    assert parse_position('{"latitude": ' + "9" * 5000 + ', "longitude": 0.0}') is None
    assert parse_position('{"a": ' + "[" * 100000) is None


def test_stream_positions_continues_past_rejected_lines() -> None:
    received: list[GeoPoint] = []
    lines = [
        "nan,5",
        '{"latitude": 1' + "0" * 400 + ', "longitude": 0.0}',
        '{"nested": ' + "[" * 100000,
        "1.0,2.0",
    ]

    assert stream_positions(lines, received.append) == 1
    assert received == [GeoPoint(1.0, 2.0)]
