"""
Helpers for consuming position events from a line-oriented source.

Accepted line formats::

    {"latitude": 37.77, "longitude": -122.41, "timestamp": "..."}
    {"lat": 37.77, "lng": -122.41}
    37.77,-122.41

Extra JSON keys are ignored. Anything else is logged and skipped.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Callable, Optional

from .models import GeoPoint

logger = logging.getLogger(__name__)

PositionCallback = Callable[[GeoPoint], object]


def _parse_csv_line(line: str) -> Optional[GeoPoint]:
    tokens = [t.strip() for t in line.split(",")]
    if len(tokens) != 2:
        logger.warning("Dropping malformed position line: %r", line)
        return None
    try:
        return GeoPoint(latitude=float(tokens[0]), longitude=float(tokens[1]))
    except ValueError as exc:
        logger.warning("Dropping malformed position line: %r (%s)", line, exc)
        return None


def parse_position(raw_line: str) -> Optional[GeoPoint]:
    """Decode one line into a :class:`GeoPoint`, or ``None`` if unusable."""
    line = raw_line.strip()
    if not line:
        return None

    if not line.startswith("{"):
        return _parse_csv_line(line)

    try:
        record = json.loads(line)
    except (ValueError, RecursionError) as exc:
        logger.warning("Dropping malformed JSON line: %s (%s)", line, exc)
        return None

    if not isinstance(record, Mapping):
        logger.debug("Skipping non-object JSON payload: %r", record)
        return None

    try:
        return GeoPoint.from_json(record)
    except ValueError as exc:
        logger.warning("Dropping position record %r (%s)", record, exc)
        return None


def stream_positions(
    lines: Iterable[str],
    callback: PositionCallback,
    *,
    stop_event: Optional[threading.Event] = None,
) -> int:
    """
    Parse incoming lines and forward each decoded point to *callback*.

    Stops when the input is exhausted or *stop_event* is set. Errors raised
    by the callback are logged and the loop keeps going. Returns the number
    of points handed to the callback.
    """
    forwarded = 0
    for raw_line in lines:
        if stop_event is not None and stop_event.is_set():
            break

        point = parse_position(raw_line)
        if point is None:
            continue

        try:
            callback(point)
        except Exception:
            logger.exception("Error in position callback for %s", point)
            continue
        forwarded += 1
    return forwarded


@dataclass
class PositionReaderHandle:
    thread: threading.Thread
    stop_event: threading.Event

    def stop(self, *, join: bool = False, timeout: Optional[float] = None) -> None:
        self.stop_event.set()
        if join:
            self.thread.join(timeout)

    def is_alive(self) -> bool:
        return self.thread.is_alive()


def start_reader(
    lines: Iterable[str],
    callback: PositionCallback,
    *,
    thread_name: Optional[str] = None,
) -> PositionReaderHandle:
    """Start a daemon thread that feeds *callback* from *lines*."""
    stop_event = threading.Event()

    def _target() -> None:
        count = stream_positions(lines, callback, stop_event=stop_event)
        logger.info("Position reader finished after %d positions", count)

    thread = threading.Thread(
        target=_target,
        name=thread_name or "TrackMePositionReader",
        daemon=True,
    )
    thread.start()
    return PositionReaderHandle(thread=thread, stop_event=stop_event)
