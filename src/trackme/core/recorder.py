"""Turn incoming position events into track log appends."""

from __future__ import annotations

import logging

from ..analysis.track_metrics import haversine_m
from .models import GeoPoint
from .track_log import TrackLog

logger = logging.getLogger(__name__)


class TrackRecorder:
    """
    Single writer for a :class:`TrackLog`.

    ``distance_filter_m`` is the minimum distance from the latest recorded
    point before a new one is kept. ``0`` records every event.
    """

    def __init__(self, track_log: TrackLog, distance_filter_m: float = 0.0) -> None:
        if distance_filter_m < 0:
            raise ValueError(f"distance_filter_m must be >= 0, got {distance_filter_m}")
        self.track_log = track_log
        self.distance_filter_m = float(distance_filter_m)
        self.recorded = 0
        self.skipped = 0
        self.write_failures = 0

    def _too_close(self, point: GeoPoint) -> bool:
        if self.distance_filter_m <= 0.0:
            return False
        last = self.track_log.latest()
        if last is None:
            return False
        dist = float(haversine_m(last.latitude, last.longitude, point.latitude, point.longitude))
        return dist < self.distance_filter_m

    def on_position(self, point: GeoPoint) -> bool:
        """Record *point*; returns ``False`` if it was filtered or not persisted."""
        if self._too_close(point):
            self.skipped += 1
            logger.debug("Skipping %s: within %.1f m of last point", point, self.distance_filter_m)
            return False

        self.recorded += 1
        persisted = self.track_log.append(point)
        if not persisted:
            self.write_failures += 1
        return persisted
