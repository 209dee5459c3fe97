"""In-memory track log kept in sync with its durable mirror."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Tuple

from .models import GeoPoint

if TYPE_CHECKING:
    from ..dataio.location_storage import LocationStorage

logger = logging.getLogger(__name__)


class TrackLog:
    """Ordered points recorded this session plus the storage that mirrors them.

    The in-memory list is authoritative once loaded; every mutation rewrites
    the mirror in full. The RLock lets the single writer (the position reader
    thread) mutate while readers take snapshots for display.
    """

    def __init__(self, storage: "LocationStorage", points: Iterable[GeoPoint] = ()) -> None:
        self._storage = storage
        self._points: List[GeoPoint] = list(points)
        self._lock = threading.RLock()

    @classmethod
    def open(cls, storage: "LocationStorage") -> "TrackLog":
        """Create a log seeded from whatever the mirror currently holds."""
        result = storage.load_result()
        if not result.ok:
            logger.info("Starting with an empty track (%s)", result.reason.value)
        return cls(storage, result.points)

    @property
    def storage(self) -> "LocationStorage":
        return self._storage

    @property
    def points(self) -> Tuple[GeoPoint, ...]:
        """Read-only snapshot of the current sequence."""
        with self._lock:
            return tuple(self._points)

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return not self._points

    def latest(self) -> Optional[GeoPoint]:
        with self._lock:
            return self._points[-1] if self._points else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._points)

    def __iter__(self) -> Iterator[GeoPoint]:
        return iter(self.points)

    def append(self, point: GeoPoint) -> bool:
        """
        Add one point and re-persist the whole sequence.

        The point stays in memory even if the write fails; the return value
        only reports whether the mirror caught up.
        """
        with self._lock:
            self._points.append(point)
            logger.debug("New position: %s, %s", point.latitude, point.longitude)
            return self._storage.replace(self._points)

    def replace(self, points: Iterable[GeoPoint]) -> bool:
        with self._lock:
            self._points = list(points)
            return self._storage.replace(self._points)

    def clear(self) -> bool:
        """Clear the mirror, then drop the in-memory points if that worked."""
        with self._lock:
            if not self._storage.clear():
                return False
            self._points = []
            return True
