"""Distance and extent calculations over recorded tracks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
from numpy.typing import ArrayLike

from ..core.models import GeoPoint

EARTH_RADIUS_M = 6371000.0


def haversine_m(lat1: ArrayLike, lon1: ArrayLike, lat2: ArrayLike, lon2: ArrayLike) -> np.ndarray | float:
    """
    Great-circle distance in metres between two points (degrees).

    Works element-wise on arrays; scalar inputs give a numpy scalar.
    """
    lat1_rad, lon1_rad = np.deg2rad(lat1), np.deg2rad(lon1)
    lat2_rad, lon2_rad = np.deg2rad(lat2), np.deg2rad(lon2)

    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad

    a = np.sin(dlat / 2.0) ** 2 + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(dlon / 2.0) ** 2
    c = 2.0 * np.arcsin(np.sqrt(np.clip(a, 0.0, 1.0)))
    return EARTH_RADIUS_M * c


def _as_array(points: Sequence[GeoPoint]) -> np.ndarray:
    if not points:
        return np.empty((0, 2), dtype=np.float64)
    return np.array([(p.latitude, p.longitude) for p in points], dtype=np.float64)


def segment_lengths_m(points: Sequence[GeoPoint]) -> np.ndarray:
    """Distances between consecutive points (length ``len(points) - 1``)."""
    coords = _as_array(points)
    if coords.shape[0] < 2:
        return np.empty(0, dtype=np.float64)
    return haversine_m(coords[:-1, 0], coords[:-1, 1], coords[1:, 0], coords[1:, 1])


def path_length_m(points: Sequence[GeoPoint]) -> float:
    return float(np.sum(segment_lengths_m(points)))


@dataclass(frozen=True)
class TrackBounds:
    min_latitude: float
    min_longitude: float
    max_latitude: float
    max_longitude: float

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(
            latitude=(self.min_latitude + self.max_latitude) / 2.0,
            longitude=(self.min_longitude + self.max_longitude) / 2.0,
        )


def bounds(points: Sequence[GeoPoint]) -> Optional[TrackBounds]:
    coords = _as_array(points)
    if coords.shape[0] == 0:
        return None
    lo = coords.min(axis=0)
    hi = coords.max(axis=0)
    return TrackBounds(
        min_latitude=float(lo[0]),
        min_longitude=float(lo[1]),
        max_latitude=float(hi[0]),
        max_longitude=float(hi[1]),
    )


@dataclass(frozen=True)
class TrackSummary:
    count: int
    length_m: float
    first: Optional[GeoPoint]
    last: Optional[GeoPoint]
    bounds: Optional[TrackBounds]

    def lines(self) -> list[str]:
        """Human-readable rows for the CLI."""
        rows = [f"points: {self.count}", f"length: {self.length_m:.1f} m"]
        if self.first is not None and self.last is not None:
            rows.append(f"first:  {self.first}")
            rows.append(f"last:   {self.last}")
        if self.bounds is not None:
            b = self.bounds
            rows.append(
                f"bounds: lat [{b.min_latitude:.6f}, {b.max_latitude:.6f}] "
                f"lng [{b.min_longitude:.6f}, {b.max_longitude:.6f}]"
            )
        return rows


def summarize(points: Sequence[GeoPoint]) -> TrackSummary:
    pts = list(points)
    return TrackSummary(
        count=len(pts),
        length_m=path_length_m(pts),
        first=pts[0] if pts else None,
        last=pts[-1] if pts else None,
        bounds=bounds(pts),
    )
