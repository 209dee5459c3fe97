"""Shared dataclasses for recorded points and mirror load results."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Tuple


def _coerce_coordinate(value: Any, name: str) -> float:
    """Accept only JSON numbers that fit a finite float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError as exc:
        raise ValueError(f"{name} is out of float range") from exc
    if not math.isfinite(number):
        raise ValueError(f"{name} must be finite, got {number!r}")
    return number


def _pick(obj: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in obj:
            return obj[key]
    return None


@dataclass(frozen=True)
class GeoPoint:
    """Latitude/longitude pair in degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        # Non-finite values would serialize as NaN/Infinity, which is not JSON.
        object.__setattr__(self, "latitude", _coerce_coordinate(self.latitude, "latitude"))
        object.__setattr__(self, "longitude", _coerce_coordinate(self.longitude, "longitude"))

    def to_json(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}

    @classmethod
    def from_json(cls, obj: Any) -> "GeoPoint":
        """
        Build a point from a decoded JSON object.

        Supported shapes::

            {"latitude": 37.7, "longitude": -122.4}
            {"lat": 37.7, "lng": -122.4}        # "lon" also accepted
            {"coordinates": [-122.4, 37.7]}     # GeoJSON order: lng, lat

        Coordinates must be JSON numbers (not strings) and finite.
        Raises ``ValueError`` for anything else.
        """
        if not isinstance(obj, Mapping):
            raise ValueError(f"Expected a JSON object, got {type(obj).__name__}")

        coords = obj.get("coordinates")
        if coords is not None:
            if not isinstance(coords, (list, tuple)) or len(coords) < 2:
                raise ValueError(f"Bad coordinates field: {coords!r}")
            lng, lat = coords[0], coords[1]
        else:
            lat = _pick(obj, "latitude", "lat")
            lng = _pick(obj, "longitude", "lng", "lon")

        return cls(
            latitude=lat,
            longitude=lng,
        )

    def __str__(self) -> str:
        return f"LatLng(latitude:{self.latitude:.6f}, longitude:{self.longitude:.6f})"


class EmptyReason(str, Enum):
    """Why a mirror read produced no points."""

    MISSING = "missing"
    ZERO_LENGTH = "zero_length"
    UNREADABLE = "unreadable"
    MALFORMED = "malformed"
    WRONG_SCHEMA = "wrong_schema"


@dataclass(frozen=True)
class Loaded:
    points: Tuple[GeoPoint, ...]

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Empty:
    reason: EmptyReason
    detail: str = ""
    points: Tuple[GeoPoint, ...] = field(default=(), init=False)

    @property
    def ok(self) -> bool:
        return False


LoadResult = Loaded | Empty
