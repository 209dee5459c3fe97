"""Encoding helpers for the flat JSON track file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List

from ..core.models import GeoPoint


def encode_points(points: Iterable[GeoPoint]) -> str:
    """Serialize points to a compact JSON array of latitude/longitude objects."""
    return json.dumps([p.to_json() for p in points], separators=(",", ":"), allow_nan=False)


def decode_points(payload: Any) -> List[GeoPoint]:
    """
    Convert a decoded JSON document into points.

    The whole document is rejected (``ValueError``) if it is not an array or
    if any element is not a point object.
    """
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array, got {type(payload).__name__}")
    return [GeoPoint.from_json(item) for item in payload]


def write_text(path: Path, content: str) -> None:
    """
    Overwrite *path* with *content* (UTF-8).

    Directories are created as needed. The write is not atomic.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        fh.write(content)
