"""Durable mirror of the track log: one JSON file per track."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from ..core.models import Empty, EmptyReason, GeoPoint, Loaded, LoadResult
from ..tools.debug import time_block
from .track_file import decode_points, encode_points, write_text

logger = logging.getLogger(__name__)


class LocationStorage:
    """
    Read and rewrite the on-disk copy of a track.

    Reads never raise: every failure becomes an :class:`Empty` result.
    Writes report success as a bool and log the underlying ``OSError``.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def __repr__(self) -> str:
        return f"LocationStorage({str(self.path)!r})"

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------
    def load_result(self) -> LoadResult:
        """Read the whole mirror and say why it is empty when it is."""
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            logger.debug("No track file at %s", self.path)
            return Empty(EmptyReason.MISSING)
        except OSError as exc:
            logger.warning("Error reading locations from %s: %s", self.path, exc)
            return Empty(EmptyReason.UNREADABLE, str(exc))

        if not raw:
            logger.debug("Track file %s is empty", self.path)
            return Empty(EmptyReason.ZERO_LENGTH)

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.warning("Error reading locations from %s: %s", self.path, exc)
            return Empty(EmptyReason.UNREADABLE, str(exc))

        try:
            payload = json.loads(text)
        except (ValueError, RecursionError) as exc:
            logger.warning("Error reading locations from %s: %s", self.path, exc)
            return Empty(EmptyReason.MALFORMED, str(exc))

        try:
            points = decode_points(payload)
        except ValueError as exc:
            logger.warning("Unexpected track layout in %s: %s", self.path, exc)
            return Empty(EmptyReason.WRONG_SCHEMA, str(exc))

        logger.debug("Read %d locations from %s", len(points), self.path)
        return Loaded(tuple(points))

    def load(self) -> list[GeoPoint]:
        """Return the stored points, or ``[]`` if the mirror is unusable."""
        return list(self.load_result().points)

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------
    def replace(self, points: Iterable[GeoPoint]) -> bool:
        """Overwrite the mirror with the full serialized *points*."""
        content = encode_points(points)
        return self._write(content, action="write")

    def clear(self) -> bool:
        """Truncate the mirror to zero bytes (not ``[]``)."""
        return self._write("", action="clear")

    def _write(self, content: str, *, action: str) -> bool:
        try:
            with time_block(f"track {action} ({len(content)} chars)"):
                write_text(self.path, content)
        except OSError:
            logger.exception("Failed to %s locations at %s", action, self.path)
            return False
        logger.debug("Track %s: %d chars to %s", action, len(content), self.path)
        return True
