"""Core tracking pieces: point models, the track log, and position intake.

The track log sits between the position source and the display: the
recorder in :mod:`recorder` turns each incoming position into an append,
and the log keeps its durable mirror in sync.
"""

from .models import EmptyReason, Empty, GeoPoint, Loaded, LoadResult
from .position_stream import PositionReaderHandle, parse_position, start_reader, stream_positions
from .track_log import TrackLog

__all__ = [
    "GeoPoint",
    "Loaded",
    "Empty",
    "EmptyReason",
    "LoadResult",
    "TrackLog",
    "PositionReaderHandle",
    "parse_position",
    "stream_positions",
    "start_reader",
]
