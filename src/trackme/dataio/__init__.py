"""Data input/output helpers for the track mirror file.

Disk-level concerns stay here, away from the in-memory track log:
- :mod:`track_file` encodes/decodes the JSON array and writes it.
- :mod:`location_storage` wraps one mirror path with load/replace/clear.
"""

from .location_storage import LocationStorage

__all__ = ["LocationStorage"]
