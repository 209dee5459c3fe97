"""TrackMe: record positions into a persisted track log."""

__version__ = "0.1.0"
