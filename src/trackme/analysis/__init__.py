"""Track measurements (distances, bounds, summaries)."""

from .track_metrics import TrackBounds, TrackSummary, haversine_m, path_length_m, summarize

__all__ = ["TrackBounds", "TrackSummary", "haversine_m", "path_length_m", "summarize"]
