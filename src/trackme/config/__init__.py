"""Configuration objects and helpers for TrackMe.

:mod:`app_config` decides where the track file and logs live (with
environment overrides), and :mod:`runtime` loads the YAML tuning file into
a typed :class:`TrackMeConfig` used by the CLI and recorder.
"""

from .app_config import AppPaths
from .runtime import TrackMeConfig, config_from_mapping, load_config

__all__ = ["AppPaths", "TrackMeConfig", "config_from_mapping", "load_config"]
