"""Runtime configuration for recording and display."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(slots=True)
class TrackMeConfig:
    """
    Tuning knobs for where points go and which ones are kept.

    The defaults record every position event (``distance_filter_m = 0``).
    """

    track_file: Optional[Path] = None
    distance_filter_m: float = 0.0
    log_level: str = "INFO"
    show_limit: Optional[int] = None

    def sanitized(self) -> TrackMeConfig:
        """Return a copy with derived limits applied."""
        level = str(self.log_level or "INFO").strip().upper()
        if level == "WARN":
            level = "WARNING"
        if level not in _LOG_LEVELS:
            level = "INFO"

        limit = self.show_limit
        if limit is not None:
            limit = max(1, int(limit))

        track_file = self.track_file
        if track_file is not None:
            track_file = Path(str(track_file)).expanduser()

        return TrackMeConfig(
            track_file=track_file,
            distance_filter_m=max(0.0, float(self.distance_filter_m)),
            log_level=level,
            show_limit=limit,
        )

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.sanitized().log_level)


# Accepted spellings for each TrackMeConfig field.
_KEY_ALIASES: Dict[str, str] = {
    "track_file": "track_file",
    "file": "track_file",
    "distance_filter_m": "distance_filter_m",
    "distance_filter": "distance_filter_m",
    "log_level": "log_level",
    "show_limit": "show_limit",
    "limit": "show_limit",
}


def _tracking_block(data: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return the ``tracking:`` section, or the top level if there is none."""
    block = data.get("tracking")
    if block is None:
        return data
    if not isinstance(block, Mapping):
        raise ValueError(f"'tracking' must be a mapping, got {type(block).__name__}")
    return block


def config_from_mapping(data: Mapping[str, Any] | None) -> TrackMeConfig:
    """
    Build :class:`TrackMeConfig` from a YAML mapping.

    Settings may sit at the top level or under ``tracking:``. Unknown keys
    in the tracking section are logged and ignored. Values that cannot be
    converted raise ``ValueError``.
    """
    if not data:
        return TrackMeConfig()

    payload: Dict[str, Any] = {}
    for key, value in _tracking_block(data).items():
        name = _KEY_ALIASES.get(str(key))
        if name is None:
            if "tracking" in data:
                logger.warning("Ignoring unknown tracking setting %r", key)
            continue
        if value is None:
            continue
        payload[name] = value

    try:
        return TrackMeConfig(**payload).sanitized()
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid tracking settings {dict(payload)!r}: {exc}") from exc


def load_config(path: str | Path | None) -> TrackMeConfig:
    """
    Load configuration from ``path``.

    Missing files fall back to default :class:`TrackMeConfig`.
    """
    if path is None:
        return TrackMeConfig()
    cfg_path = Path(path).expanduser()
    if not cfg_path.exists():
        return TrackMeConfig()
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return config_from_mapping(raw)


__all__ = ["TrackMeConfig", "config_from_mapping", "load_config"]
