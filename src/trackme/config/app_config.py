"""Default application paths."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_DATA_ROOT = Path("~/.trackme")
TRACK_FILE_NAME = "locations.jsonl"
CONFIG_FILE_NAME = "trackme.yaml"


@dataclass
class AppPaths:
    """
    Where TrackMe keeps its files.

    ``TRACKME_DATA_ROOT`` and ``TRACKME_LOG_DIR`` override the default
    ``~/.trackme`` and ``~/.trackme/logs`` folders so tests and alternate
    installs can store files elsewhere.
    """

    data_root: Path = field(init=False)
    logs: Path = field(init=False)
    track_file: Path = field(init=False)
    config_file: Path = field(init=False)

    def __post_init__(self) -> None:
        env_data_root = os.environ.get("TRACKME_DATA_ROOT")
        if env_data_root:
            self.data_root = Path(env_data_root).expanduser()
        else:
            self.data_root = DEFAULT_DATA_ROOT.expanduser()

        env_logs_dir = os.environ.get("TRACKME_LOG_DIR")
        if env_logs_dir:
            self.logs = Path(env_logs_dir).expanduser()
        else:
            self.logs = self.data_root / "logs"

        # Single JSON array despite the .jsonl suffix; existing tracks use this name.
        self.track_file = self.data_root / TRACK_FILE_NAME
        self.config_file = self.data_root / CONFIG_FILE_NAME

    def ensure(self) -> None:
        """Create directories if they do not yet exist."""
        for path in (self.data_root, self.logs):
            path.mkdir(parents=True, exist_ok=True)
