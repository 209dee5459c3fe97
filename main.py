"""Run TrackMe from a source checkout: ``python main.py show``."""

from __future__ import annotations

import sys
from pathlib import Path

# Make sure the 'src' directory is on sys.path so 'trackme' can be imported
SRC_DIR = Path(__file__).resolve().parent / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from trackme.cli import run

if __name__ == "__main__":
    raise SystemExit(run(sys.argv[1:]))
