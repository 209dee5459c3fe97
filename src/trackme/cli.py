"""Command-line entry point for TrackMe.

Subcommands::

    trackme record [--input FILE]   # stream position lines into the track
    trackme add LAT LNG             # record a single fix
    trackme show [--limit N]        # list points, newest first
    trackme clear                   # wipe the track
    trackme summary                 # count, length and extent
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import Sequence, TextIO

from .analysis.track_metrics import summarize
from .config.app_config import AppPaths
from .config.runtime import TrackMeConfig, load_config
from .core.models import GeoPoint
from .core.position_stream import start_reader
from .core.recorder import TrackRecorder
from .core.track_log import TrackLog
from .dataio.location_storage import LocationStorage

logger = logging.getLogger(__name__)

LOG_FILE_NAME = "trackme.log"


def _coordinate(text: str) -> float:
    """argparse type: a finite float (``nan``/``inf`` are refused)."""
    try:
        value = float(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from exc
    if not math.isfinite(value):
        raise argparse.ArgumentTypeError(f"coordinate must be finite, got {text!r}")
    return value


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="trackme", description="Record and inspect a location track")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML config file (default: <data root>/trackme.yaml)",
    )
    parser.add_argument(
        "--track-file",
        type=str,
        default=None,
        help="Track file to use instead of the configured one",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: from config, else INFO)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    record = sub.add_parser("record", help="Record position lines until EOF or Ctrl-C")
    record.add_argument(
        "--input",
        type=str,
        default=None,
        help="File with one position per line (default: stdin)",
    )
    record.add_argument(
        "--distance-filter",
        type=float,
        default=None,
        help="Minimum metres between recorded points (default: from config)",
    )

    add = sub.add_parser("add", help="Record a single position")
    add.add_argument("latitude", type=_coordinate)
    add.add_argument("longitude", type=_coordinate)

    show = sub.add_parser("show", help="Print recorded points, newest first")
    show.add_argument("--limit", type=int, default=None, help="Show at most N points")

    sub.add_parser("clear", help="Delete all recorded points")
    sub.add_parser("summary", help="Print point count, path length and bounds")
    return parser


_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _configure_logging(level: int, paths: AppPaths) -> None:
    """Console logging via basicConfig plus a file under ``paths.logs``."""
    logging.basicConfig(level=level, format=_LOG_FORMAT)

    package_logger = logging.getLogger("trackme")
    package_logger.setLevel(level)

    # Replace a file handler left by an earlier run() in the same process.
    for handler in list(package_logger.handlers):
        if getattr(handler, "_trackme_log_file", False):
            package_logger.removeHandler(handler)
            handler.close()

    try:
        paths.ensure()
        file_handler = logging.FileHandler(paths.logs / LOG_FILE_NAME, encoding="utf-8")
    except OSError as exc:
        logger.warning("Cannot write log file under %s: %s", paths.logs, exc)
        return
    file_handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    file_handler._trackme_log_file = True  # type: ignore[attr-defined]
    package_logger.addHandler(file_handler)


def _resolve_config(args: argparse.Namespace, paths: AppPaths) -> TrackMeConfig:
    cfg_path = Path(args.config).expanduser() if args.config else paths.config_file
    cfg = load_config(cfg_path)
    if args.track_file:
        cfg.track_file = Path(args.track_file)
    if args.log_level:
        cfg.log_level = args.log_level
    return cfg.sanitized()


def _open_track(cfg: TrackMeConfig, paths: AppPaths) -> TrackLog:
    storage = LocationStorage(cfg.track_file or paths.track_file)
    logger.debug("Using track file %s", storage.path)
    return TrackLog.open(storage)


def _cmd_record(args: argparse.Namespace, track: TrackLog, cfg: TrackMeConfig, out: TextIO) -> int:
    distance_filter = cfg.distance_filter_m if args.distance_filter is None else args.distance_filter
    recorder = TrackRecorder(track, distance_filter_m=max(0.0, distance_filter))

    if args.input:
        try:
            source: TextIO = open(args.input, "r", encoding="utf-8")
        except OSError as exc:
            logger.error("Cannot open position input %s: %s", args.input, exc)
            print(f"cannot open {args.input}: {exc.strerror or exc}", file=out)
            return 1
    else:
        source = sys.stdin

    try:
        handle = start_reader(source, recorder.on_position)
        try:
            while handle.is_alive():
                handle.thread.join(0.2)
        except KeyboardInterrupt:
            logger.info("Stopping position reader")
            handle.stop(join=True, timeout=2.0)
    finally:
        if source is not sys.stdin:
            source.close()

    print(
        f"recorded {recorder.recorded}, skipped {recorder.skipped}, total {len(track)}",
        file=out,
    )
    return 1 if recorder.write_failures else 0


def _cmd_add(args: argparse.Namespace, track: TrackLog, out: TextIO) -> int:
    point = GeoPoint(latitude=args.latitude, longitude=args.longitude)
    logger.info("Current location: %s, %s", point.latitude, point.longitude)
    ok = track.append(point)
    print(point, file=out)
    return 0 if ok else 1


def _cmd_show(args: argparse.Namespace, track: TrackLog, cfg: TrackMeConfig, out: TextIO) -> int:
    limit = args.limit if args.limit is not None else cfg.show_limit
    points = list(reversed(track.points))
    if limit is not None:
        points = points[: max(0, limit)]
    for point in points:
        print(point, file=out)
    return 0


def _cmd_clear(track: TrackLog, out: TextIO) -> int:
    if not track.clear():
        print("failed to clear track", file=out)
        return 1
    print("track cleared", file=out)
    return 0


def _cmd_summary(track: TrackLog, out: TextIO) -> int:
    for row in summarize(track.points).lines():
        print(row, file=out)
    return 0


def run(argv: Sequence[str] | None = None, *, out: TextIO | None = None) -> int:
    """Parse ``argv`` (without the program name), run one command, return the exit code."""
    args = _build_arg_parser().parse_args(list(argv) if argv is not None else None)
    stream = out if out is not None else sys.stdout

    paths = AppPaths()
    cfg = _resolve_config(args, paths)
    _configure_logging(cfg.log_level_value, paths)
    track = _open_track(cfg, paths)

    if args.command == "record":
        return _cmd_record(args, track, cfg, stream)
    if args.command == "add":
        return _cmd_add(args, track, stream)
    if args.command == "show":
        return _cmd_show(args, track, cfg, stream)
    if args.command == "clear":
        return _cmd_clear(track, stream)
    if args.command == "summary":
        return _cmd_summary(track, stream)
    raise ValueError(f"Unknown command {args.command!r}")


def main(argv: Sequence[str] | None = None) -> None:
    raise SystemExit(run(argv))


if __name__ == "__main__":
    main()
