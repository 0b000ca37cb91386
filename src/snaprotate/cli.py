"""Command-line interface for snapshot rotation."""

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from snaprotate import __version__
from snaprotate.config import (
    DEFAULT_DATE_FORMAT,
    ConfigManager,
    FileSettings,
    RotationConfig,
)
from snaprotate.exceptions import ConfigurationError, RotationError, ScheduleError
from snaprotate.logging import LoggerConfigError, LoggingConfig, configure_logging
from snaprotate.rotation.rotator import SnapshotRotator
from snaprotate.rotation.schedule import DEFAULT_SCHEDULE, parse_schedule

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def default_location() -> Path:
    """Return the directory of the invoked program.

    Source and target default to this directory, not to the working directory.
    """
    return Path(sys.argv[0]).resolve().parent


class RotationArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        """Print the usage and the error to stderr, then exit 1."""
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = RotationArgumentParser(
        prog="snaprotate",
        description=(
            "Copy SOURCE into dated snapshot directories under TARGET, one "
            "directory per rotation bucket, and prune each bucket to its "
            "retention count."
        ),
    )
    parser.add_argument(
        "source",
        nargs="?",
        help="File or directory to snapshot (default: directory of this program)",
    )
    parser.add_argument(
        "target",
        nargs="?",
        help="Directory holding the rotation buckets (default: directory of this program)",
    )
    parser.add_argument(
        "--schedule",
        help=f"Rotation schedule and retention, e.g. '{DEFAULT_SCHEDULE}'",
    )
    parser.add_argument(
        "--format",
        dest="date_format",
        help=(
            "strftime format used to name snapshots, e.g. "
            f"'{DEFAULT_DATE_FORMAT.replace('%', '%%')}'"
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log copies and deletions instead of performing them.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print copy and delete actions.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        help="Logging level (overrides --verbose)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        help="Write a rotating log file to this directory",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _logging_config(args: argparse.Namespace, settings: FileSettings) -> LoggingConfig:
    verbose = args.verbose or bool(settings.verbose)
    log_level = args.log_level or settings.log_level
    log_dir = args.log_dir or (Path(settings.log_dir) if settings.log_dir else None)
    return LoggingConfig(
        log_level=log_level or "INFO",
        console_level=log_level or ("INFO" if verbose else "WARNING"),
        log_dir=log_dir,
    )


def _fail(parser: argparse.ArgumentParser, logger: logging.Logger, message: str) -> NoReturn:
    logger.error(message)
    parser.print_usage(sys.stderr)
    sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    """Execute the main entry point for snapshot rotation."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = configure_logging(_logging_config(args, FileSettings()))

    try:
        settings = (
            ConfigManager.load_settings(args.config) if args.config else FileSettings()
        )
        logger = configure_logging(_logging_config(args, settings))
    except (ConfigurationError, LoggerConfigError) as e:
        _fail(parser, logger, f"Configuration error: {e}")

    try:
        schedule = parse_schedule(args.schedule or settings.schedule or DEFAULT_SCHEDULE)
    except ScheduleError as e:
        _fail(parser, logger, f"Could not parse schedule: {e}")

    source = args.source or settings.source
    target = args.target or settings.target

    try:
        config = RotationConfig(
            source=Path(source) if source else default_location(),
            target=Path(target) if target else default_location(),
            schedule=schedule,
            date_format=args.date_format or settings.date_format or DEFAULT_DATE_FORMAT,
            dry_run=args.dry_run or bool(settings.dry_run),
        )
        SnapshotRotator(config, logger).run()
    except RotationError as e:
        _fail(parser, logger, str(e))
    except Exception as e:  # noqa: BLE001
        logger.exception("Unexpected error during rotation")
        _fail(parser, logger, f"{type(e).__name__}: {e}")

    sys.exit(0)


if __name__ == "__main__":
    main()
