"""Logging configuration and setup utilities for snaprotate.

The console handler reports rotation actions (copies and deletions) on
standard output, the file handler keeps a rotating history of every run when
a log directory is configured.
"""

import logging
import logging.config
from dataclasses import dataclass
from pathlib import Path
from typing import Any


class LoggerConfigError(Exception):
    """Custom exception for logger configuration errors."""


@dataclass
class LoggingConfig:
    """Configuration for logging setup."""

    log_name: str = "snaprotate"
    log_level: str = "INFO"
    console_level: str | None = None
    log_dir: Path | None = None
    log_filename: str | None = None
    max_bytes: int = 5 * 1024 * 1024  # 5 MB
    backup_count: int = 3
    enable_console: bool = True
    console_stream: str = "ext://sys.stdout"

    @property
    def enable_file(self) -> bool:
        """File logging is only active when a log directory is given."""
        return self.log_dir is not None


def validate_log_level(log_level: str) -> int:
    """Validate and return the numeric log level."""
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        error_msg = f"Invalid log level: {log_level}"
        raise LoggerConfigError(error_msg)
    return numeric_level


def create_logging_config(config: LoggingConfig) -> dict[str, Any]:
    """Create logging configuration dictionary."""
    file_level = validate_log_level(config.log_level)
    console_level = validate_log_level(config.console_level or config.log_level)

    formatters = {
        "brief": {
            "format": "%(message)s",
        },
        "standard": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "detailed": {
            "format": "%(asctime)s %(levelname)s %(name)s:%(lineno)d: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    }

    handlers: dict[str, dict[str, Any]] = {}
    active_levels: list[int] = []

    if config.enable_file and config.log_dir is not None:
        try:
            config.log_dir.mkdir(parents=True, exist_ok=True)
        except (PermissionError, OSError) as e:
            error_msg = f"Failed to create log directory {config.log_dir}: {e}"
            raise LoggerConfigError(error_msg) from e

        log_filename = config.log_filename or f"{config.log_name}.log"
        handlers["file_handler"] = {
            "level": file_level,
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(config.log_dir / log_filename),
            "maxBytes": config.max_bytes,
            "backupCount": config.backup_count,
            "formatter": "detailed",
            "encoding": "utf8",
        }
        active_levels.append(file_level)

    if config.enable_console:
        handlers["console_handler"] = {
            "level": console_level,
            "class": "logging.StreamHandler",
            "formatter": "brief" if console_level >= logging.INFO else "standard",
            "stream": config.console_stream,
        }
        active_levels.append(console_level)

    # The logger itself must let through everything any handler wants
    logger_level = min(active_levels) if active_levels else file_level

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": handlers,
        "loggers": {
            config.log_name: {
                "handlers": list(handlers.keys()),
                "level": logger_level,
                "propagate": False,
            },
        },
    }


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """Configure logging for the application.

    Args:
        config: Logging configuration object

    Returns:
        Configured logger instance

    Raises:
        LoggerConfigError: If the configured log level is invalid

    """
    try:
        logging_config = create_logging_config(config)
        logging.config.dictConfig(logging_config)
        logger = logging.getLogger(config.log_name)
        logger.debug(
            f"Logging configured for '{config.log_name}' at level {config.log_level}",
        )

    except (LoggerConfigError, ValueError, KeyError):
        # Fallback to basic console logging if configuration fails
        logging.basicConfig(
            level=validate_log_level(config.log_level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        logger = logging.getLogger(config.log_name)
        logger.exception("Failed to configure logging. Using fallback configuration.")

    return logger
