"""Configuration for rotation runs."""

import os
from dataclasses import dataclass, field, fields
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from snaprotate.exceptions import ConfigurationError, InvalidDateFormatError
from snaprotate.rotation.due_check import truncate_to_format
from snaprotate.rotation.inventory import parse_snapshot_name
from snaprotate.rotation.schedule import (
    DEFAULT_SCHEDULE,
    RotationRule,
    parse_schedule,
)

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


def validate_date_format(date_format: str) -> None:
    """Check that a date format can name and recognize snapshot directories.

    Raises:
        InvalidDateFormatError: If the format renders an empty name, a name
            containing a path separator, or a name it cannot parse back

    """
    sample = datetime.now()  # noqa: DTZ005
    truncate_to_format(sample, date_format)
    rendered = sample.strftime(date_format)

    if not rendered.strip() or rendered in {".", ".."}:
        error_msg = f"Date format {date_format!r} renders an unusable name {rendered!r}"
        raise InvalidDateFormatError(error_msg)

    separators = {os.sep, os.altsep} - {None}
    if any(sep in rendered for sep in separators):
        error_msg = (
            f"Date format {date_format!r} renders {rendered!r}, "
            "which contains a path separator"
        )
        raise InvalidDateFormatError(error_msg)

    if parse_snapshot_name(rendered, date_format) is None:
        error_msg = (
            f"Date format {date_format!r} does not recognize its own output {rendered!r}"
        )
        raise InvalidDateFormatError(error_msg)


@dataclass
class RotationConfig:
    """Configuration for one rotation run."""

    # Required fields
    source: Path
    target: Path

    # Optional fields with defaults
    schedule: list[RotationRule] = field(
        default_factory=lambda: parse_schedule(DEFAULT_SCHEDULE),
    )
    date_format: str = DEFAULT_DATE_FORMAT
    dry_run: bool = False

    def __post_init__(self) -> None:
        """Normalize paths and validate configuration after initialization."""
        self.source = Path(self.source).expanduser().resolve()
        self.target = Path(self.target).expanduser().resolve()
        self._validate_schedule()
        validate_date_format(self.date_format)

    def _validate_schedule(self) -> None:
        if not self.schedule:
            error_msg = "Schedule must contain at least one rotation rule"
            raise ConfigurationError(error_msg)


@dataclass
class FileSettings:
    """Settings read from a YAML configuration file; unset keys are None."""

    source: str | None = None
    target: str | None = None
    schedule: str | None = None
    date_format: str | None = None
    dry_run: bool | None = None
    verbose: bool | None = None
    log_level: str | None = None
    log_dir: str | None = None


class ConfigManager:
    """Loads rotation settings from YAML files."""

    _STRING_KEYS = ("source", "target", "date_format", "log_level", "log_dir")
    _BOOLEAN_KEYS = ("dry_run", "verbose")

    @staticmethod
    def load_settings(config_path: Path) -> FileSettings:
        """Load and validate settings from a YAML file.

        Args:
            config_path: Path to the configuration YAML file

        Returns:
            FileSettings with the values present in the file

        Raises:
            ConfigurationError: If the file cannot be loaded or is invalid

        """
        try:
            with config_path.open(encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except FileNotFoundError as e:
            error_msg = f"Configuration file not found: {config_path}"
            raise ConfigurationError(error_msg, e) from e
        except yaml.YAMLError as e:
            error_msg = f"Invalid configuration file format: {e}"
            raise ConfigurationError(error_msg, e) from e
        except OSError as e:
            error_msg = f"Error loading configuration: {e}"
            raise ConfigurationError(error_msg, e) from e

        if config_data is None:
            return FileSettings()
        if not isinstance(config_data, dict):
            error_msg = (
                f"Invalid configuration file format: expected a mapping in {config_path}"
            )
            raise ConfigurationError(error_msg)

        known_keys = {f.name for f in fields(FileSettings)}
        unknown_keys = sorted(set(config_data) - known_keys)
        if unknown_keys:
            error_msg = f"Unknown configuration keys: {', '.join(map(str, unknown_keys))}"
            raise ConfigurationError(error_msg)

        return FileSettings(**ConfigManager._normalize(config_data))

    @staticmethod
    def _normalize(config_data: dict[str, Any]) -> dict[str, Any]:
        """Check value types and join list-style schedules into one string."""
        settings: dict[str, Any] = {}

        for key in ConfigManager._STRING_KEYS:
            value = config_data.get(key)
            if value is not None and not isinstance(value, str):
                error_msg = f"Configuration field '{key}' must be a string"
                raise ConfigurationError(error_msg)
            settings[key] = value

        for key in ConfigManager._BOOLEAN_KEYS:
            value = config_data.get(key)
            if value is not None and not isinstance(value, bool):
                error_msg = f"Configuration field '{key}' must be true or false"
                raise ConfigurationError(error_msg)
            settings[key] = value

        schedule = config_data.get("schedule")
        if isinstance(schedule, list):
            if not all(isinstance(token, str) for token in schedule):
                error_msg = "Configuration field 'schedule' must list string tokens"
                raise ConfigurationError(error_msg)
            schedule = ",".join(schedule)
        elif schedule is not None and not isinstance(schedule, str):
            error_msg = "Configuration field 'schedule' must be a string or a list"
            raise ConfigurationError(error_msg)
        settings["schedule"] = schedule

        return settings
