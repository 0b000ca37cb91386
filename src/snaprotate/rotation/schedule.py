"""Rotation schedule parsing.

A schedule is a comma-separated list of ``FREQ:RETENTION`` tokens such as
``"1d:7,1w:4,1m:12,1y:4"``. ``FREQ`` is an integer followed by one of the
units ``d`` (days), ``w`` (weeks), ``m`` (months) or ``y`` (years) and is used
verbatim as the name of the bucket directory. ``RETENTION`` is the number of
snapshots kept in that bucket, ``0`` meaning unlimited.
"""

import re
from dataclasses import dataclass
from enum import Enum

from snaprotate.exceptions import (
    InvalidFrequencyError,
    InvalidRetentionError,
    MalformedTokenError,
)

DEFAULT_SCHEDULE = "1d:7,1w:4,1m:12,1y:4"

_FREQUENCY_PATTERN = re.compile(r"(?P<interval>[0-9]+)(?P<unit>[a-z]+)")
_RETENTION_PATTERN = re.compile(r"[0-9]+")


class ScheduleLimits(Enum):
    """Numeric limits applied while parsing a schedule."""

    MAX_VALUE = ("max_value", 0xFFFF)
    DAYS_PER_WEEK = ("days_per_week", 7)

    @property
    def number(self) -> int:
        """Return the numeric limit."""
        return self.value[1]


@dataclass(frozen=True)
class Frequency:
    """A calendar interval and the label naming its bucket directory."""

    label: str
    years: int = 0
    months: int = 0
    days: int = 0


@dataclass(frozen=True)
class RotationRule:
    """One bucket of a schedule: how often to snapshot and how many to keep."""

    frequency: Frequency
    retention: int

    @property
    def unlimited(self) -> bool:
        """Return True if this bucket is never pruned."""
        return self.retention == 0


def _parse_frequency(frequency_string: str) -> Frequency:
    match = _FREQUENCY_PATTERN.fullmatch(frequency_string)
    if match is None:
        error_msg = (
            f"Invalid frequency {frequency_string!r}: "
            "Frequency must be an integer followed by 'd', 'w', 'm', or 'y'"
        )
        raise InvalidFrequencyError(error_msg)

    interval = int(match.group("interval"))
    if interval > ScheduleLimits.MAX_VALUE.number:
        error_msg = (
            f"Invalid frequency {frequency_string!r}: "
            f"interval must not exceed {ScheduleLimits.MAX_VALUE.number}"
        )
        raise InvalidFrequencyError(error_msg)

    unit = match.group("unit")
    if unit == "d":
        return Frequency(label=frequency_string, days=interval)
    if unit == "w":
        return Frequency(
            label=frequency_string,
            days=interval * ScheduleLimits.DAYS_PER_WEEK.number,
        )
    if unit == "m":
        return Frequency(label=frequency_string, months=interval)
    if unit == "y":
        return Frequency(label=frequency_string, years=interval)

    error_msg = (
        f"Invalid frequency {frequency_string!r}: "
        "Frequency must be an integer followed by 'd', 'w', 'm', or 'y'"
    )
    raise InvalidFrequencyError(error_msg)


def _parse_retention(retention_string: str) -> int:
    if (
        _RETENTION_PATTERN.fullmatch(retention_string) is None
        or int(retention_string) > ScheduleLimits.MAX_VALUE.number
    ):
        error_msg = (
            f"Invalid retention {retention_string!r}: "
            "Number of rotations to retain must be specified as an integer"
        )
        raise InvalidRetentionError(error_msg)
    return int(retention_string)


def parse_schedule(spec: str) -> list[RotationRule]:
    """Parse a schedule specification into rotation rules.

    Args:
        spec: Comma-separated ``FREQ:RETENTION`` tokens

    Returns:
        Rules in input order; duplicate labels are kept as separate rules

    Raises:
        MalformedTokenError: If a token does not contain exactly one colon
        InvalidFrequencyError: If a frequency is not ``<integer><unit>``
        InvalidRetentionError: If a retention is not an unsigned integer

    """
    schedule: list[RotationRule] = []
    for token in spec.split(","):
        parts = token.split(":")
        if len(parts) != 2:  # noqa: PLR2004
            error_msg = f"Invalid token {token!r}: colon delimiter not found"
            raise MalformedTokenError(error_msg)

        frequency_string, retention_string = parts
        schedule.append(
            RotationRule(
                frequency=_parse_frequency(frequency_string),
                retention=_parse_retention(retention_string),
            ),
        )

    return schedule
