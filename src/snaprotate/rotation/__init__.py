"""Snapshot rotation: schedules, bucket inventories, due-checks and pruning."""

from .due_check import is_due, subtract_frequency, truncate_to_format
from .inventory import Inventory, Snapshot, build_inventory
from .schedule import DEFAULT_SCHEDULE, Frequency, RotationRule, parse_schedule

__all__ = [
    "DEFAULT_SCHEDULE",
    "Frequency",
    "Inventory",
    "RotationRule",
    "Snapshot",
    "build_inventory",
    "is_due",
    "parse_schedule",
    "subtract_frequency",
    "truncate_to_format",
]
