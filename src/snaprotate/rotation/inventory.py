"""Inventory of the snapshots stored in one bucket directory."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from snaprotate.exceptions import RotationIOError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """A snapshot directory and the point in time its name encodes."""

    name: str
    taken_at: datetime


@dataclass
class Inventory:
    """Snapshots of a bucket, oldest first, plus directories that were skipped."""

    bucket_dir: Path
    snapshots: list[Snapshot] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def most_recent(self) -> Snapshot | None:
        """Return the newest snapshot, or None for an empty bucket."""
        return self.snapshots[-1] if self.snapshots else None

    def __len__(self) -> int:
        """Return the number of snapshots."""
        return len(self.snapshots)


def parse_snapshot_name(name: str, date_format: str) -> datetime | None:
    """Parse a directory name as a snapshot timestamp.

    Only names that the date format would produce itself are accepted, so
    ``2024-1-5`` is not a snapshot under ``%Y-%m-%d`` even though
    ``strptime`` is lenient enough to read it.

    Returns:
        The encoded point in time, or None if the name is not a snapshot

    """
    try:
        taken_at = datetime.strptime(name, date_format)  # noqa: DTZ007
    except ValueError:
        return None

    if taken_at.strftime(date_format) != name:
        return None
    return taken_at


def build_inventory(bucket_dir: Path, date_format: str) -> Inventory:
    """List the snapshots in a bucket directory.

    Args:
        bucket_dir: Directory holding the snapshots of one bucket
        date_format: Format used to name snapshot directories

    Returns:
        Inventory with snapshots sorted ascending by time; directories with
        the same time keep their name order

    Raises:
        RotationIOError: If the bucket directory cannot be listed

    """
    inventory = Inventory(bucket_dir=bucket_dir)

    try:
        entries = sorted(bucket_dir.iterdir())
    except OSError as e:
        error_msg = f"Failed to list bucket directory {bucket_dir}: {e}"
        raise RotationIOError(error_msg, e) from e

    for entry in entries:
        if entry.is_symlink() or not entry.is_dir():
            continue

        taken_at = parse_snapshot_name(entry.name, date_format)
        if taken_at is None:
            logger.warning(
                f"Ignoring directory with mismatched date format: {entry}",
            )
            inventory.skipped.append(entry.name)
            continue

        inventory.snapshots.append(Snapshot(name=entry.name, taken_at=taken_at))

    inventory.snapshots.sort(key=lambda snapshot: snapshot.taken_at)
    return inventory
