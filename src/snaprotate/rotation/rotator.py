"""Snapshot rotation across the buckets of a schedule."""

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from snaprotate.config import RotationConfig
from snaprotate.exceptions import (
    InvalidArgumentsError,
    PathNotFoundError,
    RotationIOError,
    TargetNotADirectoryError,
)
from snaprotate.rotation.due_check import is_due, truncate_to_format
from snaprotate.rotation.inventory import Inventory, build_inventory
from snaprotate.rotation.schedule import RotationRule


@dataclass
class BucketResult:
    """Outcome of rotating one bucket."""

    label: str
    bucket_dir: Path
    created: Path | None = None
    deleted: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class SnapshotRotator:
    """Creates due snapshots and prunes each bucket of a schedule.

    Buckets are processed one after another in schedule order. The first
    fatal error stops the run; buckets handled before it keep their changes.
    """

    def __init__(
        self,
        config: RotationConfig,
        logger: logging.Logger,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the rotator.

        Args:
            config: Validated rotation configuration
            logger: Logger instance for logging operations
            clock: Returns the current local time; replaceable in tests

        """
        self.config = config
        self.logger = logger
        self.clock = clock

        if self.config.dry_run:
            self.logger.info("DRY RUN MODE: No actual changes will be made")

    def check_paths(self) -> None:
        """Validate source and target before any bucket is touched.

        Raises:
            InvalidArgumentsError: If target is the source or lies inside it
            PathNotFoundError: If source or target does not exist
            TargetNotADirectoryError: If target is not a directory

        """
        source = self.config.source
        target = self.config.target

        if source == target:
            error_msg = (
                f"Target path '{target}' cannot be the same as the source path '{source}'"
            )
            raise InvalidArgumentsError(error_msg)

        if target.is_relative_to(source):
            error_msg = f"Target path '{target}' cannot be inside the source path '{source}'"
            raise InvalidArgumentsError(error_msg)

        if not source.exists():
            error_msg = f"Source path '{source}' does not exist"
            raise PathNotFoundError(error_msg)

        if not target.exists():
            error_msg = f"Target path '{target}' does not exist"
            raise PathNotFoundError(error_msg)

        if not target.is_dir():
            error_msg = f"Target path '{target}' must be a directory"
            raise TargetNotADirectoryError(error_msg)

    def _ensure_bucket_dir(self, bucket_dir: Path) -> None:
        """Create the bucket directory if it doesn't exist.

        Raises:
            RotationIOError: If the directory cannot be created

        """
        if self.config.dry_run:
            if not bucket_dir.is_dir():
                self.logger.info(f"[DRY RUN] Would create bucket directory: {bucket_dir}")
            return

        try:
            bucket_dir.mkdir(exist_ok=True)
        except OSError as e:
            error_msg = f"Failed to create bucket directory {bucket_dir}: {e}"
            raise RotationIOError(error_msg, e) from e

    def _load_inventory(self, bucket_dir: Path) -> Inventory:
        # A bucket that was only "created" in dry-run mode has nothing to list
        if self.config.dry_run and not bucket_dir.is_dir():
            return Inventory(bucket_dir=bucket_dir)
        return build_inventory(bucket_dir, self.config.date_format)

    def take_snapshot(self, snapshot_dir: Path) -> None:
        """Copy the source into a new snapshot directory.

        A directory source is copied as a whole tree; a single file is copied
        into a freshly created snapshot directory.

        Raises:
            PathNotFoundError: If the source disappeared
            RotationIOError: If copying fails

        """
        source = self.config.source
        if not source.exists():
            error_msg = f"Source path '{source}' does not exist"
            raise PathNotFoundError(error_msg)

        if self.config.dry_run:
            self.logger.info(f"[DRY RUN] Would copy '{source}' to '{snapshot_dir}'")
            return

        self.logger.info(f"Copying '{source}' to '{snapshot_dir}'")
        try:
            if source.is_dir():
                shutil.copytree(source, snapshot_dir)
            else:
                snapshot_dir.mkdir()
                shutil.copy2(source, snapshot_dir)
        except OSError as e:
            error_msg = f"Failed to copy '{source}' to '{snapshot_dir}': {e}"
            raise RotationIOError(error_msg, e) from e

    def prune(
        self,
        inventory: Inventory,
        rule: RotationRule,
        *,
        created: bool,
    ) -> tuple[list[Path], list[str]]:
        """Delete the snapshots that exceed the bucket's retention.

        Args:
            inventory: Snapshots that existed before this run's copy
            rule: The bucket's rule; an unlimited rule deletes nothing
            created: Whether a snapshot was just added to the bucket

        Returns:
            Deleted paths and warnings for deletions that failed

        """
        deleted: list[Path] = []
        warnings: list[str] = []

        if rule.unlimited:
            return deleted, warnings

        keep = rule.retention - 1 if created else rule.retention
        stale = inventory.snapshots[: max(len(inventory) - keep, 0)]

        for snapshot in stale:
            path = inventory.bucket_dir / snapshot.name
            if self.config.dry_run:
                self.logger.info(f"[DRY RUN] Would delete directory: {path}")
                deleted.append(path)
                continue

            self.logger.info(f"Deleting directory: {path}")
            try:
                shutil.rmtree(path)
            except OSError as e:
                warning_msg = f"Could not delete snapshot {path}: {e}"
                self.logger.warning(warning_msg)
                warnings.append(warning_msg)
            else:
                deleted.append(path)

        return deleted, warnings

    def rotate_bucket(self, rule: RotationRule, now: datetime) -> BucketResult:
        """Rotate one bucket.

        Args:
            rule: The bucket's frequency and retention
            now: Current time truncated to the date format's resolution

        Returns:
            What was created and deleted in the bucket

        """
        bucket_dir = self.config.target / rule.frequency.label
        result = BucketResult(label=rule.frequency.label, bucket_dir=bucket_dir)

        self._ensure_bucket_dir(bucket_dir)
        inventory = self._load_inventory(bucket_dir)
        result.warnings.extend(
            f"Ignoring directory with mismatched date format: {bucket_dir / name}"
            for name in inventory.skipped
        )

        most_recent = inventory.most_recent
        due = is_due(
            now,
            rule.frequency,
            most_recent.taken_at if most_recent else None,
        )

        if due:
            snapshot_dir = bucket_dir / now.strftime(self.config.date_format)
            self.take_snapshot(snapshot_dir)
            result.created = snapshot_dir
        else:
            self.logger.debug(
                f"Bucket '{rule.frequency.label}' is not due, "
                f"last snapshot is {most_recent.name if most_recent else None}",
            )

        deleted, warnings = self.prune(inventory, rule, created=due)
        result.deleted.extend(deleted)
        result.warnings.extend(warnings)
        return result

    def run(self) -> list[BucketResult]:
        """Rotate every bucket of the schedule in order.

        Returns:
            One result per rule, in schedule order

        Raises:
            RotationError: On the first fatal error

        """
        self.check_paths()

        results = []
        for rule in self.config.schedule:
            # Re-read the clock per bucket so that a run crossing midnight
            # names each snapshot after the moment it was taken.
            now = truncate_to_format(self.clock(), self.config.date_format)
            results.append(self.rotate_bucket(rule, now))

        created = sum(1 for result in results if result.created)
        deleted = sum(len(result.deleted) for result in results)
        self.logger.info(
            f"Rotation of '{self.config.source}' finished: "
            f"{created} snapshot(s) created, {deleted} deleted",
        )
        return results
