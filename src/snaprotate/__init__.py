"""snaprotate - Scheduled Snapshot Rotation.

Creates dated copies of a file or directory in several rotation buckets
(daily, weekly, monthly, ...) and prunes each bucket to its retention count.
"""

__version__ = "0.1.0"

from . import exceptions, logging

__all__ = ["__version__", "exceptions", "logging"]
