"""Decide whether a bucket needs a new snapshot."""

from datetime import datetime, timedelta

from snaprotate.exceptions import InvalidDateFormatError
from snaprotate.rotation.schedule import Frequency

MONTHS_PER_YEAR = 12


def truncate_to_format(moment: datetime, date_format: str) -> datetime:
    """Reduce a point in time to the precision the date format can represent.

    The moment is rendered with the format and parsed back, so a day-only
    format such as ``%Y-%m-%d`` collapses it to midnight of the same day.

    Raises:
        InvalidDateFormatError: If the rendered value cannot be parsed back

    """
    try:
        rendered = moment.strftime(date_format)
        return datetime.strptime(rendered, date_format)  # noqa: DTZ007
    except ValueError as e:
        error_msg = f"Date format {date_format!r} cannot parse its own output: {e}"
        raise InvalidDateFormatError(error_msg, e) from e


def subtract_frequency(moment: datetime, frequency: Frequency) -> datetime:
    """Return ``moment`` minus the frequency using calendar arithmetic.

    Years and months are shifted on the calendar month, then the day of the
    month and the frequency's days are applied as a plain day offset. A day
    that does not exist in the shifted month therefore overflows into the
    following month (31 March minus one month is 3 March, or 2 March in a
    leap year). Results before the earliest representable datetime clamp to
    ``datetime.min``.
    """
    month_index = (
        moment.year * MONTHS_PER_YEAR
        + (moment.month - 1)
        - (frequency.years * MONTHS_PER_YEAR + frequency.months)
    )
    year, month_offset = divmod(month_index, MONTHS_PER_YEAR)
    try:
        first_of_month = moment.replace(year=year, month=month_offset + 1, day=1)
        return first_of_month + timedelta(days=moment.day - 1 - frequency.days)
    except (OverflowError, ValueError):
        return datetime.min.replace(tzinfo=moment.tzinfo)


def is_due(
    now: datetime,
    frequency: Frequency,
    most_recent: datetime | None,
) -> bool:
    """Return True if a bucket with this frequency needs a snapshot now.

    Args:
        now: Current time, already truncated to the date format's resolution
        frequency: The bucket's cadence
        most_recent: Time of the newest existing snapshot, None if there is none

    """
    if most_recent is None:
        return True

    cutoff = subtract_frequency(now, frequency)
    return most_recent <= cutoff
