"""Month grid builder.

The grid's columns are the calendar days of one month; the view steps the
reference date one month at a time.
"""

from calendar import monthrange
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta


def month_bounds(reference: date) -> tuple[date, date]:
    """Return the first and last day of the month containing ``reference``."""
    first = reference.replace(day=1)
    last = reference.replace(day=monthrange(reference.year, reference.month)[1])
    return first, last


def month_days(reference: date) -> list[date]:
    """Return every day of ``reference``'s month in ascending order."""
    first, last = month_bounds(reference)
    return [first + timedelta(days=offset) for offset in range((last - first).days + 1)]


def shift_month(reference: date, months: int) -> date:
    """Step ``reference`` by whole months, clamping the day to the target month."""
    return reference + relativedelta(months=months)


def parse_month(value: str) -> date:
    """Parse ``YYYY-MM`` or ``YYYY-MM-DD`` into a reference date.

    Raises:
        ValueError: If the value is neither format.
    """
    if len(value) == 7:
        value = f"{value}-01"
    return date.fromisoformat(value)
