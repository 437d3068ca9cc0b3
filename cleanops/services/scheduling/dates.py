"""
Calendar utilities for schedule dates.

All dates are civil calendar dates (``datetime.date``). Nothing here goes
through timestamps or timezones, so a ``YYYY-MM-DD`` string always round-trips
to the same day whatever the host timezone or DST state is.
"""

import calendar
import re
from datetime import date, timedelta
from typing import Union

DAY_NAMES = ["sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]

_CANONICAL_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_TIME_OF_DAY = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")

DateLike = Union[date, str]


def parse_canonical_date(value: str) -> date:
    """
    Parse a ``YYYY-MM-DD`` string into a calendar date.

    Raises:
        ValueError: if the string is not a valid canonical date
    """
    match = _CANONICAL_DATE.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}")
    year, month, day = (int(part) for part in match.groups())
    return date(year, month, day)


def format_canonical_date(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def as_date(value: DateLike) -> date:
    """Accept either a date or its canonical string form."""
    if isinstance(value, date):
        return value
    return parse_canonical_date(value)


def sunday_based_weekday(d: date) -> int:
    """Day of week with 0=Sunday .. 6=Saturday."""
    return (d.weekday() + 1) % 7


def weekday_name(d: date) -> str:
    return DAY_NAMES[sunday_based_weekday(d)]


def week_start(d: date) -> date:
    """Monday of the Monday-Sunday span containing ``d``."""
    return d - timedelta(days=d.weekday())


def week_bucket_key(d: date) -> str:
    """Key shared by every date in the same Monday-Sunday week."""
    return format_canonical_date(week_start(d))


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(d: date, months: int, day: int) -> date:
    """
    Move ``months`` months forward from ``d`` and pin to ``day``.

    The day is clamped to the length of the target month, so day 31 lands on
    the 28th/29th in February and on the 30th in 30-day months.
    """
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, min(day, days_in_month(year, month)))


def is_valid_time_of_day(value: str) -> bool:
    return isinstance(value, str) and _TIME_OF_DAY.match(value) is not None


def add_hours_to_time(time_str: str, hours: float) -> str:
    """
    Add a (possibly fractional) number of hours to an ``HH:MM`` time.

    Wraps around midnight: ``"22:00" + 5`` gives ``"03:00"``.
    """
    if not is_valid_time_of_day(time_str):
        raise ValueError(f"Expected an HH:MM time, got {time_str!r}")
    hours_part, minutes_part = time_str.split(":")
    total_minutes = int(hours_part) * 60 + int(minutes_part) + round(hours * 60)
    total_minutes %= 24 * 60
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def today() -> date:
    """Current local calendar date."""
    return date.today()
