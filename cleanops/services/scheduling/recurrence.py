"""
Occurrence generation for recurring shift patterns.

Expands a pattern's repeat rule into concrete, strictly increasing dates.
Every loop here is bounded: weekly scans stop after ``7 * interval + 7`` days
and generation stops at the occurrence limit (100 unless the caller or the
pattern says otherwise).
"""

import logging
from datetime import date, timedelta
from typing import Optional

from .dates import (
    DAY_NAMES,
    DateLike,
    add_months,
    as_date,
    format_canonical_date,
    sunday_based_weekday,
    today as current_date,
    weekday_name,
)
from .types import PatternType, RecurringShiftPattern, ShiftOccurrence, is_positive_int


logger = logging.getLogger(__name__)

DEFAULT_OCCURRENCE_LIMIT = 100
DEFAULT_UPCOMING_COUNT = 5
UPCOMING_HORIZON_DAYS = 365

COMPUTATION_ERRORS = (ValueError, TypeError, AttributeError, OverflowError)


def _has_valid_rule(pattern: RecurringShiftPattern) -> bool:
    """True when the repeat rule can advance (no zero/negative steps, no missing fields)."""
    if pattern.pattern_type == PatternType.DAILY:
        return is_positive_int(pattern.interval)
    if pattern.pattern_type == PatternType.WEEKLY:
        return (
            is_positive_int(pattern.interval)
            and bool(pattern.days_of_week)
            and all(isinstance(d, int) and 0 <= d <= 6 for d in pattern.days_of_week)
        )
    if pattern.pattern_type == PatternType.MONTHLY:
        return (
            is_positive_int(pattern.interval)
            and isinstance(pattern.day_of_month, int)
            and 1 <= pattern.day_of_month <= 31
        )
    if pattern.pattern_type == PatternType.CUSTOM:
        return is_positive_int(pattern.custom_days)
    return False


def _next_weekly(current: date, pattern: RecurringShiftPattern) -> Optional[date]:
    # A day qualifies when its weekday is selected and it falls in an "on" week,
    # counting whole weeks from start_date. interval=2 gives every other week.
    start = as_date(pattern.start_date)
    selected_days = set(pattern.days_of_week)
    candidate = current + timedelta(days=1)

    for _ in range(7 * pattern.interval + 7):
        weeks_since_start = (candidate - start).days // 7
        if (
            sunday_based_weekday(candidate) in selected_days
            and weeks_since_start % pattern.interval == 0
        ):
            return candidate
        candidate += timedelta(days=1)

    return None


def _advance(current: date, pattern: RecurringShiftPattern) -> Optional[date]:
    if not _has_valid_rule(pattern):
        return None

    if pattern.pattern_type == PatternType.DAILY:
        return current + timedelta(days=pattern.interval)
    elif pattern.pattern_type == PatternType.WEEKLY:
        return _next_weekly(current, pattern)
    elif pattern.pattern_type == PatternType.MONTHLY:
        return add_months(current, pattern.interval, pattern.day_of_month)
    elif pattern.pattern_type == PatternType.CUSTOM:
        return current + timedelta(days=pattern.custom_days)
    return None


def calculate_next_occurrence(
    current: DateLike,
    pattern: RecurringShiftPattern,
) -> Optional[date]:
    """
    Calculate the occurrence that follows ``current`` for a pattern.

    Returns:
        The next date strictly after ``current``, or None when the rule is
        invalid, the next date would fall after the pattern's end_date, or the
        inputs cannot be interpreted as dates.
    """
    try:
        next_date = _advance(as_date(current), pattern)
        if next_date is None:
            return None
        if pattern.end_date is not None and next_date > as_date(pattern.end_date):
            return None
        return next_date
    except COMPUTATION_ERRORS as e:
        logger.error(f"Could not compute next occurrence for pattern {getattr(pattern, 'id', None)}: {e}")
        return None


def _occurrence_limit(max_count: Optional[int], max_occurrences: Optional[int]) -> int:
    for candidate in (max_count, max_occurrences):
        if is_positive_int(candidate):
            return candidate
    return DEFAULT_OCCURRENCE_LIMIT


def generate_occurrences(
    pattern: RecurringShiftPattern,
    window_start: Optional[DateLike] = None,
    window_end: Optional[DateLike] = None,
    max_count: Optional[int] = None,
) -> list[ShiftOccurrence]:
    """
    Generate the occurrences of a pattern that fall inside a date window.

    Args:
        pattern: The recurring pattern to expand
        window_start: First date to include (defaults to the pattern's start_date)
        window_end: Last date to include (defaults to the pattern's end_date, if any)
        max_count: Cap on the number of occurrences returned; falls back to
            the pattern's max_occurrences, then to 100

    Returns:
        Occurrences in strictly increasing date order, numbered from 1.
        An empty list if the pattern cannot be expanded.
    """
    try:
        return _generate(pattern, window_start, window_end, max_count)
    except COMPUTATION_ERRORS as e:
        logger.error(f"Could not generate occurrences for pattern {getattr(pattern, 'id', None)}: {e}")
        return []


def _generate(
    pattern: RecurringShiftPattern,
    window_start: Optional[DateLike],
    window_end: Optional[DateLike],
    max_count: Optional[int],
) -> list[ShiftOccurrence]:
    if not _has_valid_rule(pattern):
        logger.warning(f"Pattern {pattern.id} has an invalid repeat rule; nothing generated")
        return []

    first = as_date(pattern.start_date)
    start = as_date(window_start) if window_start is not None else first
    if window_end is not None:
        end = as_date(window_end)
    elif pattern.end_date is not None:
        end = as_date(pattern.end_date)
    else:
        end = None
    limit = _occurrence_limit(max_count, pattern.max_occurrences)

    occurrences: list[ShiftOccurrence] = []

    def _append(d: date) -> None:
        occurrences.append(ShiftOccurrence(
            date=d,
            day=weekday_name(d),
            occurrence_number=len(occurrences) + 1,
        ))

    if first >= start and (end is None or first <= end):
        _append(first)

    current = first
    while len(occurrences) < limit:
        next_date = calculate_next_occurrence(current, pattern)
        if next_date is None or next_date <= current:
            break
        current = next_date

        if next_date < start:
            continue
        if end is not None and next_date > end:
            break

        _append(next_date)

    return occurrences


def get_upcoming_occurrences(
    pattern: RecurringShiftPattern,
    count: int = DEFAULT_UPCOMING_COUNT,
    today: Optional[date] = None,
) -> list[ShiftOccurrence]:
    """Next ``count`` occurrences from today, up to end_date or one year out."""
    start = today or current_date()
    end = pattern.end_date if pattern.end_date is not None else start + timedelta(days=UPCOMING_HORIZON_DAYS)
    return generate_occurrences(pattern, start, end, count)


def format_pattern_description(pattern: RecurringShiftPattern) -> str:
    """Human readable summary, e.g. 'Every 2 weeks on Tuesday, Thursday, starting 2024-01-02'."""
    labels = [name.capitalize() for name in DAY_NAMES]
    interval = pattern.interval

    if pattern.pattern_type == PatternType.DAILY:
        description = "Every day" if interval == 1 else f"Every {interval} days"
    elif pattern.pattern_type == PatternType.WEEKLY:
        day_list = ", ".join(labels[d] for d in (pattern.days_of_week or []) if 0 <= d <= 6)
        description = f"Every week on {day_list}" if interval == 1 else f"Every {interval} weeks on {day_list}"
    elif pattern.pattern_type == PatternType.MONTHLY:
        description = (
            f"Every month on day {pattern.day_of_month}"
            if interval == 1
            else f"Every {interval} months on day {pattern.day_of_month}"
        )
    elif pattern.pattern_type == PatternType.CUSTOM:
        description = "Every day" if pattern.custom_days == 1 else f"Every {pattern.custom_days} days"
    else:
        description = "Custom schedule"

    if pattern.start_date is not None:
        description += f", starting {format_canonical_date(as_date(pattern.start_date))}"

    if pattern.end_date is not None:
        description += f", until {format_canonical_date(as_date(pattern.end_date))}"
    elif pattern.max_occurrences:
        plural = "s" if pattern.max_occurrences != 1 else ""
        description += f", for {pattern.max_occurrences} occurrence{plural}"

    return description
