"""
Pattern lifecycle checks: is a pattern live, does it need more entries,
and is it structurally sound enough to expand at all.
"""

import logging
from datetime import date, timedelta
from typing import Any, Optional

from .dates import as_date, is_valid_time_of_day, today as current_date
from .recurrence import COMPUTATION_ERRORS
from .types import PatternType, PaymentType, RecurringShiftPattern, ValidationResult, is_positive_int


logger = logging.getLogger(__name__)

DEFAULT_WEEKS_AHEAD = 4


def is_pattern_active(pattern: RecurringShiftPattern, today: Optional[date] = None) -> bool:
    """
    A pattern is active when it is switched on, has started, has not ended,
    and has not used up its max_occurrences.
    """
    if not pattern.is_active:
        return False

    now = today or current_date()
    try:
        if now < as_date(pattern.start_date):
            return False
        if pattern.end_date is not None and now > as_date(pattern.end_date):
            return False
    except COMPUTATION_ERRORS as e:
        logger.error(f"Pattern {pattern.id} has unreadable dates: {e}")
        return False

    if pattern.max_occurrences is not None and (pattern.occurrence_count or 0) >= pattern.max_occurrences:
        return False

    return True


def needs_generation(
    pattern: RecurringShiftPattern,
    weeks_ahead: int = DEFAULT_WEEKS_AHEAD,
    today: Optional[date] = None,
) -> bool:
    """
    True when materialized entries do not yet reach ``weeks_ahead`` weeks past today.
    """
    now = today or current_date()
    if not is_pattern_active(pattern, now):
        return False

    if pattern.last_generated_date is None:
        return True

    try:
        last_generated = as_date(pattern.last_generated_date)
    except COMPUTATION_ERRORS as e:
        logger.error(f"Pattern {pattern.id} has an unreadable last_generated_date: {e}")
        return False

    return last_generated < now + timedelta(weeks=weeks_ahead)


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def _is_non_negative_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0


def _read_date(pattern: Any, field_name: str, errors: list[str]) -> Optional[date]:
    value = getattr(pattern, field_name, None)
    if value is None:
        return None
    try:
        return as_date(value)
    except COMPUTATION_ERRORS:
        errors.append(f"{field_name} must be a valid YYYY-MM-DD date")
        return None


def validate_recurring_pattern(pattern: Any) -> ValidationResult:
    """
    Check a pattern's structure before it is saved or expanded.

    Never raises; every problem found is reported in ``errors``.
    """
    errors: list[str] = []

    if not getattr(pattern, "id", None):
        errors.append("Pattern id is required")
    if not str(getattr(pattern, "building_name", "") or "").strip():
        errors.append("Building name is required")
    if not str(getattr(pattern, "client_name", "") or "").strip():
        errors.append("Client name is required")
    if not getattr(pattern, "cleaner_names", None):
        errors.append("At least one cleaner is required")
    if not _is_positive_number(getattr(pattern, "hours", None)):
        errors.append("Hours must be greater than 0")

    pattern_type = getattr(pattern, "pattern_type", None)
    interval = getattr(pattern, "interval", None)

    if pattern_type in (PatternType.DAILY, PatternType.WEEKLY, PatternType.MONTHLY):
        if not is_positive_int(interval):
            errors.append("interval must be at least 1")

    if pattern_type == PatternType.WEEKLY:
        days_of_week = getattr(pattern, "days_of_week", None)
        if not days_of_week:
            errors.append("days_of_week is required for weekly patterns")
        elif not isinstance(days_of_week, (list, tuple, set)) or not all(isinstance(d, int) and not isinstance(d, bool) and 0 <= d <= 6 for d in days_of_week):
            errors.append("days_of_week values must be between 0 (Sunday) and 6 (Saturday)")
    elif pattern_type == PatternType.MONTHLY:
        day_of_month = getattr(pattern, "day_of_month", None)
        if day_of_month is None:
            errors.append("day_of_month is required for monthly patterns")
        elif not (isinstance(day_of_month, int) and 1 <= day_of_month <= 31):
            errors.append("day_of_month must be between 1 and 31")
    elif pattern_type == PatternType.CUSTOM:
        if not is_positive_int(getattr(pattern, "custom_days", None)):
            errors.append("custom_days must be greater than 0 for custom patterns")
    elif pattern_type != PatternType.DAILY:
        errors.append(f"Unknown pattern_type: {pattern_type!r}")

    if getattr(pattern, "start_date", None) is None:
        errors.append("start_date is required")
    start_date = _read_date(pattern, "start_date", errors)
    end_date = _read_date(pattern, "end_date", errors)
    if start_date and end_date and end_date < start_date:
        errors.append("end_date cannot be before start_date")

    max_occurrences = getattr(pattern, "max_occurrences", None)
    if max_occurrences is not None and not is_positive_int(max_occurrences):
        errors.append("max_occurrences must be greater than 0")

    start_time = getattr(pattern, "start_time", None)
    if start_time and not is_valid_time_of_day(start_time):
        errors.append("start_time must be in HH:MM format")

    payment_type = getattr(pattern, "payment_type", PaymentType.HOURLY)
    hourly_rate = getattr(pattern, "hourly_rate", None)
    flat_rate_amount = getattr(pattern, "flat_rate_amount", None)
    if payment_type == PaymentType.FLAT_RATE:
        if flat_rate_amount is None:
            errors.append("flat_rate_amount is required for flat-rate patterns")
        elif not _is_non_negative_number(flat_rate_amount):
            errors.append("flat_rate_amount cannot be negative")
    elif payment_type == PaymentType.HOURLY:
        if hourly_rate is not None and not _is_non_negative_number(hourly_rate):
            errors.append("hourly_rate cannot be negative")
    else:
        errors.append(f"Unknown payment_type: {payment_type!r}")

    return ValidationResult(valid=not errors, errors=errors)
