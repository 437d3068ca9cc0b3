"""
Turns generated occurrences into schedule entries ready to be saved.
"""

import logging
import uuid
from datetime import date
from typing import Callable, Iterable, Optional

from .dates import DateLike, add_hours_to_time, as_date, week_bucket_key
from .recurrence import COMPUTATION_ERRORS
from .types import (
    DEFAULT_HOURLY_RATE,
    DEFAULT_OVERTIME_RATE,
    UNASSIGNED_CLEANER,
    EntryStatus,
    PaymentType,
    RecurringShiftPattern,
    ScheduleEntry,
    ShiftOccurrence,
)


logger = logging.getLogger(__name__)


def pattern_to_schedule_entries(
    pattern: RecurringShiftPattern,
    occurrences: list[ShiftOccurrence],
    week_key_fn: Callable[[date], str] = week_bucket_key,
    existing_dates: Optional[Iterable[DateLike]] = None,
    default_hourly_rate: float = DEFAULT_HOURLY_RATE,
) -> list[ScheduleEntry]:
    """
    Build one schedule entry per occurrence.

    Each entry gets a fresh UUID, so materializing the same date twice never
    reuses an id. Dates listed in ``existing_dates`` (already saved for this
    pattern) are skipped.

    Args:
        pattern: Pattern the occurrences came from
        occurrences: Output of generate_occurrences
        week_key_fn: Maps a date to its week bucket key
        existing_dates: Dates already materialized for the pattern
        default_hourly_rate: Rate stamped on hourly entries when the pattern has none

    Returns:
        New entries in occurrence order, or an empty list if the pattern
        cannot be materialized.
    """
    try:
        skip = {as_date(d) for d in (existing_dates or [])}
        return [
            _build_entry(pattern, occurrence, week_key_fn, default_hourly_rate)
            for occurrence in occurrences
            if as_date(occurrence.date) not in skip
        ]
    except COMPUTATION_ERRORS as e:
        logger.error(f"Could not materialize entries for pattern {getattr(pattern, 'id', None)}: {e}")
        return []


def _build_entry(
    pattern: RecurringShiftPattern,
    occurrence: ShiftOccurrence,
    week_key_fn: Callable[[date], str],
    default_hourly_rate: float,
) -> ScheduleEntry:
    occurrence_date = as_date(occurrence.date)
    cleaner_names = list(pattern.cleaner_names or []) or [UNASSIGNED_CLEANER]
    end_time = add_hours_to_time(pattern.start_time, pattern.hours) if pattern.start_time else None
    payment_type = PaymentType(pattern.payment_type or PaymentType.HOURLY)

    return ScheduleEntry(
        id=str(uuid.uuid4()),
        client_name=pattern.client_name,
        building_name=pattern.building_name,
        cleaner_name=cleaner_names[0],
        cleaner_names=cleaner_names,
        cleaner_ids=list(pattern.cleaner_ids) if pattern.cleaner_ids else None,
        hours=pattern.hours,
        day=occurrence.day,
        date=occurrence_date,
        week_id=week_key_fn(occurrence_date),
        start_time=pattern.start_time,
        end_time=end_time,
        status=EntryStatus.SCHEDULED,
        notes=pattern.notes,
        is_recurring=True,
        recurring_id=pattern.id,
        payment_type=payment_type,
        flat_rate_amount=pattern.flat_rate_amount or 0.0,
        hourly_rate=pattern.hourly_rate if pattern.hourly_rate is not None else default_hourly_rate,
        overtime_rate=DEFAULT_OVERTIME_RATE,
    )
