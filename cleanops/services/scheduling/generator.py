"""
Recurring shift generator - main orchestration layer.

Loads patterns, keeps the ones that need more entries, expands and
materializes them, and saves the new entries while advancing each pattern's
generation markers.
"""

import logging
from abc import ABC, abstractmethod
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from .dates import today as current_date, week_bucket_key
from .lifecycle import DEFAULT_WEEKS_AHEAD, is_pattern_active, needs_generation, validate_recurring_pattern
from .materializer import pattern_to_schedule_entries
from .recurrence import generate_occurrences
from .repository import BaseScheduleRepository, SqlAlchemyScheduleRepository
from .types import DEFAULT_HOURLY_RATE, GenerationReport, RecurringShiftPattern, ScheduleEntry


logger = logging.getLogger(__name__)

DEFAULT_BATCH_LIMIT = 50


class BaseShiftNotifier(ABC):
    """Hook invoked after new entries are saved for a pattern."""

    @abstractmethod
    def shifts_generated(self, pattern: RecurringShiftPattern, entries: list[ScheduleEntry]) -> None:
        ...


class LoggingShiftNotifier(BaseShiftNotifier):
    def shifts_generated(self, pattern: RecurringShiftPattern, entries: list[ScheduleEntry]) -> None:
        logger.info(
            f"{len(entries)} new shift(s) for {pattern.building_name} "
            f"({', '.join(pattern.cleaner_names) or 'unassigned'})"
        )


def _generate_for_pattern(
    repository: BaseScheduleRepository,
    pattern: RecurringShiftPattern,
    horizon: date,
    batch_limit: int,
    default_hourly_rate: float,
) -> list[ScheduleEntry]:
    budget = batch_limit
    if pattern.max_occurrences is not None:
        budget = min(budget, pattern.max_occurrences - pattern.occurrence_count)
    if budget <= 0:
        return []

    # last_generated_date is inclusive here; dates already stored are skipped below
    window_start = pattern.last_generated_date or pattern.start_date
    existing = repository.materialized_dates(pattern.id)

    limit = budget + len(existing)
    occurrences = generate_occurrences(pattern, window_start, horizon, limit)
    fresh = [o for o in occurrences if o.date not in existing]

    # cut short by the budget: resume from the last new date next run
    truncated = len(fresh) > budget or len(occurrences) == limit
    fresh = fresh[:budget]

    entries = pattern_to_schedule_entries(
        pattern,
        fresh,
        week_bucket_key,
        existing_dates=existing,
        default_hourly_rate=default_hourly_rate,
    )

    if entries:
        repository.add_entries(entries)

    repository.update_pattern_progress(
        pattern.id,
        last_generated_date=fresh[-1].date if truncated and fresh else horizon,
        occurrence_count=pattern.occurrence_count + len(entries),
        next_occurrence_date=fresh[-1].date if fresh else pattern.next_occurrence_date,
    )
    return entries


def generate_recurring_shifts(
    repository: BaseScheduleRepository,
    today: Optional[date] = None,
    weeks_ahead: int = DEFAULT_WEEKS_AHEAD,
    batch_limit: int = DEFAULT_BATCH_LIMIT,
    notifier: Optional[BaseShiftNotifier] = None,
    default_hourly_rate: float = DEFAULT_HOURLY_RATE,
) -> GenerationReport:
    """
    Materialize upcoming entries for every pattern that needs them.

    Flow, per pattern:
    1. Skip inactive patterns and patterns that fail validation
    2. Skip patterns already generated ``weeks_ahead`` weeks past today
    3. Expand occurrences from the last generated date up to the horizon
    4. Build entries, skipping dates already stored for the pattern
    5. Save entries and advance last_generated_date / occurrence_count;
       the marker only reaches the horizon once every date up to it exists
    6. Notify

    A failure on one pattern is logged, rolled back, and recorded in the
    report; the remaining patterns are still processed.

    Args:
        repository: Storage to read patterns from and write entries to
        today: Reference date (defaults to the current date)
        weeks_ahead: How far ahead of today entries should exist
        batch_limit: Max occurrences generated per pattern per run
        notifier: Optional hook called with each pattern's new entries
        default_hourly_rate: Rate stamped on hourly entries without one

    Returns:
        GenerationReport with the number of entries created and any
        skipped or failed patterns
    """
    now = today or current_date()
    horizon = now + timedelta(weeks=weeks_ahead)
    report = GenerationReport()

    active = [p for p in repository.list_patterns() if is_pattern_active(p, now)]
    logger.info(f"Generating recurring shifts for {len(active)} active pattern(s) up to {horizon}")

    for pattern in active:
        validation = validate_recurring_pattern(pattern)
        if not validation.valid:
            logger.warning(f"Skipping invalid pattern {pattern.id}: {validation.errors}")
            report.skipped_invalid[pattern.id] = validation.errors
            continue

        if not needs_generation(pattern, weeks_ahead, now):
            logger.debug(f"Pattern {pattern.id} does not need generation")
            continue

        try:
            entries = _generate_for_pattern(repository, pattern, horizon, batch_limit, default_hourly_rate)
            repository.commit()
        except Exception as e:
            repository.rollback()
            logger.exception(f"Failed to generate shifts for pattern {pattern.id}")
            report.errors[pattern.id] = str(e)
            continue

        report.patterns_processed += 1
        report.generated += len(entries)
        logger.info(f"Pattern {pattern.id}: {len(entries)} new entries")

        if entries and notifier is not None:
            notifier.shifts_generated(pattern, entries)

    logger.info(f"Generated {report.generated} recurring shift entries")
    return report


def generate_recurring_shifts_for_db(
    db: Session,
    today: Optional[date] = None,
    weeks_ahead: int = DEFAULT_WEEKS_AHEAD,
    batch_limit: int = DEFAULT_BATCH_LIMIT,
    notifier: Optional[BaseShiftNotifier] = None,
    default_hourly_rate: float = DEFAULT_HOURLY_RATE,
) -> GenerationReport:
    """Run generation against a database session."""
    return generate_recurring_shifts(
        SqlAlchemyScheduleRepository(db),
        today=today,
        weeks_ahead=weeks_ahead,
        batch_limit=batch_limit,
        notifier=notifier,
        default_hourly_rate=default_hourly_rate,
    )
