"""
Recurring shift scheduling package.

Usage:
    from datetime import date
    from cleanops.services.scheduling import generate_recurring_shifts_for_db

    # Load patterns, materialize the next four weeks, and save them in one call
    report = generate_recurring_shifts_for_db(db)

    # Or work with the pure functions directly
    from cleanops.services.scheduling import generate_occurrences, pattern_to_schedule_entries

    occurrences = generate_occurrences(pattern, date(2024, 1, 1), date(2024, 3, 31))
    entries = pattern_to_schedule_entries(pattern, occurrences)
"""

from .types import (
    PatternType,
    PaymentType,
    EntryStatus,
    RecurringShiftPattern,
    ShiftOccurrence,
    ScheduleEntry,
    ValidationResult,
    GenerationReport,
)
from .dates import (
    parse_canonical_date,
    format_canonical_date,
    weekday_name,
    week_bucket_key,
    add_hours_to_time,
)
from .recurrence import (
    calculate_next_occurrence,
    generate_occurrences,
    get_upcoming_occurrences,
    format_pattern_description,
)
from .lifecycle import is_pattern_active, needs_generation, validate_recurring_pattern
from .materializer import pattern_to_schedule_entries
from .repository import BaseScheduleRepository, SqlAlchemyScheduleRepository
from .generator import (
    BaseShiftNotifier,
    LoggingShiftNotifier,
    generate_recurring_shifts,
    generate_recurring_shifts_for_db,
)

__all__ = [
    # Types
    "PatternType",
    "PaymentType",
    "EntryStatus",
    "RecurringShiftPattern",
    "ShiftOccurrence",
    "ScheduleEntry",
    "ValidationResult",
    "GenerationReport",
    # Calendar
    "parse_canonical_date",
    "format_canonical_date",
    "weekday_name",
    "week_bucket_key",
    "add_hours_to_time",
    # Occurrences
    "calculate_next_occurrence",
    "generate_occurrences",
    "get_upcoming_occurrences",
    "format_pattern_description",
    # Lifecycle
    "is_pattern_active",
    "needs_generation",
    "validate_recurring_pattern",
    # Materialization
    "pattern_to_schedule_entries",
    # Main entry points
    "BaseScheduleRepository",
    "SqlAlchemyScheduleRepository",
    "BaseShiftNotifier",
    "LoggingShiftNotifier",
    "generate_recurring_shifts",
    "generate_recurring_shifts_for_db",
]
