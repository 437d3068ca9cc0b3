"""
Internal data types for the recurring shift engine and payroll.
decoupled from SQLAlchemy models for cleaner logic.
"""

from dataclasses import dataclass, field, asdict
from datetime import date
from enum import Enum
from typing import Any, Optional


UNASSIGNED_CLEANER = "UNASSIGNED"
DEFAULT_HOURLY_RATE = 15.0
DEFAULT_OVERTIME_RATE = 1.5


def _value(member: Any) -> Any:
    """Plain value of an enum member (ORM enums are separate classes)."""
    return getattr(member, "value", member)


def is_positive_int(value: Any) -> bool:
    """Whole number above zero; bools do not count."""
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class PatternType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class PaymentType(str, Enum):
    HOURLY = "hourly"
    FLAT_RATE = "flat_rate"


class EntryStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class RecurringShiftPattern:
    """A rule describing how a cleaning shift repeats."""
    id: str
    building_name: str
    client_name: str
    cleaner_names: list[str]
    hours: float
    pattern_type: PatternType
    start_date: date
    interval: int = 1
    days_of_week: Optional[list[int]] = None  # 0=Sunday .. 6=Saturday
    day_of_month: Optional[int] = None  # 1-31, clamped in short months
    custom_days: Optional[int] = None
    end_date: Optional[date] = None  # inclusive
    max_occurrences: Optional[int] = None
    building_id: Optional[str] = None
    cleaner_ids: Optional[list[str]] = None
    start_time: Optional[str] = None  # "HH:MM"
    notes: Optional[str] = None
    is_active: bool = True
    last_generated_date: Optional[date] = None
    next_occurrence_date: Optional[date] = None
    occurrence_count: int = 0
    payment_type: PaymentType = PaymentType.HOURLY
    hourly_rate: Optional[float] = None
    flat_rate_amount: Optional[float] = None

    @property
    def primary_cleaner(self) -> Optional[str]:
        return self.cleaner_names[0] if self.cleaner_names else None

    @classmethod
    def from_record(cls, record: Any) -> "RecurringShiftPattern":
        """Build a pattern from an ORM row or any object with matching attributes."""
        return cls(
            id=record.id,
            building_name=record.building_name,
            client_name=record.client_name,
            cleaner_names=list(record.cleaner_names or []),
            hours=record.hours,
            pattern_type=PatternType(_value(record.pattern_type)),
            start_date=record.start_date,
            interval=record.interval,
            days_of_week=list(record.days_of_week) if record.days_of_week is not None else None,
            day_of_month=record.day_of_month,
            custom_days=record.custom_days,
            end_date=record.end_date,
            max_occurrences=record.max_occurrences,
            building_id=record.building_id,
            cleaner_ids=list(record.cleaner_ids) if record.cleaner_ids is not None else None,
            start_time=record.start_time,
            notes=record.notes,
            is_active=record.is_active,
            last_generated_date=record.last_generated_date,
            next_occurrence_date=record.next_occurrence_date,
            occurrence_count=record.occurrence_count or 0,
            payment_type=PaymentType(_value(record.payment_type)),
            hourly_rate=record.hourly_rate,
            flat_rate_amount=record.flat_rate_amount,
        )


@dataclass
class ShiftOccurrence:
    """One concrete date produced by expanding a pattern."""
    date: date
    day: str
    occurrence_number: int  # 1-based


@dataclass
class ScheduleEntry:
    """A materialized, persistable shift."""
    id: str
    client_name: str
    building_name: str
    cleaner_name: str
    hours: float
    day: str
    date: date
    week_id: str
    status: EntryStatus = EntryStatus.SCHEDULED
    cleaner_names: list[str] = field(default_factory=list)
    cleaner_ids: Optional[list[str]] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    notes: Optional[str] = None
    is_recurring: bool = False
    recurring_id: Optional[str] = None
    payment_type: PaymentType = PaymentType.HOURLY
    hourly_rate: Optional[float] = None
    flat_rate_amount: Optional[float] = None
    overtime_rate: float = DEFAULT_OVERTIME_RATE
    bonus_amount: float = 0.0
    deductions: float = 0.0

    @property
    def cleaners(self) -> list[str]:
        """Everyone working the entry; falls back to the primary cleaner."""
        return self.cleaner_names or [self.cleaner_name]

    @property
    def idempotency_key(self) -> Optional[str]:
        if not self.recurring_id:
            return None
        return f"{self.recurring_id}:{self.date.isoformat()}"

    def to_record(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_record(cls, record: Any) -> "ScheduleEntry":
        return cls(
            id=record.id,
            client_name=record.client_name,
            building_name=record.building_name,
            cleaner_name=record.cleaner_name,
            hours=record.hours,
            day=record.day,
            date=record.date,
            week_id=record.week_id,
            status=EntryStatus(_value(record.status)),
            cleaner_names=list(record.cleaner_names or []),
            cleaner_ids=list(record.cleaner_ids) if record.cleaner_ids is not None else None,
            start_time=record.start_time,
            end_time=record.end_time,
            notes=record.notes,
            is_recurring=record.is_recurring,
            recurring_id=record.recurring_id,
            payment_type=PaymentType(_value(record.payment_type)),
            hourly_rate=record.hourly_rate,
            flat_rate_amount=record.flat_rate_amount,
            overtime_rate=record.overtime_rate if record.overtime_rate is not None else DEFAULT_OVERTIME_RATE,
            bonus_amount=record.bonus_amount or 0.0,
            deductions=record.deductions or 0.0,
        )


@dataclass
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass
class GenerationReport:
    """Output of one recurring shift generation run."""
    generated: int = 0
    patterns_processed: int = 0
    skipped_invalid: dict[str, list[str]] = field(default_factory=dict)  # pattern_id -> errors
    errors: dict[str, str] = field(default_factory=dict)  # pattern_id -> message
