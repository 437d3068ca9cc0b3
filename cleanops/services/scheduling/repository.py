"""
Storage access for recurring shift generation.
Fetches patterns from the database and converts to internal types, and writes
materialized entries back.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from cleanops.db.models.recurring_shifts import RecurringShifts, PayType
from cleanops.db.models.schedule_entries import ScheduleEntries, ScheduleEntryStatus

from .types import RecurringShiftPattern, ScheduleEntry


class BaseScheduleRepository(ABC):
    """Abstract storage used by the generation orchestrator."""

    @abstractmethod
    def list_patterns(self) -> list[RecurringShiftPattern]:
        ...

    @abstractmethod
    def materialized_dates(self, pattern_id: str) -> set[date]:
        """Dates that already have an entry for this pattern."""
        ...

    @abstractmethod
    def add_entries(self, entries: list[ScheduleEntry]) -> None:
        ...

    @abstractmethod
    def update_pattern_progress(
        self,
        pattern_id: str,
        last_generated_date: date,
        occurrence_count: int,
        next_occurrence_date: Optional[date],
    ) -> None:
        ...

    def commit(self) -> None:
        """Make the current pattern's writes durable."""

    def rollback(self) -> None:
        """Discard the current pattern's writes."""


def entry_to_row(entry: ScheduleEntry) -> ScheduleEntries:
    return ScheduleEntries(
        id=entry.id,
        client_name=entry.client_name,
        building_name=entry.building_name,
        cleaner_name=entry.cleaner_name,
        cleaner_names=list(entry.cleaner_names),
        cleaner_ids=list(entry.cleaner_ids) if entry.cleaner_ids is not None else None,
        hours=entry.hours,
        day=entry.day,
        date=entry.date,
        week_id=entry.week_id,
        start_time=entry.start_time,
        end_time=entry.end_time,
        status=ScheduleEntryStatus(entry.status.value),
        notes=entry.notes,
        is_recurring=entry.is_recurring,
        recurring_id=entry.recurring_id,
        payment_type=PayType(entry.payment_type.value),
        hourly_rate=entry.hourly_rate,
        flat_rate_amount=entry.flat_rate_amount,
        overtime_rate=entry.overtime_rate,
        bonus_amount=entry.bonus_amount,
        deductions=entry.deductions,
    )


class SqlAlchemyScheduleRepository(BaseScheduleRepository):
    """Repository backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def list_patterns(self) -> list[RecurringShiftPattern]:
        stmt = select(RecurringShifts).order_by(RecurringShifts.created_at, RecurringShifts.id)
        rows = self.db.execute(stmt).scalars().all()
        return [RecurringShiftPattern.from_record(r) for r in rows]

    def materialized_dates(self, pattern_id: str) -> set[date]:
        stmt = select(ScheduleEntries.date).where(ScheduleEntries.recurring_id == pattern_id)
        return set(self.db.execute(stmt).scalars().all())

    def add_entries(self, entries: list[ScheduleEntry]) -> None:
        self.db.add_all([entry_to_row(e) for e in entries])
        self.db.flush()

    def update_pattern_progress(
        self,
        pattern_id: str,
        last_generated_date: date,
        occurrence_count: int,
        next_occurrence_date: Optional[date],
    ) -> None:
        pattern = self.db.get(RecurringShifts, pattern_id)
        if pattern is None:
            raise LookupError(f"Recurring shift {pattern_id} not found")
        pattern.last_generated_date = last_generated_date
        pattern.occurrence_count = occurrence_count
        if next_occurrence_date is not None:
            pattern.next_occurrence_date = next_occurrence_date
        self.db.flush()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
