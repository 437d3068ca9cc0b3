from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import (
    JSON, Boolean, Date, DateTime, Enum as SQLEnum, Float, ForeignKey, Index, String, Text, UniqueConstraint, func,
)
from sqlalchemy.orm import Mapped, mapped_column

from cleanops.db.database import Base
from cleanops.db.models.recurring_shifts import PayType, enum_values


class ScheduleEntryStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ScheduleEntries(Base):
    __tablename__ = "schedule_entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    client_name: Mapped[str] = mapped_column(String(255), nullable=False)
    building_name: Mapped[str] = mapped_column(String(255), nullable=False)
    cleaner_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    cleaner_names: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    cleaner_ids: Mapped[Optional[list[str]]] = mapped_column(JSON, nullable=True)
    hours: Mapped[float] = mapped_column(Float, nullable=False)
    day: Mapped[str] = mapped_column(String(9), nullable=False)
    date: Mapped[date] = mapped_column(Date, nullable=False)
    week_id: Mapped[str] = mapped_column(String(10), nullable=False)  # Monday, YYYY-MM-DD
    start_time: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
    end_time: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
    status: Mapped[ScheduleEntryStatus] = mapped_column(
        SQLEnum(ScheduleEntryStatus, name="entry_status_enum", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=ScheduleEntryStatus.SCHEDULED,
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    recurring_id: Mapped[Optional[str]] = mapped_column(String(36), ForeignKey("recurring_shifts.id"), nullable=True)

    payment_type: Mapped[PayType] = mapped_column(
        SQLEnum(PayType, name="entry_payment_type_enum", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=PayType.HOURLY,
    )
    hourly_rate: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    flat_rate_amount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    overtime_rate: Mapped[float] = mapped_column(Float, nullable=False, default=1.5)
    bonus_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    deductions: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        # one materialized entry per pattern per day; NULL recurring_id (ad-hoc entries) never collides
        UniqueConstraint("recurring_id", "date", name="uq_schedule_entries_recurring_date"),
        Index("ix_schedule_entries_week", "week_id"),
        Index("ix_schedule_entries_date", "date"),
    )
