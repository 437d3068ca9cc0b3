import uuid
from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import JSON, Boolean, Date, DateTime, Enum as SQLEnum, Float, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from cleanops.db.database import Base


class RecurrenceType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class PayType(str, Enum):
    HOURLY = "hourly"
    FLAT_RATE = "flat_rate"


def enum_values(enum_cls):
    # store the lowercase values ("flat_rate"), not the member names
    return [member.value for member in enum_cls]


class RecurringShifts(Base):
    __tablename__ = "recurring_shifts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    building_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    building_name: Mapped[str] = mapped_column(String(255), nullable=False)
    client_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    cleaner_names: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    cleaner_ids: Mapped[Optional[list[str]]] = mapped_column(JSON, nullable=True)
    hours: Mapped[float] = mapped_column(Float, nullable=False)
    start_time: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)  # HH:MM
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    pattern_type: Mapped[RecurrenceType] = mapped_column(
        SQLEnum(RecurrenceType, name="pattern_type_enum", native_enum=False, values_callable=enum_values),
        nullable=False,
    )
    interval: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    days_of_week: Mapped[Optional[list[int]]] = mapped_column(JSON, nullable=True)  # 0=Sunday .. 6=Saturday
    day_of_month: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    custom_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    max_occurrences: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    last_generated_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    next_occurrence_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    occurrence_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    payment_type: Mapped[PayType] = mapped_column(
        SQLEnum(PayType, name="payment_type_enum", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=PayType.HOURLY,
    )
    hourly_rate: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    flat_rate_amount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
