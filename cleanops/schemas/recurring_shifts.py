from pydantic import BaseModel
from datetime import date, datetime
from typing import Dict, List, Optional
from cleanops.db.models.recurring_shifts import RecurrenceType, PayType


class RecurringShiftBase(BaseModel):
    building_id: Optional[str] = None
    building_name: str
    client_name: str
    cleaner_names: List[str]
    cleaner_ids: Optional[List[str]] = None
    hours: float
    start_time: Optional[str] = None  # HH:MM
    notes: Optional[str] = None
    pattern_type: RecurrenceType
    interval: int = 1
    days_of_week: Optional[List[int]] = None  # 0=Sunday .. 6=Saturday
    day_of_month: Optional[int] = None
    custom_days: Optional[int] = None
    start_date: date
    end_date: Optional[date] = None
    max_occurrences: Optional[int] = None
    is_active: bool = True
    payment_type: PayType = PayType.HOURLY
    hourly_rate: Optional[float] = None
    flat_rate_amount: Optional[float] = None


class RecurringShiftCreate(RecurringShiftBase):
    pass


class RecurringShiftUpdate(BaseModel):
    cleaner_names: Optional[List[str]] = None
    cleaner_ids: Optional[List[str]] = None
    hours: Optional[float] = None
    start_time: Optional[str] = None
    notes: Optional[str] = None
    end_date: Optional[date] = None
    max_occurrences: Optional[int] = None
    is_active: Optional[bool] = None
    hourly_rate: Optional[float] = None
    flat_rate_amount: Optional[float] = None


class RecurringShiftResponse(RecurringShiftBase):
    id: str
    last_generated_date: Optional[date]
    next_occurrence_date: Optional[date]
    occurrence_count: int
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class OccurrenceResponse(BaseModel):
    date: date
    day: str
    occurrence_number: int

    class Config:
        from_attributes = True


class GenerationResponse(BaseModel):
    generated: int
    patterns_processed: int
    skipped_invalid: Dict[str, List[str]]
    errors: Dict[str, str]

    class Config:
        from_attributes = True
