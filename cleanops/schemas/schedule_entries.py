from pydantic import BaseModel
from datetime import date, datetime
from typing import List, Optional
from cleanops.db.models.recurring_shifts import PayType
from cleanops.db.models.schedule_entries import ScheduleEntryStatus


class ScheduleEntryResponse(BaseModel):
    id: str
    client_name: str
    building_name: str
    cleaner_name: str
    cleaner_names: List[str]
    cleaner_ids: Optional[List[str]]
    hours: float
    day: str
    date: date
    week_id: str
    start_time: Optional[str]
    end_time: Optional[str]
    status: ScheduleEntryStatus
    notes: Optional[str]
    is_recurring: bool
    recurring_id: Optional[str]
    payment_type: PayType
    hourly_rate: Optional[float]
    flat_rate_amount: Optional[float]
    overtime_rate: float
    bonus_amount: float
    deductions: float
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
