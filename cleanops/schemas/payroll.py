from pydantic import BaseModel
from datetime import date
from typing import Dict


class PayrollBreakdownResponse(BaseModel):
    hourly_jobs: int
    flat_rate_jobs: int
    completed_hours: float
    scheduled_hours: float

    class Config:
        from_attributes = True


class PayrollResultResponse(BaseModel):
    total_hours: float
    regular_hours: float
    overtime_hours: float
    regular_pay: float
    overtime_pay: float
    flat_rate_pay: float
    total_pay: float
    breakdown: PayrollBreakdownResponse

    class Config:
        from_attributes = True


class PayrollSummaryResponse(BaseModel):
    start_date: date
    end_date: date
    cleaners: Dict[str, PayrollResultResponse]


class ScheduleStatsResponse(BaseModel):
    """Dashboard figures; overtime is the per-entry estimate, not payroll overtime."""
    total_hours: float
    total_entries: int
    completed_entries: int
    pending_entries: int
    utilization_rate: float
    average_hours_per_cleaner: float
    total_hourly_jobs: int
    total_flat_rate_jobs: int
    total_hourly_amount: float
    total_flat_rate_amount: float
    total_bonus_amount: float
    total_deductions: float
    total_payroll: float
    average_hourly_rate: float
    estimated_overtime_hours: float
    estimated_overtime_premium: float

    class Config:
        from_attributes = True
