"""
Result types for payroll and schedule statistics.
"""

from dataclasses import dataclass, field


@dataclass
class PayrollBreakdown:
    hourly_jobs: int = 0
    flat_rate_jobs: int = 0
    completed_hours: float = 0.0
    scheduled_hours: float = 0.0


@dataclass
class PayrollResult:
    """Payroll for one cleaner over a period, overtime bucketed per week."""
    total_hours: float = 0.0
    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    regular_pay: float = 0.0
    overtime_pay: float = 0.0
    flat_rate_pay: float = 0.0
    total_pay: float = 0.0
    breakdown: PayrollBreakdown = field(default_factory=PayrollBreakdown)


@dataclass
class ScheduleStats:
    """
    Company-wide dashboard rollup.

    The ``estimated_overtime_*`` figures use the per-entry 8-hour view from
    calculate_entry_pay. They are a quick estimate and will not match the
    weekly-bucketed overtime in PayrollResult.
    """
    total_hours: float = 0.0
    total_entries: int = 0
    completed_entries: int = 0
    pending_entries: int = 0
    utilization_rate: float = 0.0  # percent of entries completed
    average_hours_per_cleaner: float = 0.0
    total_hourly_jobs: int = 0
    total_flat_rate_jobs: int = 0
    total_hourly_amount: float = 0.0
    total_flat_rate_amount: float = 0.0
    total_bonus_amount: float = 0.0
    total_deductions: float = 0.0
    total_payroll: float = 0.0
    average_hourly_rate: float = 0.0
    estimated_overtime_hours: float = 0.0
    estimated_overtime_premium: float = 0.0  # extra paid above straight time
