"""
Payroll service package.

Usage:
    from cleanops.services.payroll import calculate_payroll_summary

    summary = calculate_payroll_summary(entries, ["Ana", "Ben"], default_rate=15.0)
    for cleaner, payroll in summary.items():
        print(cleaner, payroll.total_pay)
"""

from .types import PayrollBreakdown, PayrollResult, ScheduleStats
from .calculations import (
    calculate_entry_pay,
    calculate_payroll_for_period,
    calculate_payroll_summary,
    calculate_schedule_stats,
    validate_entry,
)

__all__ = [
    # Types
    "PayrollBreakdown",
    "PayrollResult",
    "ScheduleStats",
    # Calculations
    "calculate_entry_pay",
    "calculate_payroll_for_period",
    "calculate_payroll_summary",
    "calculate_schedule_stats",
    "validate_entry",
]
