"""
Payroll calculations over schedule entries.

Two overtime views live here:

- calculate_entry_pay / calculate_schedule_stats: anything past 8 hours in a
  single entry counts as overtime. Quick per-shift and dashboard figures.
- calculate_payroll_for_period / calculate_payroll_summary: hours past 40 in
  a Monday-Sunday week count as overtime. This is the payroll figure.
"""

from collections import defaultdict
from typing import Iterable, Optional

from cleanops.services.scheduling.dates import as_date, week_bucket_key
from cleanops.services.scheduling.types import (
    DEFAULT_HOURLY_RATE,
    DEFAULT_OVERTIME_RATE,
    EntryStatus,
    PaymentType,
    ScheduleEntry,
)

from .types import PayrollResult, ScheduleStats


DAILY_OVERTIME_THRESHOLD = 8.0
WEEKLY_OVERTIME_THRESHOLD = 40.0
UNKNOWN_CLEANER = "Unknown"


def _hourly_rate(entry: ScheduleEntry, default_rate: float) -> float:
    return entry.hourly_rate if entry.hourly_rate is not None else default_rate


def _overtime_multiplier(entry: ScheduleEntry) -> float:
    return entry.overtime_rate if entry.overtime_rate is not None else DEFAULT_OVERTIME_RATE


def _is_flat_rate(entry: ScheduleEntry) -> bool:
    return entry.payment_type == PaymentType.FLAT_RATE


def _week_key(entry: ScheduleEntry) -> str:
    return entry.week_id or week_bucket_key(as_date(entry.date))


def calculate_entry_pay(entry: ScheduleEntry, default_rate: float = DEFAULT_HOURLY_RATE) -> float:
    """
    Pay for a single entry.

    Flat-rate: amount + bonus - deductions.
    Hourly: first 8 hours at the rate, the rest at rate * overtime_rate,
    plus bonus minus deductions. For display only; see calculate_payroll_for_period.
    """
    bonus = entry.bonus_amount or 0.0
    deductions = entry.deductions or 0.0

    if _is_flat_rate(entry):
        return (entry.flat_rate_amount or 0.0) + bonus - deductions

    hours = entry.hours or 0.0
    rate = _hourly_rate(entry, default_rate)
    regular_hours = min(hours, DAILY_OVERTIME_THRESHOLD)
    overtime_hours = max(0.0, hours - DAILY_OVERTIME_THRESHOLD)

    regular_pay = regular_hours * rate
    overtime_pay = overtime_hours * rate * _overtime_multiplier(entry)
    return regular_pay + overtime_pay + bonus - deductions


def calculate_payroll_for_period(
    entries: Iterable[Optional[ScheduleEntry]],
    cleaner_name: str,
    default_rate: float = DEFAULT_HOURLY_RATE,
) -> PayrollResult:
    """
    Payroll for one cleaner with overtime computed per calendar week.

    Entries are grouped by week_id. Within a week, hourly entries are taken in
    the order given: hours up to a running total of 40 are regular and paid at
    that entry's rate; hours past 40 are overtime and paid at that entry's rate
    times its overtime_rate. Flat-rate entries only add to flat_rate_pay.

    Args:
        entries: Schedule entries for the period (any cleaners)
        cleaner_name: Cleaner to compute payroll for
        default_rate: Rate for hourly entries that carry none

    Returns:
        PayrollResult with hour and pay totals and a job breakdown
    """
    result = PayrollResult()

    entries_by_week: dict[str, list[ScheduleEntry]] = defaultdict(list)
    for entry in entries:
        if entry is None or cleaner_name not in entry.cleaners:
            continue
        entries_by_week[_week_key(entry)].append(entry)

    for week_entries in entries_by_week.values():
        week_hours = 0.0

        for entry in week_entries:
            if _is_flat_rate(entry):
                result.flat_rate_pay += entry.flat_rate_amount or 0.0
                result.breakdown.flat_rate_jobs += 1
                continue

            hours = entry.hours or 0.0
            rate = _hourly_rate(entry, default_rate)

            regular = min(hours, max(0.0, WEEKLY_OVERTIME_THRESHOLD - week_hours))
            overtime = hours - regular
            week_hours += hours

            result.regular_hours += regular
            result.overtime_hours += overtime
            result.regular_pay += regular * rate
            result.overtime_pay += overtime * rate * _overtime_multiplier(entry)

            result.breakdown.hourly_jobs += 1
            if entry.status == EntryStatus.COMPLETED:
                result.breakdown.completed_hours += hours
            elif entry.status == EntryStatus.SCHEDULED:
                result.breakdown.scheduled_hours += hours

    result.total_hours = result.regular_hours + result.overtime_hours
    result.total_pay = result.regular_pay + result.overtime_pay + result.flat_rate_pay
    return result


def calculate_payroll_summary(
    entries: Iterable[Optional[ScheduleEntry]],
    cleaner_names: Iterable[str],
    default_rate: float = DEFAULT_HOURLY_RATE,
) -> dict[str, PayrollResult]:
    """Per-cleaner payroll; cleaners with no hours and no flat-rate pay are left out."""
    entries = list(entries)
    summary: dict[str, PayrollResult] = {}

    for cleaner_name in cleaner_names:
        payroll = calculate_payroll_for_period(entries, cleaner_name, default_rate)
        if payroll.total_hours > 0 or payroll.flat_rate_pay > 0:
            summary[cleaner_name] = payroll

    return summary


def calculate_schedule_stats(
    entries: Iterable[Optional[ScheduleEntry]],
    default_rate: float = DEFAULT_HOURLY_RATE,
) -> ScheduleStats:
    """
    Dashboard totals for a set of entries.

    Overtime here is the per-entry estimate (hours past 8 in one entry), not
    the weekly payroll figure.
    """
    entries = [e for e in entries if e is not None]
    stats = ScheduleStats(total_entries=len(entries))
    if not entries:
        return stats

    cleaner_hours: dict[str, float] = defaultdict(float)
    hourly_rate_sum = 0.0

    for entry in entries:
        hours = entry.hours or 0.0
        stats.total_hours += hours

        if entry.status == EntryStatus.COMPLETED:
            stats.completed_entries += 1
        elif entry.status == EntryStatus.SCHEDULED:
            stats.pending_entries += 1

        cleaner_hours[entry.cleaner_name or UNKNOWN_CLEANER] += hours

        entry_pay = calculate_entry_pay(entry, default_rate)
        stats.total_payroll += entry_pay
        stats.total_bonus_amount += entry.bonus_amount or 0.0
        stats.total_deductions += entry.deductions or 0.0

        if _is_flat_rate(entry):
            stats.total_flat_rate_jobs += 1
            stats.total_flat_rate_amount += entry.flat_rate_amount or 0.0
            continue

        rate = _hourly_rate(entry, default_rate)
        stats.total_hourly_jobs += 1
        stats.total_hourly_amount += entry_pay
        hourly_rate_sum += rate

        overtime_hours = max(0.0, hours - DAILY_OVERTIME_THRESHOLD)
        stats.estimated_overtime_hours += overtime_hours
        stats.estimated_overtime_premium += overtime_hours * rate * (_overtime_multiplier(entry) - 1)

    stats.average_hours_per_cleaner = sum(cleaner_hours.values()) / len(cleaner_hours)
    stats.utilization_rate = stats.completed_entries / stats.total_entries * 100
    if stats.total_hourly_jobs:
        stats.average_hourly_rate = hourly_rate_sum / stats.total_hourly_jobs

    return stats


def validate_entry(entry: ScheduleEntry) -> list[str]:
    errors = []

    if not (entry.client_name or "").strip():
        errors.append("Client name is required")
    if not (entry.building_name or "").strip():
        errors.append("Building name is required")
    if not (entry.cleaner_name or "").strip() and not entry.cleaner_names:
        errors.append("At least one cleaner is required")
    if not entry.hours or entry.hours <= 0:
        errors.append("Hours must be greater than 0")
    if not entry.date:
        errors.append("Date is required")

    return errors
