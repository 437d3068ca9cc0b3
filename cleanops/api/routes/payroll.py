from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cleanops.api.deps import get_db
from cleanops.api.routes.schedule_entries import query_entries
from cleanops.core.config import settings
from cleanops.schemas.payroll import PayrollResultResponse, PayrollSummaryResponse, ScheduleStatsResponse
from cleanops.services.payroll import calculate_payroll_summary, calculate_schedule_stats
from cleanops.services.scheduling import ScheduleEntry

router = APIRouter(prefix="/payroll", tags=["payroll"])


def _load_entries(db: Session, start_date: date, end_date: date) -> List[ScheduleEntry]:
    return [ScheduleEntry.from_record(r) for r in query_entries(db, start_date, end_date)]


@router.get("", response_model=PayrollSummaryResponse)
def get_payroll(
    start_date: date,
    end_date: date,
    cleaner_names: Optional[List[str]] = Query(None, alias="cleaner_name"),
    db: Session = Depends(get_db),
):
    entries = _load_entries(db, start_date, end_date)

    if not cleaner_names:
        # everyone who appears in the period, first appearance first
        cleaner_names = list(dict.fromkeys(name for e in entries for name in e.cleaners))

    summary = calculate_payroll_summary(entries, cleaner_names, settings.DEFAULT_HOURLY_RATE)
    return PayrollSummaryResponse(
        start_date=start_date,
        end_date=end_date,
        cleaners={name: PayrollResultResponse.model_validate(result) for name, result in summary.items()},
    )


@router.get("/stats", response_model=ScheduleStatsResponse)
def get_schedule_stats(
    start_date: date,
    end_date: date,
    db: Session = Depends(get_db),
):
    entries = _load_entries(db, start_date, end_date)
    return ScheduleStatsResponse.model_validate(calculate_schedule_stats(entries, settings.DEFAULT_HOURLY_RATE))
