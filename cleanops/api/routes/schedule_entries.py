from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from cleanops.api.deps import get_db
from cleanops.db.models.schedule_entries import ScheduleEntries
from cleanops.schemas.schedule_entries import ScheduleEntryResponse

router = APIRouter(prefix="/schedule-entries", tags=["schedule-entries"])


def query_entries(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    week_id: Optional[str] = None,
    recurring_id: Optional[str] = None,
) -> List[ScheduleEntries]:
    """Entries in date order; ties keep insertion order so payroll allocation is stable."""
    if start_date and end_date and end_date < start_date:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="end_date cannot be before start_date")

    query = db.query(ScheduleEntries)
    if start_date:
        query = query.filter(ScheduleEntries.date >= start_date)
    if end_date:
        query = query.filter(ScheduleEntries.date <= end_date)
    if week_id:
        query = query.filter(ScheduleEntries.week_id == week_id)
    if recurring_id:
        query = query.filter(ScheduleEntries.recurring_id == recurring_id)

    return query.order_by(ScheduleEntries.date, ScheduleEntries.created_at, ScheduleEntries.start_time).all()


@router.get("", response_model=List[ScheduleEntryResponse])
def list_schedule_entries(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    week_id: Optional[str] = None,
    recurring_id: Optional[str] = None,
    cleaner_name: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    rows = query_entries(db, start_date, end_date, week_id, recurring_id)

    # cleaner_names is a JSON column, filter in Python to stay portable
    if cleaner_name:
        rows = [r for r in rows if cleaner_name in (r.cleaner_names or [r.cleaner_name])]

    return rows[skip:skip + limit]
