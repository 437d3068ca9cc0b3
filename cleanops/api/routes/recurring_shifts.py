import logging
import uuid
from datetime import date
from types import SimpleNamespace
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from cleanops.api.deps import get_db
from cleanops.core.config import settings
from cleanops.db.models.recurring_shifts import RecurringShifts
from cleanops.schemas.recurring_shifts import (
    GenerationResponse,
    OccurrenceResponse,
    RecurringShiftCreate,
    RecurringShiftResponse,
    RecurringShiftUpdate,
)
from cleanops.services.scheduling import (
    LoggingShiftNotifier,
    RecurringShiftPattern,
    format_pattern_description,
    generate_recurring_shifts_for_db,
    get_upcoming_occurrences,
    is_pattern_active,
    validate_recurring_pattern,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recurring-shifts", tags=["recurring-shifts"])


def _to_response(row: RecurringShifts) -> RecurringShiftResponse:
    response = RecurringShiftResponse.model_validate(row)
    response.description = format_pattern_description(RecurringShiftPattern.from_record(row))
    return response


def _get_or_404(db: Session, pattern_id: str) -> RecurringShifts:
    row = db.get(RecurringShifts, pattern_id)
    if not row:
        raise HTTPException(status_code=404, detail="Recurring shift not found")
    return row


@router.post("", response_model=RecurringShiftResponse, status_code=status.HTTP_201_CREATED)
def create_recurring_shift(
    payload: RecurringShiftCreate,
    db: Session = Depends(get_db),
):
    pattern_id = str(uuid.uuid4())
    candidate = SimpleNamespace(
        id=pattern_id,
        last_generated_date=None,
        next_occurrence_date=None,
        occurrence_count=0,
        **payload.model_dump(),
    )
    validation = validate_recurring_pattern(RecurringShiftPattern.from_record(candidate))
    if not validation.valid:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=validation.errors)

    row = RecurringShifts(id=pattern_id, occurrence_count=0, **payload.model_dump())
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info(f"Created recurring shift {row.id} for {row.building_name}")
    return _to_response(row)


@router.get("", response_model=List[RecurringShiftResponse])
def list_recurring_shifts(
    active_only: bool = False,
    client_name: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    query = db.query(RecurringShifts)
    if client_name:
        query = query.filter(RecurringShifts.client_name == client_name)

    rows = query.order_by(RecurringShifts.start_date, RecurringShifts.id).all()
    if active_only:
        rows = [r for r in rows if is_pattern_active(RecurringShiftPattern.from_record(r))]

    return [_to_response(r) for r in rows[skip:skip + limit]]


@router.post("/generate", response_model=GenerationResponse)
def generate_recurring_shifts(
    as_of: Optional[date] = None,
    db: Session = Depends(get_db),
):
    report = generate_recurring_shifts_for_db(
        db,
        today=as_of,
        weeks_ahead=settings.GENERATION_WEEKS_AHEAD,
        batch_limit=settings.GENERATION_BATCH_LIMIT,
        notifier=LoggingShiftNotifier(),
        default_hourly_rate=settings.DEFAULT_HOURLY_RATE,
    )
    return GenerationResponse.model_validate(report)


@router.get("/{pattern_id}", response_model=RecurringShiftResponse)
def get_recurring_shift(
    pattern_id: str,
    db: Session = Depends(get_db),
):
    return _to_response(_get_or_404(db, pattern_id))


@router.get("/{pattern_id}/upcoming", response_model=List[OccurrenceResponse])
def get_upcoming(
    pattern_id: str,
    count: int = Query(5, ge=1, le=100),
    as_of: Optional[date] = None,
    db: Session = Depends(get_db),
):
    row = _get_or_404(db, pattern_id)
    occurrences = get_upcoming_occurrences(RecurringShiftPattern.from_record(row), count, today=as_of)
    return [OccurrenceResponse.model_validate(o) for o in occurrences]


@router.patch("/{pattern_id}", response_model=RecurringShiftResponse)
def update_recurring_shift(
    pattern_id: str,
    payload: RecurringShiftUpdate,
    db: Session = Depends(get_db),
):
    row = _get_or_404(db, pattern_id)

    update_data = payload.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(row, field, value)

    validation = validate_recurring_pattern(RecurringShiftPattern.from_record(row))
    if not validation.valid:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=validation.errors)

    db.commit()
    db.refresh(row)
    return _to_response(row)
