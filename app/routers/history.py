"""
Productivity history router.

GET /history                 - every logged day (legacy entries normalized)
GET /history/summary?period= - aggregate for one planner period key
PUT /history/{day}           - set one day's record directly
"""
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.schemas.history import (
    DayRecordOut,
    DayRecordRequest,
    HistoryResponse,
    LoggedDayResponse,
    PeriodSummaryResponse,
)
from app.services import storage
from app.services.calendar_codec import parse_period_key
from app.services.history import aggregate, save_day

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=HistoryResponse, summary="All logged days")
def get_history(db: Session = Depends(get_db)):
    history = storage.load_history(db)
    return HistoryResponse(
        days={day: DayRecordOut.model_validate(record) for day, record in sorted(history.items())}
    )


@router.get(
    "/summary",
    response_model=PeriodSummaryResponse,
    summary="Aggregate score for a planner period",
    responses={422: {"model": ErrorResponse, "description": "Not a planner period key."}},
)
def get_summary(
    period: str = Query(
        default="2026",
        description='Period key: "2026", "2026-03", "2026-03-W2" or "2026-03-W2-D1".',
        examples=["2026-03"],
    ),
    db: Session = Depends(get_db),
):
    """
    Average score over the period. Nature days count as 100; the period is
    a nature period only when every logged day in it was one. A period with
    no logged day returns `summary: null`.
    """
    selector = parse_period_key(period)
    record = aggregate(storage.load_history(db), selector)
    return PeriodSummaryResponse(
        period_key=selector.key,
        summary=DayRecordOut.model_validate(record) if record is not None else None,
    )


@router.put(
    "/{day}",
    response_model=LoggedDayResponse,
    summary="Set one day's record",
    responses={422: {"model": ErrorResponse, "description": "Nature day without a note."}},
)
def put_day(day: date, payload: DayRecordRequest, db: Session = Depends(get_db)):
    history = save_day(
        storage.load_history(db),
        day,
        payload.score,
        is_nature=payload.is_nature,
        note=payload.note,
    )
    storage.save_history(db, history)
    return LoggedDayResponse(day=str(day), record=DayRecordOut.model_validate(history[day.isoformat()]))
