"""
Consistency tracker router.

GET   /habits                   - habits with their marks
GET   /habits/calendar          - the 365 days of the grid
POST  /habits/{id}/days/{day}   - cycle or set a day's mark
PATCH /habits/{id}              - rename (the gym habit is fixed)
"""
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.schemas.habits import (
    HabitDayRequest,
    HabitListResponse,
    HabitOut,
    HabitRenameRequest,
    YearCalendarResponse,
)
from app.services import storage
from app.services.calendar_codec import PLANNER_YEAR
from app.services.habits import Habit, rename_habit, toggle_day, year_days

router = APIRouter(prefix="/habits", tags=["habits"])


def _list(habits: list[Habit]) -> HabitListResponse:
    return HabitListResponse(habits=[HabitOut.model_validate(h) for h in habits])


@router.get("", response_model=HabitListResponse, summary="All habits")
def list_habits(db: Session = Depends(get_db)):
    return _list(storage.load_habits(db))


@router.get("/calendar", response_model=YearCalendarResponse, summary="Dates of the habit grid")
def calendar_days():
    return YearCalendarResponse(year=PLANNER_YEAR, days=year_days())


@router.post(
    "/{habit_id}/days/{day}",
    response_model=HabitListResponse,
    summary="Mark a day",
    responses={404: {"model": ErrorResponse}},
)
def mark_day(
    habit_id: str,
    day: date,
    payload: HabitDayRequest | None = None,
    db: Session = Depends(get_db),
):
    """
    With a `status`, set it. Without one, cycle the day:
    done -> missed -> empty -> done.
    """
    status = payload.status if payload is not None else None
    updated = toggle_day(storage.load_habits(db), habit_id, day, status)
    storage.save_habits(db, updated)
    return _list(updated)


@router.patch(
    "/{habit_id}",
    response_model=HabitListResponse,
    summary="Rename a habit",
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def rename(habit_id: str, payload: HabitRenameRequest, db: Session = Depends(get_db)):
    habits = storage.load_habits(db)
    updated = rename_habit(habits, habit_id, payload.title)
    storage.save_habits(db, updated)
    return _list(updated)
