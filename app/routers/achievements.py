"""
Achievements router.

GET    /achievements[?period=]   - newest first, optionally limited to a period
POST   /achievements             - log a victory (blank title/story ignored)
DELETE /achievements/{id}
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.schemas.achievements import (
    AchievementCreateRequest,
    AchievementListResponse,
    AchievementOut,
)
from app.schemas.common import ErrorResponse
from app.services import storage
from app.services.achievements import (
    Achievement,
    achievements_in_period,
    add_achievement,
    remove_achievement,
)
from app.services.calendar_codec import parse_period_key

router = APIRouter(prefix="/achievements", tags=["achievements"])


def _list(items: list[Achievement]) -> AchievementListResponse:
    return AchievementListResponse(
        total=len(items),
        items=[AchievementOut.model_validate(a) for a in items],
    )


@router.get(
    "",
    response_model=AchievementListResponse,
    summary="List achievements",
    responses={422: {"model": ErrorResponse, "description": "Not a planner period key."}},
)
def list_achievements(
    period: Optional[str] = Query(
        default=None,
        description="Only achievements inside this planner period key. Omit for all.",
        examples=["2026-03-W3"],
    ),
    db: Session = Depends(get_db),
):
    items = storage.load_achievements(db)
    if period is not None:
        items = achievements_in_period(items, parse_period_key(period))
    return _list(items)


@router.post(
    "",
    response_model=AchievementListResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log an achievement",
)
def create_achievement(payload: AchievementCreateRequest, db: Session = Depends(get_db)):
    items = storage.load_achievements(db)
    updated = add_achievement(items, payload.date, payload.title, payload.story)
    if len(updated) != len(items):
        storage.save_achievements(db, updated)
    return _list(updated)


@router.delete(
    "/{achievement_id}",
    response_model=AchievementListResponse,
    summary="Delete an achievement",
    responses={404: {"model": ErrorResponse}},
)
def delete_achievement(achievement_id: str, db: Session = Depends(get_db)):
    updated = remove_achievement(storage.load_achievements(db), achievement_id)
    storage.save_achievements(db, updated)
    return _list(updated)
