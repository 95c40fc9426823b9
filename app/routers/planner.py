"""
Planner router - the 2026 drill-down and its per-period goals.

GET    /planner                       - current view
POST   /planner/drill                 - enter a child (month / week / day slot)
POST   /planner/back                  - one level up
POST   /planner/jump                  - breadcrumb jump to a level on the path
GET    /planner/periods/{key}         - preview any period without moving
GET    /planner/goals                 - goals of the current period
POST   /planner/goals                 - add a goal to the current period
POST   /planner/goals/{id}/toggle
DELETE /planner/goals/{id}

The navigation position lives in process memory and starts at the year
view on every restart; goals, history and achievements are stored.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.schemas.achievements import AchievementOut
from app.schemas.common import ErrorResponse
from app.schemas.history import DayRecordOut
from app.schemas.planner import (
    BreadcrumbOut,
    DrillRequest,
    GoalCreateRequest,
    GoalListResponse,
    GoalOut,
    GridCellOut,
    JumpRequest,
    PlannerViewResponse,
)
from app.services import storage
from app.services.calendar_codec import Period, parse_period_key
from app.services.goals import GoalStore
from app.services.history import DayRecord
from app.services.navigation import PlannerNavigator, PlannerView, build_view

router = APIRouter(prefix="/planner", tags=["planner"])


def get_navigator(request: Request) -> PlannerNavigator:
    return request.app.state.navigator


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _record(record: DayRecord | None) -> DayRecordOut | None:
    return DayRecordOut.model_validate(record) if record is not None else None


def _goals_out(period: Period, goals: GoalStore) -> GoalListResponse:
    return GoalListResponse(
        period_key=period.key,
        goals=[GoalOut(id=g.id, text=g.text, completed=g.completed) for g in goals.goals_for(period)],
    )


def _view_to_response(view: PlannerView) -> PlannerViewResponse:
    return PlannerViewResponse(
        level=view.level,
        period_key=view.period_key,
        title=view.title,
        summary=_record(view.summary),
        achievements=[AchievementOut.model_validate(a) for a in view.achievements],
        goals=[GoalOut(id=g.id, text=g.text, completed=g.completed) for g in view.goals],
        breadcrumbs=[
            BreadcrumbOut(level=b.level, label=b.label, period_key=b.period_key)
            for b in view.breadcrumbs
        ],
        grid=[
            GridCellOut(
                index=c.index,
                label=c.label,
                selectable=c.selectable,
                summary=_record(c.summary),
                has_achievements=c.has_achievements,
                date=c.date.isoformat() if c.date else None,
                period_key=c.period_key,
            )
            for c in view.grid
        ],
    )


def _render(period: Period, db: Session) -> PlannerViewResponse:
    view = build_view(
        period,
        storage.load_history(db),
        storage.load_achievements(db),
        storage.load_goals(db),
    )
    return _view_to_response(view)


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------

@router.get("", response_model=PlannerViewResponse, summary="Current planner view")
def current_view(
    db: Session = Depends(get_db),
    navigator: PlannerNavigator = Depends(get_navigator),
):
    return _render(navigator.period, db)


@router.post(
    "/drill",
    response_model=PlannerViewResponse,
    summary="Drill into a child period",
    responses={
        409: {"model": ErrorResponse, "description": "Empty day slot, or already at day level."},
        422: {"model": ErrorResponse, "description": "Index out of range for this level."},
    },
)
def drill(
    payload: DrillRequest,
    db: Session = Depends(get_db),
    navigator: PlannerNavigator = Depends(get_navigator),
):
    """
    From the year choose a month (0-11), from a month a week (0-4), from a
    week a day slot (0 = Monday .. 6 = Sunday). Slots the grid reports as
    `selectable: false` have no date and are refused with 409.
    """
    return _render(navigator.drill_down(payload.index), db)


@router.post(
    "/back",
    response_model=PlannerViewResponse,
    summary="Go up one level",
    responses={409: {"model": ErrorResponse, "description": "Already at the year view."}},
)
def back(
    db: Session = Depends(get_db),
    navigator: PlannerNavigator = Depends(get_navigator),
):
    return _render(navigator.go_back(), db)


@router.post(
    "/jump",
    response_model=PlannerViewResponse,
    summary="Breadcrumb jump",
    responses={409: {"model": ErrorResponse, "description": "Target is below the current level."}},
)
def jump(
    payload: JumpRequest,
    db: Session = Depends(get_db),
    navigator: PlannerNavigator = Depends(get_navigator),
):
    return _render(navigator.jump_to(payload.level), db)


@router.get(
    "/periods/{key}",
    response_model=PlannerViewResponse,
    summary="Preview any period",
    responses={
        409: {"model": ErrorResponse, "description": "Day key with no calendar date."},
        422: {"model": ErrorResponse, "description": "Not a planner period key."},
    },
)
def preview(key: str, db: Session = Depends(get_db)):
    return _render(parse_period_key(key), db)


# ---------------------------------------------------------------------------
# Goals of the current period
# ---------------------------------------------------------------------------

@router.get("/goals", response_model=GoalListResponse, summary="Goals of the current period")
def list_goals(
    db: Session = Depends(get_db),
    navigator: PlannerNavigator = Depends(get_navigator),
):
    return _goals_out(navigator.period, storage.load_goals(db))


@router.post(
    "/goals",
    response_model=GoalListResponse,
    summary="Add a goal to the current period",
)
def add_goal(
    payload: GoalCreateRequest,
    db: Session = Depends(get_db),
    navigator: PlannerNavigator = Depends(get_navigator),
):
    """Whitespace-only text is ignored; the list comes back unchanged."""
    goals = storage.load_goals(db)
    if goals.add(navigator.period, payload.text) is not None:
        storage.save_goals(db, goals)
    return _goals_out(navigator.period, goals)


@router.post(
    "/goals/{goal_id}/toggle",
    response_model=GoalListResponse,
    summary="Flip a goal's completion",
)
def toggle_goal(
    goal_id: str,
    db: Session = Depends(get_db),
    navigator: PlannerNavigator = Depends(get_navigator),
):
    goals = storage.load_goals(db)
    if goals.toggle(navigator.period, goal_id) is not None:
        storage.save_goals(db, goals)
    return _goals_out(navigator.period, goals)


@router.delete(
    "/goals/{goal_id}",
    response_model=GoalListResponse,
    summary="Remove a goal",
)
def delete_goal(
    goal_id: str,
    db: Session = Depends(get_db),
    navigator: PlannerNavigator = Depends(get_navigator),
):
    goals = storage.load_goals(db)
    if goals.remove(navigator.period, goal_id):
        storage.save_goals(db, goals)
    return _goals_out(navigator.period, goals)
