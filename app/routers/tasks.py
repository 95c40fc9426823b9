"""
Daily tracker router.

GET    /tasks                 - task board with current score
POST   /tasks                 - add a task (blank title / bad weight ignored)
POST   /tasks/{id}/toggle     - flip completion
DELETE /tasks/{id}            - remove a task
POST   /tasks/reset           - start a new day (uncheck all)
POST   /tasks/log-day         - write today's score into the history
"""
from __future__ import annotations

from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.schemas.history import DayRecordOut, LoggedDayResponse
from app.schemas.tasks import LogDayRequest, TaskBoardResponse, TaskCreateRequest, TaskOut
from app.services import storage
from app.services.tasks import (
    Task,
    add_task,
    log_day,
    max_possible_score,
    remove_task,
    reset_day,
    toggle_task,
    total_score,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _today() -> date:
    return datetime.now(tz=timezone.utc).date()


def _board(tasks: list[Task]) -> TaskBoardResponse:
    return TaskBoardResponse(
        tasks=[TaskOut.model_validate(t) for t in tasks],
        total_score=total_score(tasks),
        max_possible_score=max_possible_score(tasks),
    )


@router.get("", response_model=TaskBoardResponse, summary="Task board with the current score")
def list_tasks(db: Session = Depends(get_db)):
    return _board(storage.load_tasks(db))


@router.post(
    "",
    response_model=TaskBoardResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a weighted task",
)
def create_task(payload: TaskCreateRequest, db: Session = Depends(get_db)):
    """
    Append a task. A blank title, or a weight that is not a positive integer,
    is ignored: the board comes back unchanged.
    """
    tasks = storage.load_tasks(db)
    updated = add_task(tasks, payload.title, payload.weight)
    if len(updated) != len(tasks):
        storage.save_tasks(db, updated)
    return _board(updated)


@router.post(
    "/reset",
    response_model=TaskBoardResponse,
    summary="Start a new day: uncheck every task",
)
def reset_tasks(db: Session = Depends(get_db)):
    updated = reset_day(storage.load_tasks(db))
    storage.save_tasks(db, updated)
    return _board(updated)


@router.post(
    "/log-day",
    response_model=LoggedDayResponse,
    summary="Record the current score for a day",
    responses={422: {"model": ErrorResponse, "description": "Nature day without a note."}},
)
def log_tasks_day(payload: LogDayRequest, db: Session = Depends(get_db)):
    """
    Store the board's score (completed weights, capped at 100) as the day's
    record. Marking the day as a nature / break day requires a note.
    """
    target = payload.day or _today()
    history = log_day(
        storage.load_tasks(db),
        storage.load_history(db),
        target,
        is_nature=payload.is_nature,
        note=payload.note,
    )
    storage.save_history(db, history)
    return LoggedDayResponse(
        day=str(target),
        record=DayRecordOut.model_validate(history[target.isoformat()]),
    )


@router.post(
    "/{task_id}/toggle",
    response_model=TaskBoardResponse,
    summary="Flip a task's completion",
    responses={404: {"model": ErrorResponse}},
)
def toggle(task_id: str, db: Session = Depends(get_db)):
    updated = toggle_task(storage.load_tasks(db), task_id)
    storage.save_tasks(db, updated)
    return _board(updated)


@router.delete(
    "/{task_id}",
    response_model=TaskBoardResponse,
    summary="Remove a task",
    responses={404: {"model": ErrorResponse}},
)
def delete_task(task_id: str, db: Session = Depends(get_db)):
    updated = remove_task(storage.load_tasks(db), task_id)
    storage.save_tasks(db, updated)
    return _board(updated)
