"""
Collection storage - the six named JSON blobs behind the dashboard.

Each collection is read whole and written whole: every change replaces the
blob in one transaction, so readers never see a half-applied update.

A missing blob is an empty collection (the default habit set for habits).
A blob that does not parse, or parses to the wrong shape, is treated the
same way and logged; it is overwritten on the next save.

Public API
----------
load_tasks / save_tasks                 productivity_tasks
load_books / save_books                 productivity_books
load_goals / save_goals                 productivity_planner
load_history / save_history             productivity_history
load_habits / save_habits               productivity_habits
load_achievements / save_achievements   productivity_achievements
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Mapping

from sqlalchemy.orm import Session

from app.models.collection import StoredCollection
from app.services import achievements as achievements_service
from app.services import books as books_service
from app.services import habits as habits_service
from app.services import tasks as tasks_service
from app.services.goals import GoalStore
from app.services.history import DayRecord, dump_history, normalize_history

logger = logging.getLogger(__name__)

TASKS = "productivity_tasks"
BOOKS = "productivity_books"
PLANNER = "productivity_planner"
HISTORY = "productivity_history"
HABITS = "productivity_habits"
ACHIEVEMENTS = "productivity_achievements"

COLLECTION_NAMES = (TASKS, BOOKS, PLANNER, HISTORY, HABITS, ACHIEVEMENTS)


# ---------------------------------------------------------------------------
# Raw blobs
# ---------------------------------------------------------------------------

def load_blob(db: Session, name: str, expected: type, default: Callable[[], Any]) -> Any:
    row = db.get(StoredCollection, name)
    if row is None:
        return default()
    try:
        value = json.loads(row.payload)
    except ValueError:
        logger.warning("Collection %s is not valid JSON; starting from empty", name)
        return default()
    if not isinstance(value, expected):
        logger.warning(
            "Collection %s holds %s, expected %s; starting from empty",
            name, type(value).__name__, expected.__name__,
        )
        return default()
    return value


def save_blob(db: Session, name: str, value: Any) -> None:
    payload = json.dumps(value, ensure_ascii=False)
    row = db.get(StoredCollection, name)
    if row is None:
        db.add(StoredCollection(name=name, payload=payload))
    else:
        row.payload = payload
    db.commit()


# ---------------------------------------------------------------------------
# Typed collections
# ---------------------------------------------------------------------------

def load_tasks(db: Session) -> list[tasks_service.Task]:
    return tasks_service.load_tasks(load_blob(db, TASKS, list, list))


def save_tasks(db: Session, tasks: list[tasks_service.Task]) -> None:
    save_blob(db, TASKS, [t.to_dict() for t in tasks])


def load_books(db: Session) -> list[books_service.Book]:
    return books_service.load_books(load_blob(db, BOOKS, list, list))


def save_books(db: Session, books: list[books_service.Book]) -> None:
    save_blob(db, BOOKS, [b.to_dict() for b in books])


def load_goals(db: Session) -> GoalStore:
    return GoalStore.from_dict(load_blob(db, PLANNER, dict, dict))


def save_goals(db: Session, goals: GoalStore) -> None:
    save_blob(db, PLANNER, goals.to_dict())


def load_history(db: Session) -> dict[str, DayRecord]:
    return normalize_history(load_blob(db, HISTORY, dict, dict))


def save_history(db: Session, history: Mapping[str, DayRecord]) -> None:
    save_blob(db, HISTORY, dump_history(history))


def load_habits(db: Session) -> list[habits_service.Habit]:
    raw = load_blob(db, HABITS, list, lambda: None)
    if raw is None:
        return habits_service.default_habits()
    return habits_service.load_habits(raw)


def save_habits(db: Session, habits: list[habits_service.Habit]) -> None:
    save_blob(db, HABITS, [h.to_dict() for h in habits])


def load_achievements(db: Session) -> list[achievements_service.Achievement]:
    return achievements_service.load_achievements(load_blob(db, ACHIEVEMENTS, list, list))


def save_achievements(db: Session, items: list[achievements_service.Achievement]) -> None:
    save_blob(db, ACHIEVEMENTS, [a.to_dict() for a in items])
