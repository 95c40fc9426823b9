"""
Consistency tracker - habits with a done / missed / empty mark per day.

Clicking a day cycles done -> missed -> empty -> done; the quick actions set
an explicit status instead.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from typing import Any, Iterable, Literal, Optional

from app.core.errors import HabitLockedError, NotFoundError
from app.services.calendar_codec import PLANNER_YEAR

logger = logging.getLogger(__name__)

HabitStatus = Literal["done", "missed"]

_STATUSES = ("done", "missed")
# habits whose title is fixed
LOCKED_HABIT_IDS = frozenset({"gym"})


@dataclass(frozen=True)
class Habit:
    id: str
    title: str
    color: str
    history: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "history": dict(self.history), "color": self.color}

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["Habit"]:
        try:
            history = {
                str(day): status
                for day, status in (raw.get("history") or {}).items()
                if status in _STATUSES
            }
            return cls(id=str(raw["id"]), title=str(raw["title"]), color=str(raw.get("color", "violet")), history=history)
        except (KeyError, TypeError, AttributeError):
            logger.warning("Skipping unreadable habit: %r", raw)
            return None

    @property
    def done_count(self) -> int:
        return sum(1 for s in self.history.values() if s == "done")

    @property
    def missed_count(self) -> int:
        return sum(1 for s in self.history.values() if s == "missed")


def default_habits() -> list[Habit]:
    return [
        Habit(id="gym", title="Gym / Physical", color="rose"),
        Habit(id="h2", title="Skill Mastery", color="cyan"),
        Habit(id="h3", title="Project X", color="violet"),
    ]


def load_habits(raw: Iterable[Any]) -> list[Habit]:
    return [h for h in (Habit.from_dict(item) for item in raw) if h is not None]


def year_days() -> list[str]:
    """The 365 ISO dates of the planner year, in order."""
    start = date(PLANNER_YEAR, 1, 1)
    return [(start + timedelta(days=i)).isoformat() for i in range(365)]


def next_status(current: Optional[str]) -> Optional[str]:
    if current == "done":
        return "missed"
    if current == "missed":
        return None
    return "done"


def _index_of(habits: list[Habit], habit_id: str) -> int:
    for idx, habit in enumerate(habits):
        if habit.id == habit_id:
            return idx
    raise NotFoundError("Habit", habit_id)


def toggle_day(
    habits: list[Habit],
    habit_id: str,
    day: date,
    status: Optional[HabitStatus] = None,
) -> list[Habit]:
    idx = _index_of(habits, habit_id)
    habit = habits[idx]
    key = day.isoformat()
    new_status = status if status is not None else next_status(habit.history.get(key))

    history = dict(habit.history)
    if new_status is None:
        history.pop(key, None)
    else:
        history[key] = new_status

    updated = list(habits)
    updated[idx] = replace(habit, history=history)
    return updated


def rename_habit(habits: list[Habit], habit_id: str, title: str) -> list[Habit]:
    idx = _index_of(habits, habit_id)
    if habit_id in LOCKED_HABIT_IDS:
        raise HabitLockedError(habit_id)
    if not title.strip():
        return list(habits)
    updated = list(habits)
    updated[idx] = replace(habits[idx], title=title.strip())
    return updated
