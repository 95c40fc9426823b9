"""
Daily tracker - weighted tasks whose completed weights make the day's score.

All functions return a new list; the caller persists it whole.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Union

from app.core.errors import NotFoundError
from app.services.history import DayRecord, save_day

logger = logging.getLogger(__name__)

MAX_DAY_SCORE = 100


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    weight: int
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "weight": self.weight, "completed": self.completed}

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["Task"]:
        try:
            return cls(
                id=str(raw["id"]),
                title=str(raw["title"]),
                weight=int(raw["weight"]),
                completed=bool(raw.get("completed", False)),
            )
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.warning("Skipping unreadable task: %r", raw)
            return None


def load_tasks(raw: Iterable[Any]) -> list[Task]:
    return [t for t in (Task.from_dict(item) for item in raw) if t is not None]


def parse_weight(raw: Union[int, str, None]) -> Optional[int]:
    """Positive integer weight, or None for anything else."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        weight = int(str(raw).strip())
    except ValueError:
        return None
    return weight if weight > 0 else None


def _index_of(tasks: list[Task], task_id: str) -> int:
    for idx, task in enumerate(tasks):
        if task.id == task_id:
            return idx
    raise NotFoundError("Task", task_id)


def add_task(tasks: list[Task], title: str, weight: Union[int, str, None]) -> list[Task]:
    """Append a task. A blank title or an invalid weight leaves the list unchanged."""
    parsed = parse_weight(weight)
    if not title.strip() or parsed is None:
        return list(tasks)
    return [*tasks, Task(id=str(uuid.uuid4()), title=title, weight=parsed)]


def toggle_task(tasks: list[Task], task_id: str) -> list[Task]:
    idx = _index_of(tasks, task_id)
    updated = list(tasks)
    updated[idx] = replace(tasks[idx], completed=not tasks[idx].completed)
    return updated


def remove_task(tasks: list[Task], task_id: str) -> list[Task]:
    idx = _index_of(tasks, task_id)
    return tasks[:idx] + tasks[idx + 1:]


def reset_day(tasks: list[Task]) -> list[Task]:
    """Start a new day: every task back to not completed."""
    return [replace(t, completed=False) for t in tasks]


def total_score(tasks: Iterable[Task]) -> int:
    return sum(t.weight for t in tasks if t.completed)


def max_possible_score(tasks: Iterable[Task]) -> int:
    return sum(t.weight for t in tasks)


def log_day(
    tasks: list[Task],
    history: Mapping[str, DayRecord],
    day: date,
    is_nature: bool = False,
    note: Optional[str] = None,
) -> dict[str, DayRecord]:
    """Record today's task score into the history (capped at 100)."""
    score = min(total_score(tasks), MAX_DAY_SCORE)
    return save_day(history, day, score, is_nature=is_nature, note=note)
