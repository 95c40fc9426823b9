"""
Goal store - ordered goal lists per planner period.

Keys are always `Period.key`; callers hand in a Period, never a raw string,
so a goal can only be filed under a key the codec produced. Keys read back
from storage are kept as-is even if no period maps to them any more.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from app.services.calendar_codec import Period

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Goal:
    id: str
    text: str
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "completed": self.completed}

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["Goal"]:
        try:
            return cls(id=str(raw["id"]), text=str(raw["text"]), completed=bool(raw.get("completed", False)))
        except (KeyError, TypeError, AttributeError):
            logger.warning("Skipping unreadable goal: %r", raw)
            return None


class GoalStore:
    def __init__(self, goals: Optional[Mapping[str, list[Goal]]] = None):
        self._goals: dict[str, list[Goal]] = {k: list(v) for k, v in (goals or {}).items()}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "GoalStore":
        goals: dict[str, list[Goal]] = {}
        for key, items in raw.items():
            if not isinstance(items, list):
                logger.warning("Skipping unreadable goal list under %r", key)
                continue
            goals[key] = [g for g in (Goal.from_dict(item) for item in items) if g is not None]
        return cls(goals)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {key: [g.to_dict() for g in goals] for key, goals in self._goals.items()}

    def keys(self) -> list[str]:
        return list(self._goals)

    def goals_for(self, period: Period) -> list[Goal]:
        return list(self._goals.get(period.key, []))

    def add(self, period: Period, text: str) -> Optional[Goal]:
        """Append a goal; whitespace-only text is ignored and returns None."""
        if not text.strip():
            return None
        goal = Goal(id=str(uuid.uuid4()), text=text)
        self._goals[period.key] = [*self._goals.get(period.key, []), goal]
        return goal

    def toggle(self, period: Period, goal_id: str) -> Optional[Goal]:
        goals = self._goals.get(period.key, [])
        for idx, goal in enumerate(goals):
            if goal.id == goal_id:
                flipped = replace(goal, completed=not goal.completed)
                self._goals[period.key] = [*goals[:idx], flipped, *goals[idx + 1:]]
                return flipped
        return None

    def remove(self, period: Period, goal_id: str) -> bool:
        goals = self._goals.get(period.key, [])
        remaining = [g for g in goals if g.id != goal_id]
        if len(remaining) == len(goals):
            return False
        self._goals[period.key] = remaining
        return True
