"""
Achievements log ("Hall of Victory") and the per-period achievement lookup.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Optional

from app.core.errors import NotFoundError
from app.services.calendar_codec import Period, date_in_period

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Achievement:
    id: str
    date: str      # ISO YYYY-MM-DD
    title: str
    story: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "date": self.date, "title": self.title, "story": self.story}

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["Achievement"]:
        try:
            return cls(
                id=str(raw["id"]),
                date=str(raw["date"]),
                title=str(raw["title"]),
                story=str(raw.get("story", "")),
            )
        except (KeyError, TypeError, AttributeError):
            logger.warning("Skipping unreadable achievement: %r", raw)
            return None


def load_achievements(raw: Iterable[Any]) -> list[Achievement]:
    return [a for a in (Achievement.from_dict(item) for item in raw) if a is not None]


def add_achievement(
    achievements: list[Achievement], day: date, title: str, story: str
) -> list[Achievement]:
    """Prepend a new achievement. Blank title or story leaves the list as is."""
    if not title.strip() or not story.strip():
        return list(achievements)
    item = Achievement(id=str(uuid.uuid4()), date=day.isoformat(), title=title, story=story)
    return [item, *achievements]


def remove_achievement(achievements: list[Achievement], achievement_id: str) -> list[Achievement]:
    remaining = [a for a in achievements if a.id != achievement_id]
    if len(remaining) == len(achievements):
        raise NotFoundError("Achievement", achievement_id)
    return remaining


def achievements_in_period(achievements: Iterable[Achievement], period: Period) -> list[Achievement]:
    """Achievements dated inside `period`, in list order."""
    return [a for a in achievements if date_in_period(a.date, period)]
