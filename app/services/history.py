"""
Productivity history - one DayRecord per ISO date, aggregated per planner period.

Stored form
-----------
    {"2026-03-15": {"score": 80, "isNature": false, "note": "..."},
     "2026-01-02": 55}                       # legacy: bare score

A bare number predates the nature flag and means {score: n, isNature: false}.
`normalize_history` converts it once, at the read boundary; everything below
it only sees DayRecord.

Aggregation rules (month / week / year)
---------------------------------------
  - a nature day contributes 100 to the average, any other day its score
  - score     = round-half-up(sum / count)
  - is_nature = True only when EVERY contributing day was a nature day
  - no contributing day -> None ("no data", distinct from an average of 0)
A day period returns its stored record verbatim.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Mapping, Optional

from app.core.errors import NatureNoteRequiredError
from app.services.calendar_codec import Level, Period, date_in_period

logger = logging.getLogger(__name__)

NATURE_DAY_SCORE = 100


@dataclass(frozen=True)
class DayRecord:
    score: int
    is_nature: bool = False
    note: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"score": self.score, "isNature": self.is_nature}
        if self.note:
            payload["note"] = self.note
        return payload


# ---------------------------------------------------------------------------
# Read boundary
# ---------------------------------------------------------------------------

def normalize_entry(raw: Any) -> Optional[DayRecord]:
    """Structured record for one stored value, or None if it is unreadable."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return DayRecord(score=int(raw))
    if isinstance(raw, Mapping) and isinstance(raw.get("score"), (int, float)):
        note = raw.get("note")
        return DayRecord(
            score=int(raw["score"]),
            is_nature=bool(raw.get("isNature", False)),
            note=note if isinstance(note, str) and note else None,
        )
    return None


def normalize_history(raw: Mapping[str, Any]) -> dict[str, DayRecord]:
    history: dict[str, DayRecord] = {}
    for day, value in raw.items():
        record = normalize_entry(value)
        if record is None:
            logger.warning("Skipping unreadable history entry for %s: %r", day, value)
            continue
        history[day] = record
    return history


def dump_history(history: Mapping[str, DayRecord]) -> dict[str, dict[str, Any]]:
    return {day: record.to_dict() for day, record in history.items()}


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def _round_half_up(total: int, count: int) -> int:
    return int((Decimal(total) / Decimal(count)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def aggregate(history: Mapping[str, DayRecord], period: Period) -> Optional[DayRecord]:
    """Representative record for a period, or None when it has no data."""
    if period.level is Level.day:
        return history.get(period.date.isoformat())

    total = 0
    count = 0
    nature_count = 0
    for day, record in history.items():
        if not date_in_period(day, period):
            continue
        if record.is_nature:
            total += NATURE_DAY_SCORE
            nature_count += 1
        else:
            total += record.score
        count += 1

    if count == 0:
        return None
    return DayRecord(score=_round_half_up(total, count), is_nature=nature_count == count)


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def save_day(
    history: Mapping[str, DayRecord],
    day: date,
    score: int,
    is_nature: bool = False,
    note: Optional[str] = None,
) -> dict[str, DayRecord]:
    """
    Return a new history with `day` set. A nature day must say why it was taken.
    """
    note = (note or "").strip() or None
    if is_nature and note is None:
        raise NatureNoteRequiredError(day)
    updated = dict(history)
    updated[day.isoformat()] = DayRecord(score=score, is_nature=is_nature, note=note)
    logger.info("Logged %s: score=%s nature=%s", day, score, is_nature)
    return updated
