"""
Planner navigation - the year -> month -> week -> day drill-down.

States
------
  Year                 initial
  Month(m)             from Year by choosing month index 0-11
  Week(m, w)           from Month by choosing week index 0-4
  Day(m, w, d)         from Week by choosing day slot 0-6 (must resolve to a date)

Back truncates one level; a breadcrumb jump truncates to any level already on
the path. Nothing here is persisted: a fresh navigator always starts at Year.

`build_view` renders one state from the stored collections: the period's
aggregate, its achievements and goals, the breadcrumb trail and, above day
level, a preview grid of the child periods.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import date
from typing import Mapping, Optional

from app.core.errors import InvalidTransitionError
from app.services.achievements import Achievement, achievements_in_period
from app.services.calendar_codec import (
    DAY_NAMES,
    DAYS_PER_WEEK,
    MONTH_NAMES,
    PLANNER_YEAR,
    WEEKS_PER_MONTH,
    Level,
    Period,
    resolve_date,
)
from app.services.goals import Goal, GoalStore
from app.services.history import DayRecord, aggregate


# ---------------------------------------------------------------------------
# View types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GridCell:
    index: int
    label: str
    selectable: bool
    summary: Optional[DayRecord] = None
    has_achievements: bool = False
    date: Optional[date] = None      # day slots only
    period_key: Optional[str] = None  # None for an unresolvable day slot


@dataclass(frozen=True)
class Breadcrumb:
    level: Level
    label: str
    period_key: str


@dataclass
class PlannerView:
    level: Level
    period_key: str
    title: str
    summary: Optional[DayRecord]
    achievements: list[Achievement]
    goals: list[Goal]
    breadcrumbs: list[Breadcrumb]
    grid: list[GridCell] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

def period_label(period: Period) -> str:
    if period.level is Level.year:
        return str(PLANNER_YEAR)
    if period.level is Level.month:
        return MONTH_NAMES[period.month - 1]
    if period.level is Level.week:
        return f"Week {period.week}"
    return DAY_NAMES[period.day_index]


def period_title(period: Period) -> str:
    if period.level is Level.year:
        return f"{PLANNER_YEAR} Master Plan"
    if period.level is Level.month:
        return f"{MONTH_NAMES[period.month - 1]} Objectives"
    if period.level is Level.week:
        return f"Week {period.week} Targets"
    return f"{period.date.isoformat()} Schedule"


def breadcrumbs(period: Period) -> list[Breadcrumb]:
    trail = []
    for level in list(Level)[: period.level.depth + 1]:
        node = period.truncate(level)
        trail.append(Breadcrumb(level=level, label=period_label(node), period_key=node.key))
    return trail


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------

class PlannerNavigator:
    """
    Shared by every request of one process; transitions hold `_lock` so a
    check and its state change happen together.
    """

    def __init__(self) -> None:
        self._period = Period(Level.year)
        self._lock = threading.Lock()

    @property
    def period(self) -> Period:
        return self._period

    @property
    def level(self) -> Level:
        return self._period.level

    def reset(self) -> Period:
        with self._lock:
            self._period = Period(Level.year)
            return self._period

    def drill_down(self, index: int) -> Period:
        """
        Enter the child at `index`. An empty day slot raises
        UnresolvableDayError and leaves the state untouched.
        """
        with self._lock:
            if self.level is Level.day:
                raise InvalidTransitionError("A day has nothing to drill into.", level=self.level.value)
            self._period = self._period.child(index)
            return self._period

    def go_back(self) -> Period:
        with self._lock:
            parent = self._period.parent
            if parent is None:
                raise InvalidTransitionError("Already at the year view.", level=self.level.value)
            self._period = parent
            return self._period

    def jump_to(self, level: Level) -> Period:
        """Breadcrumb jump: only to the current level or one above it on the path."""
        level = Level(level)
        with self._lock:
            if level.depth > self.level.depth:
                raise InvalidTransitionError(
                    f"Cannot jump forward from {self.level.value} to {level.value}.",
                    level=self.level.value,
                )
            self._period = self._period.truncate(level)
            return self._period


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _cell(
    index: int,
    label: str,
    child: Period,
    history: Mapping[str, DayRecord],
    achievements: list[Achievement],
) -> GridCell:
    return GridCell(
        index=index,
        label=label,
        selectable=True,
        summary=aggregate(history, child),
        has_achievements=bool(achievements_in_period(achievements, child)),
        date=child.date,
        period_key=child.key,
    )


def child_grid(
    period: Period,
    history: Mapping[str, DayRecord],
    achievements: list[Achievement],
) -> list[GridCell]:
    if period.level is Level.year:
        return [
            _cell(i, name, period.child(i), history, achievements)
            for i, name in enumerate(MONTH_NAMES)
        ]
    if period.level is Level.month:
        return [
            _cell(i, f"Week {i + 1}", period.child(i), history, achievements)
            for i in range(WEEKS_PER_MONTH)
        ]
    if period.level is Level.week:
        cells = []
        for i in range(DAYS_PER_WEEK):
            if resolve_date(period.month, period.week, i) is None:
                cells.append(GridCell(index=i, label=DAY_NAMES[i], selectable=False))
                continue
            cells.append(_cell(i, DAY_NAMES[i], period.child(i), history, achievements))
        return cells
    return []


def build_view(
    period: Period,
    history: Mapping[str, DayRecord],
    achievements: list[Achievement],
    goals: GoalStore,
) -> PlannerView:
    return PlannerView(
        level=period.level,
        period_key=period.key,
        title=period_title(period),
        summary=aggregate(history, period),
        achievements=achievements_in_period(achievements, period),
        goals=goals.goals_for(period),
        breadcrumbs=breadcrumbs(period),
        grid=child_grid(period, history, achievements),
    )

