"""
Planner calendar codec - the 2026 period hierarchy.

Hierarchy
---------
  year   "2026"
  month  "2026-MM"            MM = 01..12
  week   "2026-MM-Wn"         n  = 1..5, days [(n-1)*7+1, min(n*7, days_in_month)]
  day    "2026-MM-Wn-Dd"      d  = 1 (Monday) .. 7 (Sunday)

Weeks are a fixed 7-day partition anchored to day-of-month 1, NOT ISO weeks.
A day slot (0 = Monday .. 6 = Sunday) resolves to the date in the week's range
that falls on that weekday; short months leave some slots without a date.

Period keys index stored goals. Changing how they are built orphans every
goal already saved, so `period_key` is the only place keys are made.

Public API
----------
resolve_date(month, week, day_index)     -> date | None
locate_date(day)                         -> (month, week, day_index)
period_key(level, month, week, day_index) -> str
parse_period_key(key)                    -> Period
date_in_period(iso_date, period)         -> bool
"""
from __future__ import annotations

import calendar
import enum
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from app.core.errors import InvalidPeriodError, UnresolvableDayError


PLANNER_YEAR = 2026
WEEKS_PER_MONTH = 5
DAYS_PER_WEEK = 7

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

_KEY_RE = re.compile(r"^(\d{4})(?:-(\d{2})(?:-W(\d)(?:-D(\d))?)?)?$")


class Level(str, enum.Enum):
    year = "year"
    month = "month"
    week = "week"
    day = "day"

    @property
    def depth(self) -> int:
        return _DEPTH[self]


_DEPTH = {Level.year: 0, Level.month: 1, Level.week: 2, Level.day: 3}


# ---------------------------------------------------------------------------
# Range checks
# ---------------------------------------------------------------------------

def _check_month(month: Optional[int]) -> int:
    if month is None or not 1 <= month <= 12:
        raise InvalidPeriodError(f"Month must be 1-12, got {month!r}.", month=month)
    return month


def _check_week(week: Optional[int]) -> int:
    if week is None or not 1 <= week <= WEEKS_PER_MONTH:
        raise InvalidPeriodError(
            f"Week must be 1-{WEEKS_PER_MONTH}, got {week!r}.", week=week
        )
    return week


def _check_day_index(day_index: Optional[int]) -> int:
    if day_index is None or not 0 <= day_index < DAYS_PER_WEEK:
        raise InvalidPeriodError(
            f"Day slot must be 0-{DAYS_PER_WEEK - 1}, got {day_index!r}.",
            day_index=day_index,
        )
    return day_index


# ---------------------------------------------------------------------------
# Date arithmetic
# ---------------------------------------------------------------------------

def days_in_month(month: int) -> int:
    return calendar.monthrange(PLANNER_YEAR, _check_month(month))[1]


def week_day_range(month: int, week: int) -> range:
    """Days of the month covered by a week; empty for week 5 of February."""
    start = (_check_week(week) - 1) * DAYS_PER_WEEK + 1
    end = min(start + DAYS_PER_WEEK - 1, days_in_month(month))
    return range(start, end + 1)


def resolve_date(month: int, week: int, day_index: int) -> Optional[date]:
    """Date of the given weekday slot inside (month, week), or None."""
    _check_day_index(day_index)
    for day in week_day_range(month, week):
        candidate = date(PLANNER_YEAR, month, day)
        # date.weekday() is already Monday=0 .. Sunday=6
        if candidate.weekday() == day_index:
            return candidate
    return None


def locate_date(day: date) -> tuple[int, int, int]:
    """Inverse of resolve_date: (month, week, day_index) for a 2026 date."""
    if day.year != PLANNER_YEAR:
        raise InvalidPeriodError(
            f"Only {PLANNER_YEAR} dates exist in the planner, got {day}.", day=str(day)
        )
    week = (day.day - 1) // DAYS_PER_WEEK + 1
    return day.month, week, day.weekday()


# ---------------------------------------------------------------------------
# Period keys
# ---------------------------------------------------------------------------

def period_key(
    level: Level,
    month: Optional[int] = None,
    week: Optional[int] = None,
    day_index: Optional[int] = None,
) -> str:
    """Canonical goal key for a period. Coordinates finer than `level` are ignored."""
    level = Level(level)
    key = str(PLANNER_YEAR)
    if level is Level.year:
        return key
    key += f"-{_check_month(month):02d}"
    if level is Level.month:
        return key
    key += f"-W{_check_week(week)}"
    if level is Level.week:
        return key
    return key + f"-D{_check_day_index(day_index) + 1}"


def parse_period_key(key: str) -> "Period":
    match = _KEY_RE.match(key.strip())
    if match is None or int(match.group(1)) != PLANNER_YEAR:
        raise InvalidPeriodError(f"Not a planner period key: {key!r}.", key=key)
    month, week, day = match.group(2), match.group(3), match.group(4)
    if month is None:
        return Period(Level.year)
    if week is None:
        return Period(Level.month, month=int(month))
    if day is None:
        return Period(Level.week, month=int(month), week=int(week))
    if not 1 <= int(day) <= DAYS_PER_WEEK:
        raise InvalidPeriodError(f"Not a planner period key: {key!r}.", key=key)
    return Period(Level.day, month=int(month), week=int(week), day_index=int(day) - 1)


# ---------------------------------------------------------------------------
# Period selector
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Period:
    """
    A validated position in the hierarchy. A day period always has a real date:
    constructing one for an empty slot raises UnresolvableDayError.
    """
    level: Level
    month: Optional[int] = None
    week: Optional[int] = None
    day_index: Optional[int] = None

    def __post_init__(self) -> None:
        level = Level(self.level)
        object.__setattr__(self, "level", level)
        coords = (self.month, self.week, self.day_index)
        # a coordinate is set exactly for the levels at or above this depth
        for depth, value in enumerate(coords, start=1):
            if depth > level.depth and value is not None:
                raise InvalidPeriodError(
                    f"A {level.value} period takes no coordinates below it.",
                    level=level.value,
                )
        if level.depth >= 1:
            _check_month(self.month)
        if level.depth >= 2:
            _check_week(self.week)
        if level is Level.day:
            _check_day_index(self.day_index)
            if resolve_date(self.month, self.week, self.day_index) is None:
                raise UnresolvableDayError(self.month, self.week, self.day_index)

    @property
    def key(self) -> str:
        return period_key(self.level, self.month, self.week, self.day_index)

    @property
    def date(self) -> Optional[date]:
        if self.level is not Level.day:
            return None
        return resolve_date(self.month, self.week, self.day_index)

    @property
    def parent(self) -> Optional["Period"]:
        if self.level is Level.year:
            return None
        return self.truncate(list(Level)[self.level.depth - 1])

    def truncate(self, level: Level) -> "Period":
        """The ancestor (or self) at `level`."""
        level = Level(level)
        if level.depth > self.level.depth:
            raise InvalidPeriodError(
                f"Cannot widen a {self.level.value} period to {level.value}.",
                level=level.value,
            )
        coords = [self.month, self.week, self.day_index]
        kept = coords[: level.depth] + [None] * (3 - level.depth)
        return Period(level, *kept)

    def child(self, index: int) -> "Period":
        """Child period by 0-based position: month 0-11, week 0-4, day slot 0-6."""
        if self.level is Level.year:
            return Period(Level.month, month=index + 1)
        if self.level is Level.month:
            return Period(Level.week, month=self.month, week=index + 1)
        if self.level is Level.week:
            return Period(Level.day, month=self.month, week=self.week, day_index=index)
        raise InvalidPeriodError("A day period has no children.", level=self.level.value)


def date_in_period(iso_date: str, period: Period) -> bool:
    """
    Whether an ISO date string falls inside `period`.

    Prefix matching stands in for a range query and is only correct because
    stored dates are fixed-width, zero-padded YYYY-MM-DD strings. If the date
    format ever changes this must become an explicit range comparison.
    """
    if period.level is Level.day:
        return iso_date == period.date.isoformat()
    prefix = f"{PLANNER_YEAR}-"
    if period.level is not Level.year:
        prefix += f"{period.month:02d}-"
    if not iso_date.startswith(prefix):
        return False
    if period.level is Level.week:
        try:
            day_of_month = int(iso_date[8:10])
        except ValueError:
            return False
        start = (period.week - 1) * DAYS_PER_WEEK + 1
        return start <= day_of_month < start + DAYS_PER_WEEK
    return True
