"""
Unit tests for the planner calendar codec (pure functions, no DB).
"""
import pytest
from datetime import date

from app.core.errors import InvalidPeriodError, UnresolvableDayError
from app.services.calendar_codec import (
    Level,
    Period,
    date_in_period,
    days_in_month,
    locate_date,
    parse_period_key,
    period_key,
    resolve_date,
    week_day_range,
)


class TestResolveDate:
    # 2026-01-01 is a Thursday
    @pytest.mark.parametrize("month,week,slot,expected", [
        (1, 1, 3, date(2026, 1, 1)),    # Thursday
        (1, 1, 0, date(2026, 1, 5)),    # first Monday falls on day 5
        (1, 1, 6, date(2026, 1, 4)),    # Sunday
        (3, 3, 6, date(2026, 3, 15)),   # 2026-03-15 is a Sunday
        (6, 1, 0, date(2026, 6, 1)),    # June starts on a Monday
        (12, 5, 3, date(2026, 12, 31)),
    ])
    def test_known_dates(self, month, week, slot, expected):
        assert resolve_date(month, week, slot) == expected

    def test_week5_of_30_day_month_has_two_slots(self):
        # April 2026: days 29 (Wed) and 30 (Thu)
        valid = [s for s in range(7) if resolve_date(4, 5, s) is not None]
        assert len(valid) == 2
        assert {resolve_date(4, 5, s).day for s in valid} == {29, 30}

    def test_february_week5_is_empty(self):
        assert days_in_month(2) == 28
        assert len(week_day_range(2, 5)) == 0
        assert all(resolve_date(2, 5, s) is None for s in range(7))

    def test_full_weeks_resolve_every_slot(self):
        for month in range(1, 13):
            for week in range(1, 5):
                assert all(resolve_date(month, week, s) is not None for s in range(7))

    def test_slot_matches_real_weekday(self):
        for month in range(1, 13):
            for week in range(1, 6):
                for slot in range(7):
                    d = resolve_date(month, week, slot)
                    if d is not None:
                        assert d.weekday() == slot
                        assert d.day in week_day_range(month, week)

    def test_round_trip(self):
        for month in range(1, 13):
            for week in range(1, 6):
                for slot in range(7):
                    d = resolve_date(month, week, slot)
                    if d is not None:
                        assert locate_date(d) == (month, week, slot)

    @pytest.mark.parametrize("month,week,slot", [(0, 1, 0), (13, 1, 0), (1, 0, 0), (1, 6, 0), (1, 1, 7), (1, 1, -1)])
    def test_out_of_range_coordinates(self, month, week, slot):
        with pytest.raises(InvalidPeriodError):
            resolve_date(month, week, slot)

    def test_locate_rejects_other_years(self):
        with pytest.raises(InvalidPeriodError):
            locate_date(date(2025, 12, 31))


class TestPeriodKey:
    def test_shapes(self):
        assert period_key(Level.year) == "2026"
        assert period_key(Level.month, 3) == "2026-03"
        assert period_key(Level.week, 3, 2) == "2026-03-W2"
        assert period_key(Level.day, 3, 2, 0) == "2026-03-W2-D1"
        assert period_key(Level.day, 12, 5, 6) == "2026-12-W5-D7"

    def test_injective_across_the_year(self):
        keys = {period_key(Level.year)}
        for m in range(1, 13):
            keys.add(period_key(Level.month, m))
            for w in range(1, 6):
                keys.add(period_key(Level.week, m, w))
                for d in range(7):
                    keys.add(period_key(Level.day, m, w, d))
        assert len(keys) == 1 + 12 + 12 * 5 + 12 * 5 * 7

    def test_missing_coordinate_rejected(self):
        with pytest.raises(InvalidPeriodError):
            period_key(Level.week, 3)

    @pytest.mark.parametrize("key", ["2026", "2026-03", "2026-03-W2", "2026-03-W3-D7"])
    def test_parse_inverts_key(self, key):
        assert parse_period_key(key).key == key

    @pytest.mark.parametrize("key", ["2025", "2026-3", "2026-13", "2026-03-W6", "2026-03-W2-D0", "2026-03-W2-D8", "week"])
    def test_parse_rejects_foreign_keys(self, key):
        with pytest.raises(InvalidPeriodError):
            parse_period_key(key)

    def test_parse_unresolvable_day(self):
        with pytest.raises(UnresolvableDayError):
            parse_period_key("2026-02-W5-D1")


class TestPeriod:
    def test_day_period_needs_a_date(self):
        with pytest.raises(UnresolvableDayError):
            Period(Level.day, month=2, week=5, day_index=0)

    def test_extra_coordinates_rejected(self):
        with pytest.raises(InvalidPeriodError):
            Period(Level.year, month=3)

    def test_parent_and_truncate(self):
        day = Period(Level.day, month=3, week=3, day_index=6)
        assert day.date == date(2026, 3, 15)
        assert day.parent == Period(Level.week, month=3, week=3)
        assert day.truncate(Level.month) == Period(Level.month, month=3)
        assert Period(Level.year).parent is None

    def test_child(self):
        assert Period(Level.year).child(0) == Period(Level.month, month=1)
        assert Period(Level.month, month=4).child(4).key == "2026-04-W5"


class TestDateInPeriod:
    # Prefix matching relies on zero-padded YYYY-MM-DD strings.
    def test_march_15(self):
        iso = "2026-03-15"
        assert date_in_period(iso, Period(Level.year))
        assert date_in_period(iso, Period(Level.month, month=3))
        assert date_in_period(iso, Period(Level.week, month=3, week=3))
        assert date_in_period(iso, Period(Level.day, month=3, week=3, day_index=6))

    def test_outside(self):
        iso = "2026-03-15"
        assert not date_in_period(iso, Period(Level.month, month=4))
        assert not date_in_period(iso, Period(Level.week, month=3, week=2))
        assert not date_in_period(iso, Period(Level.week, month=3, week=4))
        assert not date_in_period("2025-03-15", Period(Level.year))

    def test_week_boundaries(self):
        week2 = Period(Level.week, month=1, week=2)
        assert not date_in_period("2026-01-07", week2)
        assert date_in_period("2026-01-08", week2)
        assert date_in_period("2026-01-14", week2)
        assert not date_in_period("2026-01-15", week2)
