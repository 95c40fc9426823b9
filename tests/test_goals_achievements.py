"""
Unit tests for the goal store and the achievement log / locator.
"""
import pytest
from datetime import date

from app.core.errors import NotFoundError
from app.services.achievements import (
    Achievement,
    achievements_in_period,
    add_achievement,
    load_achievements,
    remove_achievement,
)
from app.services.calendar_codec import Level, Period
from app.services.goals import GoalStore

YEAR = Period(Level.year)
MARCH = Period(Level.month, month=3)


class TestGoalStore:
    def test_add_appends_in_order(self):
        store = GoalStore()
        store.add(MARCH, "Ship v1")
        store.add(MARCH, "Run 50km")
        assert [g.text for g in store.goals_for(MARCH)] == ["Ship v1", "Run 50km"]
        assert store.goals_for(YEAR) == []

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_blank_text_leaves_list_unchanged(self, text):
        store = GoalStore()
        store.add(MARCH, "keep")
        assert store.add(MARCH, text) is None
        assert len(store.goals_for(MARCH)) == 1

    def test_toggle_and_remove(self):
        store = GoalStore()
        goal = store.add(MARCH, "Read 3 books")
        assert store.toggle(MARCH, goal.id).completed is True
        assert store.toggle(MARCH, goal.id).completed is False
        assert store.remove(MARCH, goal.id) is True
        assert store.goals_for(MARCH) == []

    def test_text_kept_as_typed(self):
        store = GoalStore()
        goal = store.add(MARCH, "  Run 5k ")
        assert goal.text == "  Run 5k "
        assert store.goals_for(MARCH)[0].text == "  Run 5k "

    def test_unknown_id_is_noop(self):
        store = GoalStore()
        goal = store.add(MARCH, "x")
        assert store.toggle(MARCH, "missing") is None
        assert store.remove(MARCH, "missing") is False
        # the goal lives under March only
        assert store.toggle(YEAR, goal.id) is None
        assert store.goals_for(MARCH) == [goal]

    def test_round_trips_through_stored_form(self):
        store = GoalStore()
        store.add(Period(Level.week, month=3, week=2), "w")
        store.add(Period(Level.day, month=3, week=2, day_index=0), "d")
        restored = GoalStore.from_dict(store.to_dict())
        assert restored.keys() == ["2026-03-W2", "2026-03-W2-D1"]

    def test_orphaned_keys_survive(self):
        store = GoalStore.from_dict({"legacy-key": [{"id": "1", "text": "old", "completed": True}]})
        assert store.to_dict() == {"legacy-key": [{"id": "1", "text": "old", "completed": True}]}


def _ach(id_, day):
    return Achievement(id=id_, date=day, title=f"t{id_}", story="s")


class TestAchievementLocator:
    def test_march_15_visibility(self):
        items = [_ach("a", "2026-03-15")]
        included = [
            Period(Level.year),
            Period(Level.month, month=3),
            Period(Level.week, month=3, week=3),
            Period(Level.day, month=3, week=3, day_index=6),
        ]
        for p in included:
            assert achievements_in_period(items, p) == items, p.key

        for m in range(1, 13):
            if m != 3:
                assert achievements_in_period(items, Period(Level.month, month=m)) == []
        for w in (1, 2, 4, 5):
            assert achievements_in_period(items, Period(Level.week, month=3, week=w)) == []

    def test_same_day_all_returned_in_order(self):
        items = [_ach("b", "2026-03-15"), _ach("x", "2026-04-01"), _ach("a", "2026-03-15")]
        found = achievements_in_period(items, Period(Level.day, month=3, week=3, day_index=6))
        assert [a.id for a in found] == ["b", "a"]


class TestAchievementLog:
    def test_add_prepends(self):
        items = add_achievement([], date(2026, 1, 5), "First", "story")
        items = add_achievement(items, date(2026, 2, 5), "Second", "story")
        assert [a.title for a in items] == ["Second", "First"]
        assert items[0].date == "2026-02-05"

    @pytest.mark.parametrize("title,story", [("", "s"), ("t", "  "), (" ", "")])
    def test_blank_fields_block_creation(self, title, story):
        assert add_achievement([], date(2026, 1, 5), title, story) == []

    def test_remove(self):
        items = [_ach("a", "2026-01-01"), _ach("b", "2026-01-02")]
        assert [a.id for a in remove_achievement(items, "a")] == ["b"]
        with pytest.raises(NotFoundError):
            remove_achievement(items, "zzz")

    def test_load_skips_unreadable(self):
        items = load_achievements([{"id": "1", "date": "2026-01-01", "title": "t", "story": "s"}, "junk"])
        assert len(items) == 1
