"""
Tests for error handling: structured error responses, HTTP status codes,
and the custom exception classes.
"""
import pytest
from datetime import date

from app.core.errors import (
    HabitLockedError,
    InvalidPeriodError,
    InvalidTransitionError,
    NatureNoteRequiredError,
    NotFoundError,
    RewardLockedError,
    UnresolvableDayError,
)


# ---------------------------------------------------------------------------
# Unit tests on exception classes
# ---------------------------------------------------------------------------

class TestExceptionClasses:
    def test_unresolvable_day_error(self):
        err = UnresolvableDayError(month=2, week=5, day_index=0)
        assert err.http_status == 409
        assert err.code == "DAY_NOT_IN_CALENDAR"
        d = err.to_dict()
        assert d["details"] == {"month": 2, "week": 5, "day_index": 0}

    def test_invalid_period_error(self):
        err = InvalidPeriodError("Month must be 1-12.", month=13)
        assert err.http_status == 422
        assert err.code == "INVALID_PERIOD"
        assert err.details["month"] == 13

    def test_invalid_transition_error(self):
        err = InvalidTransitionError("Already at the year view.", level="year")
        assert err.http_status == 409
        assert err.to_dict()["details"]["level"] == "year"

    def test_not_found_error(self):
        err = NotFoundError("task", "abc")
        assert err.http_status == 404
        assert "abc" in err.message
        assert err.details == {"kind": "task", "id": "abc"}

    def test_habit_locked_error(self):
        err = HabitLockedError("gym")
        assert err.http_status == 409
        assert err.code == "HABIT_LOCKED"

    def test_reward_locked_error(self):
        err = RewardLockedError(book_id="b", progress=42, threshold=80)
        assert err.http_status == 409
        assert "80" in err.message and "42" in err.message

    def test_nature_note_required_error(self):
        err = NatureNoteRequiredError(day=date(2026, 3, 15))
        assert err.http_status == 422
        assert err.details["day"] == "2026-03-15"

    def test_to_dict_without_details(self):
        err = InvalidPeriodError("bad")
        d = err.to_dict()
        assert d == {"code": "INVALID_PERIOD", "message": "bad"}


# ---------------------------------------------------------------------------
# Integration tests on HTTP error responses
# ---------------------------------------------------------------------------

class TestValidationErrors:
    def test_missing_field(self, client):
        r = client.post("/achievements", json={"title": "t", "story": "s"})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        fields = [e["field"] for e in body["details"]["errors"]]
        assert any("date" in f for f in fields)

    def test_bad_date_in_path(self, client):
        r = client.put("/history/not-a-date", json={"score": 10})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_negative_drill_index(self, client):
        r = client.post("/planner/drill", json={"index": -1})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    @pytest.mark.parametrize("level", ["decade", "Year", ""])
    def test_unknown_jump_level(self, client, level):
        r = client.post("/planner/jump", json={"level": level})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_unknown_habit_status(self, client):
        r = client.post("/habits/h2/days/2026-02-01", json={"status": "skipped"})
        assert r.status_code == 422


class TestDomainErrors:
    def test_period_key_of_other_year(self, client):
        r = client.get("/planner/periods/2025-03")
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "INVALID_PERIOD"
        assert "message" in body

    def test_day_key_without_date(self, client):
        r = client.get("/planner/periods/2026-02-W5-D3")
        assert r.status_code == 409
        assert r.json()["details"]["week"] == 5

    def test_forward_jump_rejected(self, client):
        r = client.post("/planner/jump", json={"level": "day"})
        assert r.status_code == 409
        assert r.json()["code"] == "INVALID_TRANSITION"
