"""
Custom exception hierarchy for the dashboard API.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.

Silently rejected input (blank goal text, non-positive weights, ...) is
NOT an error: those operations are no-ops and never raise.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from app.schemas.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class DashboardException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidPeriodError(DashboardException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_PERIOD"

    def __init__(self, message: str, **details: Any):
        super().__init__(message=message, details=details)


class UnresolvableDayError(DashboardException):
    """A (month, week, day slot) triple with no calendar date behind it."""
    http_status = status.HTTP_409_CONFLICT
    code = "DAY_NOT_IN_CALENDAR"

    def __init__(self, month: int, week: int, day_index: int):
        super().__init__(
            message=f"Week {week} of month {month} has no day at slot {day_index}.",
            details={"month": month, "week": week, "day_index": day_index},
        )


class InvalidTransitionError(DashboardException):
    http_status = status.HTTP_409_CONFLICT
    code = "INVALID_TRANSITION"

    def __init__(self, message: str, level: str):
        super().__init__(message=message, details={"level": level})


class NotFoundError(DashboardException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"

    def __init__(self, kind: str, item_id: str):
        super().__init__(
            message=f"{kind} {item_id!r} does not exist.",
            details={"kind": kind, "id": item_id},
        )


class HabitLockedError(DashboardException):
    http_status = status.HTTP_409_CONFLICT
    code = "HABIT_LOCKED"

    def __init__(self, habit_id: str):
        super().__init__(
            message=f"Habit {habit_id!r} cannot be renamed.",
            details={"id": habit_id},
        )


class RewardLockedError(DashboardException):
    http_status = status.HTTP_409_CONFLICT
    code = "REWARD_LOCKED"

    def __init__(self, book_id: str, progress: int, threshold: int):
        super().__init__(
            message=f"Reach {threshold}% to unlock the reward (currently {progress}%).",
            details={"id": book_id, "progress": progress, "threshold": threshold},
        )


class NatureNoteRequiredError(DashboardException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "NATURE_NOTE_REQUIRED"

    def __init__(self, day: date):
        super().__init__(
            message=f"A nature/break day needs a note explaining it ({day}).",
            details={"day": str(day)},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def dashboard_exception_handler(request: Request, exc: DashboardException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 with one ErrorDetail per rejected field."""
    field_errors = [
        ErrorDetail(
            field=".".join(str(loc) for loc in error["loc"] if loc != "body"),
            message=error["msg"],
            type=error["type"],
        ).model_dump()
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(
            code="VALIDATION_ERROR",
            message="Request validation failed.",
            details={"errors": field_errors},
        ).model_dump(),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
