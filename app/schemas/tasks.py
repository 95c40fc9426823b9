"""
Daily tracker schemas.

Weights arrive as entered (number or text). Anything that is not a positive
integer is dropped without an error, so the task list simply stays the same.
"""
from datetime import date
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class TaskCreateRequest(BaseModel):
    title: str = Field(default="", max_length=256)
    weight: Union[int, str, None] = Field(
        default=None,
        description="Percentage this task adds to the day's score when completed.",
        examples=[20],
    )


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    weight: int
    completed: bool


class TaskBoardResponse(BaseModel):
    tasks: list[TaskOut]
    total_score: int = Field(description="Sum of the weights of completed tasks.")
    max_possible_score: int = Field(description="Sum of all weights.")


class LogDayRequest(BaseModel):
    day: Optional[date] = Field(
        default=None,
        description="ISO date to log. Defaults to today (UTC).",
        examples=["2026-03-15"],
    )
    is_nature: bool = False
    note: Optional[str] = Field(default=None, max_length=5_000)
