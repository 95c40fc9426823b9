from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class HabitOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    color: str
    history: dict[str, Literal["done", "missed"]]
    done_count: int
    missed_count: int


class HabitListResponse(BaseModel):
    habits: list[HabitOut]


class HabitDayRequest(BaseModel):
    status: Optional[Literal["done", "missed"]] = Field(
        default=None,
        description="Set this status; omit to cycle done -> missed -> empty.",
    )


class HabitRenameRequest(BaseModel):
    title: str = Field(max_length=128)


class YearCalendarResponse(BaseModel):
    year: int
    days: list[str]
