"""
Productivity history schemas.

GET /history            -> HistoryResponse
GET /history/summary    -> PeriodSummaryResponse
PUT /history/{day}      -> DayRecordRequest -> LoggedDayResponse
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class DayRecordOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    score: int = Field(description="Productivity score 0-100 (nature days count as 100 when averaged).")
    is_nature: bool = Field(description="True for a recovery / nature day, or a period made only of them.")
    note: Optional[str] = None


class DayRecordRequest(BaseModel):
    score: int = Field(ge=0, le=100)
    is_nature: bool = False
    note: Optional[str] = Field(
        default=None,
        max_length=5_000,
        description="Required (non-blank) when is_nature is true.",
    )


class LoggedDayResponse(BaseModel):
    day: str
    record: DayRecordOut


class HistoryResponse(BaseModel):
    days: dict[str, DayRecordOut] = Field(description="ISO date -> record, legacy entries normalized.")


class PeriodSummaryResponse(BaseModel):
    period_key: str
    summary: Optional[DayRecordOut] = Field(
        default=None,
        description="Null when no day inside the period has been logged.",
    )
