"""
Planner schemas.

GET  /planner                 -> PlannerViewResponse
POST /planner/drill           -> DrillRequest -> PlannerViewResponse
POST /planner/jump            -> JumpRequest  -> PlannerViewResponse
POST /planner/goals           -> GoalCreateRequest -> GoalListResponse
"""
from typing import Optional
from pydantic import BaseModel, Field

from app.schemas.achievements import AchievementOut
from app.schemas.history import DayRecordOut
from app.services.calendar_codec import Level


class GoalOut(BaseModel):
    id: str
    text: str
    completed: bool


class GoalListResponse(BaseModel):
    period_key: str
    goals: list[GoalOut]


class GoalCreateRequest(BaseModel):
    text: str = Field(default="", max_length=1_000)


class DrillRequest(BaseModel):
    index: int = Field(
        ge=0,
        description="Child position: month 0-11, week 0-4, day slot 0-6 (Monday=0).",
    )


class JumpRequest(BaseModel):
    level: Level


class BreadcrumbOut(BaseModel):
    level: Level
    label: str
    period_key: str


class GridCellOut(BaseModel):
    index: int
    label: str
    selectable: bool = Field(description="False for day slots with no date in this week.")
    summary: Optional[DayRecordOut] = None
    has_achievements: bool = False
    date: Optional[str] = None
    period_key: Optional[str] = None


class PlannerViewResponse(BaseModel):
    level: Level
    period_key: str
    title: str
    summary: Optional[DayRecordOut] = None
    achievements: list[AchievementOut]
    goals: list[GoalOut]
    breadcrumbs: list[BreadcrumbOut]
    grid: list[GridCellOut]
