import datetime

from pydantic import BaseModel, ConfigDict, Field


class AchievementCreateRequest(BaseModel):
    date: datetime.date
    title: str = Field(default="", max_length=256)
    story: str = Field(default="", max_length=20_000)


class AchievementOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    date: str
    title: str
    story: str


class AchievementListResponse(BaseModel):
    total: int
    items: list[AchievementOut]
