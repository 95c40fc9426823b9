"""
Library schemas.

POST /books                   -> BookCreateRequest -> BookListResponse
PATCH /books/{id}/progress    -> ProgressRequest   -> BookListResponse
POST /books/{id}/reward       -> RewardResponse
"""
from typing import Optional, Union
from pydantic import BaseModel, Field


class BookCreateRequest(BaseModel):
    title: str = Field(default="", max_length=256)
    author: str = Field(default="", max_length=256)
    total_pages: Union[int, str, None] = None


class ProgressRequest(BaseModel):
    current_page: int = Field(description="Clamped to 0..total_pages.")


class BookOut(BaseModel):
    id: str
    title: str
    author: str
    total_pages: int
    current_page: int
    progress: int = Field(description="Percent read, 0-100.")
    is_finished: bool = Field(description="True at 80 % or more; unlocks the reward.")
    is_reward_unlocked: bool
    reward_recommendation: Optional[str] = None


class BookListResponse(BaseModel):
    books: list[BookOut]


class RewardResponse(BaseModel):
    book_id: str
    recommendation: str
