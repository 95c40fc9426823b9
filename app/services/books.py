"""
Library - reading progress per book and the movie reward unlocked at 80 %.

A successful recommendation is stored on the book and returned as-is
forever. Fallback text from a failed call is never stored.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Optional, Union

from app.core.errors import NotFoundError, RewardLockedError
from app.services.reward import FALLBACK_MESSAGES, RewardClient

logger = logging.getLogger(__name__)

REWARD_THRESHOLD = 80


@dataclass(frozen=True)
class Book:
    id: str
    title: str
    author: str
    total_pages: int
    current_page: int = 0
    is_reward_unlocked: bool = False
    reward_recommendation: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "totalPages": self.total_pages,
            "currentPage": self.current_page,
            "isRewardUnlocked": self.is_reward_unlocked,
        }
        if self.reward_recommendation is not None:
            payload["rewardRecommendation"] = self.reward_recommendation
        return payload

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["Book"]:
        try:
            return cls(
                id=str(raw["id"]),
                title=str(raw["title"]),
                author=str(raw.get("author", "")),
                total_pages=int(raw["totalPages"]),
                current_page=int(raw.get("currentPage", 0)),
                is_reward_unlocked=bool(raw.get("isRewardUnlocked", False)),
                reward_recommendation=raw.get("rewardRecommendation"),
            )
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.warning("Skipping unreadable book: %r", raw)
            return None

    @property
    def progress(self) -> int:
        """Percent read, rounded half-up."""
        if self.total_pages <= 0:
            return 0
        ratio = Decimal(self.current_page) * 100 / Decimal(self.total_pages)
        return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @property
    def is_finished(self) -> bool:
        return self.progress >= REWARD_THRESHOLD


def load_books(raw: Iterable[Any]) -> list[Book]:
    return [b for b in (Book.from_dict(item) for item in raw) if b is not None]


def _parse_pages(raw: Union[int, str, None]) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        pages = int(str(raw).strip())
    except ValueError:
        return None
    return pages if pages > 0 else None


def find_book(books: list[Book], book_id: str) -> Book:
    for book in books:
        if book.id == book_id:
            return book
    raise NotFoundError("Book", book_id)


def _replace_book(books: list[Book], book: Book) -> list[Book]:
    return [book if b.id == book.id else b for b in books]


def add_book(
    books: list[Book], title: str, author: str, total_pages: Union[int, str, None]
) -> list[Book]:
    """Append a book. A blank title or an invalid page count is ignored."""
    pages = _parse_pages(total_pages)
    if not title.strip() or pages is None:
        return list(books)
    return [*books, Book(id=str(uuid.uuid4()), title=title, author=author, total_pages=pages)]


def update_progress(books: list[Book], book_id: str, current_page: int) -> list[Book]:
    book = find_book(books, book_id)
    clamped = min(max(0, current_page), book.total_pages)
    return _replace_book(books, replace(book, current_page=clamped))


def remove_book(books: list[Book], book_id: str) -> list[Book]:
    find_book(books, book_id)
    return [b for b in books if b.id != book_id]


async def claim_reward(
    books: list[Book], book_id: str, client: RewardClient
) -> tuple[list[Book], Book]:
    """
    Return the book's reward, fetching it only if none is stored yet.
    A fallback message is handed back but not stored, so the next claim
    asks the service again. The returned list is unchanged unless a
    recommendation was stored.
    """
    book = find_book(books, book_id)
    if book.reward_recommendation is not None:
        return list(books), book
    if not book.is_finished:
        raise RewardLockedError(book.id, book.progress, REWARD_THRESHOLD)

    recommendation = await client.recommend(book.title, book.author)
    if recommendation in FALLBACK_MESSAGES:
        logger.warning("No reward for book %s yet: %s", book.id, recommendation)
        return list(books), replace(book, reward_recommendation=recommendation)
    unlocked = replace(book, is_reward_unlocked=True, reward_recommendation=recommendation)
    logger.info("Reward unlocked for book %s", book.id)
    return _replace_book(books, unlocked), unlocked
