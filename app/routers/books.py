"""
Library router.

GET    /books                  - books with progress
POST   /books                  - add a book (blank title / bad page count ignored)
PATCH  /books/{id}/progress    - set the current page (clamped)
DELETE /books/{id}
POST   /books/{id}/reward      - movie reward, fetched once at >= 80 %
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.schemas.books import (
    BookCreateRequest,
    BookListResponse,
    BookOut,
    ProgressRequest,
    RewardResponse,
)
from app.schemas.common import ErrorResponse
from app.services import storage
from app.services.books import (
    Book,
    add_book,
    claim_reward,
    remove_book,
    update_progress,
)
from app.services.reward import RewardClient, get_reward_client

router = APIRouter(prefix="/books", tags=["books"])


def _book_out(b: Book) -> BookOut:
    return BookOut(
        id=b.id,
        title=b.title,
        author=b.author,
        total_pages=b.total_pages,
        current_page=b.current_page,
        progress=b.progress,
        is_finished=b.is_finished,
        is_reward_unlocked=b.is_reward_unlocked,
        reward_recommendation=b.reward_recommendation,
    )


def _list(books: list[Book]) -> BookListResponse:
    return BookListResponse(books=[_book_out(b) for b in books])


@router.get("", response_model=BookListResponse, summary="All books")
def list_books(db: Session = Depends(get_db)):
    return _list(storage.load_books(db))


@router.post(
    "",
    response_model=BookListResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a book",
)
def create_book(payload: BookCreateRequest, db: Session = Depends(get_db)):
    books = storage.load_books(db)
    updated = add_book(books, payload.title, payload.author, payload.total_pages)
    if len(updated) != len(books):
        storage.save_books(db, updated)
    return _list(updated)


@router.patch(
    "/{book_id}/progress",
    response_model=BookListResponse,
    summary="Update reading progress",
    responses={404: {"model": ErrorResponse}},
)
def set_progress(book_id: str, payload: ProgressRequest, db: Session = Depends(get_db)):
    updated = update_progress(storage.load_books(db), book_id, payload.current_page)
    storage.save_books(db, updated)
    return _list(updated)


@router.delete(
    "/{book_id}",
    response_model=BookListResponse,
    summary="Delete a book",
    responses={404: {"model": ErrorResponse}},
)
def delete_book(book_id: str, db: Session = Depends(get_db)):
    updated = remove_book(storage.load_books(db), book_id)
    storage.save_books(db, updated)
    return _list(updated)


@router.post(
    "/{book_id}/reward",
    response_model=RewardResponse,
    summary="Claim the movie reward for a finished book",
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse, "description": "Book is below 80 % progress."},
    },
)
async def reward(
    book_id: str,
    db: Session = Depends(get_db),
    client: RewardClient = Depends(get_reward_client),
):
    """
    Return the stored recommendation if there is one. Otherwise ask the
    text-generation service; a real recommendation is stored for good,
    fallback text is returned without being stored.
    """
    books = await run_in_threadpool(storage.load_books, db)
    updated, book = await claim_reward(books, book_id, client)
    if updated != books:
        await run_in_threadpool(storage.save_books, db, updated)
    return RewardResponse(book_id=book.id, recommendation=book.reward_recommendation)
