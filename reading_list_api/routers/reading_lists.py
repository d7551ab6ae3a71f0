"""
Reading Lists Router

Endpoints for reading lists and the books placed on them.

Endpoints:
- POST   /readingList                         - Create a list for a user
- GET    /readingList/statuses                - Reading status lookup
- GET    /readingList/{id}                    - Get a list
- PUT    /readingList/{id}                    - Rename a list
- DELETE /readingList/{id}                    - Delete a list and its entries
- GET    /readingList/{id}/books              - Books on a list (filterable)
- POST   /readingList/{id}/book               - Add a book with a status
- PUT    /readingList/{id}/book/{bookId}      - Change a book's status
- DELETE /readingList/{id}/book/{bookId}      - Remove a book from a list

Business Rules:
- A book appears at most once on a list
- The status must be one of the lookup values
- Optionally (UNIQUE_READING_LIST_TITLES) a user's list titles are unique
"""

import logging

from fastapi import APIRouter, Query, Request
from sqlalchemy import select

from reading_list_api.config import get_settings
from reading_list_api.database import commit_or_conflict
from reading_list_api.dependencies import (
    BookFilters,
    DbSession,
    get_book_or_404,
    get_reading_list_or_404,
    get_user_or_404,
)
from reading_list_api.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from reading_list_api.models import Book, BookStatus, ReadingList, ReadingListEntry
from reading_list_api.schemas import (
    BookResponse,
    BookStatusResponse,
    ReadingListBookAdd,
    ReadingListBookResponse,
    ReadingListBookStatusUpdate,
    ReadingListCreate,
    ReadingListResponse,
    ReadingListUpdate,
    ResourceId,
)
from reading_list_api.services.book_search import apply_book_filters
from reading_list_api.services.rate_limiter import limiter

logger = logging.getLogger(__name__)
settings = get_settings()

# =============================================================================
# Router Configuration
# =============================================================================

router = APIRouter(
    prefix="/readingList",
    tags=["Reading Lists"],
    responses={
        404: {"description": "Reading list, book or entry not found"},
    },
)


# =============================================================================
# Helper Functions
# =============================================================================
def ensure_valid_status(db: DbSession, status_id: int) -> None:
    if db.get(BookStatus, status_id) is None:
        raise InvalidArgumentError("Invalid book status")


def ensure_title_available(
    db: DbSession,
    user_id: int,
    title: str,
    exclude_id: int | None = None,
) -> None:
    """Reject a duplicate list title for the same user, when that policy is on."""
    if not settings.unique_reading_list_titles:
        return

    stmt = select(ReadingList.id).where(
        ReadingList.user_id == user_id,
        ReadingList.title == title,
    )
    if exclude_id is not None:
        stmt = stmt.where(ReadingList.id != exclude_id)

    if db.execute(stmt.limit(1)).first() is not None:
        raise ConflictError("Reading list with this title already exists")


def get_entry(db: DbSession, reading_list_id: int, book_id: int) -> ReadingListEntry | None:
    stmt = select(ReadingListEntry).where(
        ReadingListEntry.reading_list_id == reading_list_id,
        ReadingListEntry.book_id == book_id,
    )
    return db.execute(stmt).scalar_one_or_none()


# =============================================================================
# Reading List Endpoints
# =============================================================================

@router.post(
    "",
    response_model=ResourceId,
    summary="Create a reading list",
    responses={409: {"description": "Duplicate title (when enforced)"}},
)
@limiter.limit(settings.rate_limit_default)
def create_reading_list(
    request: Request,
    list_data: ReadingListCreate,
    db: DbSession,
) -> ResourceId:
    """
    Create a reading list owned by an existing user.

    Raises:
        NotFoundError: 404 if the user does not exist
        ConflictError: 409 if the user already has a list with this title
            and unique titles are enforced
    """
    get_user_or_404(db, list_data.user_id)
    ensure_title_available(db, list_data.user_id, list_data.title)

    reading_list = ReadingList(user_id=list_data.user_id, title=list_data.title)
    db.add(reading_list)
    db.commit()
    db.refresh(reading_list)

    logger.info(f"Reading list created: {reading_list.id} for user {reading_list.user_id}")

    return ResourceId(id=reading_list.id)


@router.get(
    "/statuses",
    response_model=list[BookStatusResponse],
    summary="List reading statuses",
    description="The statuses a book on a reading list can have.",
)
@limiter.limit(settings.rate_limit_default)
def list_statuses(
    request: Request,
    db: DbSession,
) -> list[BookStatusResponse]:
    statuses = db.execute(select(BookStatus).order_by(BookStatus.id)).scalars().all()
    return [BookStatusResponse.model_validate(s) for s in statuses]


@router.get(
    "/{reading_list_id}",
    response_model=ReadingListResponse,
    summary="Get a reading list",
)
@limiter.limit(settings.rate_limit_default)
def get_reading_list(
    request: Request,
    reading_list_id: int,
    db: DbSession,
) -> ReadingListResponse:
    reading_list = get_reading_list_or_404(db, reading_list_id)
    return ReadingListResponse.model_validate(reading_list)


@router.put(
    "/{reading_list_id}",
    response_model=ResourceId,
    summary="Rename a reading list",
)
@limiter.limit(settings.rate_limit_default)
def update_reading_list(
    request: Request,
    reading_list_id: int,
    list_data: ReadingListUpdate,
    db: DbSession,
) -> ResourceId:
    reading_list = get_reading_list_or_404(db, reading_list_id)
    ensure_title_available(
        db, reading_list.user_id, list_data.title, exclude_id=reading_list.id
    )

    reading_list.title = list_data.title
    db.commit()

    return ResourceId(id=reading_list.id)


@router.delete(
    "/{reading_list_id}",
    response_model=ResourceId,
    summary="Delete a reading list",
    description="Delete a reading list together with its entries. Books are kept.",
)
@limiter.limit(settings.rate_limit_default)
def delete_reading_list(
    request: Request,
    reading_list_id: int,
    db: DbSession,
) -> ResourceId:
    reading_list = get_reading_list_or_404(db, reading_list_id)
    db.delete(reading_list)
    db.commit()

    logger.info(f"Reading list deleted: {reading_list_id}")

    return ResourceId(id=reading_list_id)


# =============================================================================
# Reading List Entry Endpoints
# =============================================================================

@router.get(
    "/{reading_list_id}/books",
    response_model=list[ReadingListBookResponse],
    summary="List books on a reading list",
    description="Supports the same filters as GET /book, plus statusId.",
)
@limiter.limit(settings.rate_limit_default)
def list_reading_list_books(
    request: Request,
    reading_list_id: int,
    db: DbSession,
    filters: BookFilters,
    status_id: int | None = Query(
        default=None,
        alias="statusId",
        ge=1,
        description="Filter by reading status id",
    ),
) -> list[ReadingListBookResponse]:
    """
    List the books on a reading list, each with its entry id and status.

    Raises:
        NotFoundError: 404 if the reading list does not exist
    """
    get_reading_list_or_404(db, reading_list_id)

    stmt = (
        select(Book, ReadingListEntry)
        .join(ReadingListEntry, ReadingListEntry.book_id == Book.id)
        .where(ReadingListEntry.reading_list_id == reading_list_id)
    )

    if filters.has_filters:
        stmt = apply_book_filters(stmt, filters)
    if status_id is not None:
        stmt = stmt.where(ReadingListEntry.status_id == status_id)

    rows = db.execute(stmt.order_by(Book.id)).all()

    return [
        ReadingListBookResponse(
            **BookResponse.model_validate(book).model_dump(),
            entry_id=entry.id,
            status_id=entry.status_id,
        )
        for book, entry in rows
    ]


@router.post(
    "/{reading_list_id}/book",
    response_model=ResourceId,
    summary="Add a book to a reading list",
    responses={
        400: {"description": "Invalid book status"},
        409: {"description": "Book already in reading list"},
    },
)
@limiter.limit(settings.rate_limit_default)
def add_book_to_reading_list(
    request: Request,
    reading_list_id: int,
    entry_data: ReadingListBookAdd,
    db: DbSession,
) -> ResourceId:
    """
    Place a book on a reading list with an initial status.

    Checks, in order: list exists, book exists, book not already on the
    list, status valid.

    Returns:
        Identifier of the new reading list entry
    """
    get_reading_list_or_404(db, reading_list_id)
    get_book_or_404(db, entry_data.book_id)

    if get_entry(db, reading_list_id, entry_data.book_id) is not None:
        raise ConflictError("Book already in reading list")

    ensure_valid_status(db, entry_data.status_id)

    entry = ReadingListEntry(
        reading_list_id=reading_list_id,
        book_id=entry_data.book_id,
        status_id=entry_data.status_id,
    )
    db.add(entry)
    commit_or_conflict(db, "Book already in reading list")
    db.refresh(entry)

    return ResourceId(id=entry.id)


@router.put(
    "/{reading_list_id}/book/{book_id}",
    response_model=ResourceId,
    summary="Change the status of a book on a reading list",
    responses={400: {"description": "Invalid book status"}},
)
@limiter.limit(settings.rate_limit_default)
def update_book_status(
    request: Request,
    reading_list_id: int,
    book_id: int,
    status_data: ReadingListBookStatusUpdate,
    db: DbSession,
) -> ResourceId:
    """
    Change the reading status of a book on a list.

    Checks, in order: list exists, book exists, status valid, book is on
    the list.

    Returns:
        Identifier of the updated reading list entry
    """
    get_reading_list_or_404(db, reading_list_id)
    get_book_or_404(db, book_id)
    ensure_valid_status(db, status_data.status_id)

    entry = get_entry(db, reading_list_id, book_id)
    if entry is None:
        raise NotFoundError("Book not found in reading list")

    entry.status_id = status_data.status_id
    db.commit()

    return ResourceId(id=entry.id)


@router.delete(
    "/{reading_list_id}/book/{book_id}",
    response_model=ResourceId,
    summary="Remove a book from a reading list",
)
@limiter.limit(settings.rate_limit_default)
def remove_book_from_reading_list(
    request: Request,
    reading_list_id: int,
    book_id: int,
    db: DbSession,
) -> ResourceId:
    """
    Remove a book from a reading list. The book stays in the catalog.

    Returns:
        Identifier of the removed reading list entry
    """
    get_reading_list_or_404(db, reading_list_id)

    entry = get_entry(db, reading_list_id, book_id)
    if entry is None:
        raise NotFoundError("Book not found in reading list")

    entry_id = entry.id
    db.delete(entry)
    db.commit()

    return ResourceId(id=entry_id)
