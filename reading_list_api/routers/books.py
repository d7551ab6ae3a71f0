"""
Books Router

CRUD endpoints for the book catalog.

Demonstrates:
- All CRUD operations
- Filtering with query parameters
- ISBN uniqueness checks with the unique constraints as backstop
- Coalescing updates (omitted or null fields keep their value)
- Rate limiting
"""

import logging

from fastapi import APIRouter, Request
from sqlalchemy import select

from reading_list_api.config import get_settings
from reading_list_api.database import commit_or_conflict
from reading_list_api.dependencies import BookFilters, DbSession, get_book_or_404
from reading_list_api.exceptions import ConflictError
from reading_list_api.models import Book
from reading_list_api.schemas import BookCreate, BookResponse, BookUpdate, ResourceId
from reading_list_api.services.book_search import apply_book_filters
from reading_list_api.services.rate_limiter import limiter

logger = logging.getLogger(__name__)
settings = get_settings()

# =============================================================================
# Router Configuration
# =============================================================================

router = APIRouter(
    prefix="/book",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
    },
)


# =============================================================================
# Helper Functions
# =============================================================================
def isbn_in_use(db: DbSession, column, value: str | None, exclude_id: int | None) -> bool:
    if value is None:
        return False
    stmt = select(Book.id).where(column == value)
    if exclude_id is not None:
        stmt = stmt.where(Book.id != exclude_id)
    return db.execute(stmt.limit(1)).first() is not None


def check_isbn_conflicts(
    db: DbSession,
    isbn13: str | None,
    isbn10: str | None,
    exclude_id: int | None = None,
) -> None:
    """
    Reject ISBNs that already belong to another book.

    Args:
        db: Database session
        isbn13: Normalized ISBN-13 being written, if any
        isbn10: Normalized ISBN-10 being written, if any
        exclude_id: Book being updated (it may keep its own ISBNs)

    Raises:
        ConflictError: 409 naming the ISBN(s) in use
    """
    isbn13_taken = isbn_in_use(db, Book.isbn13, isbn13, exclude_id)
    isbn10_taken = isbn_in_use(db, Book.isbn10, isbn10, exclude_id)

    if isbn13_taken and isbn10_taken:
        raise ConflictError("Book already exists")
    if isbn13_taken:
        raise ConflictError("ISBN-13 already in use")
    if isbn10_taken:
        raise ConflictError("ISBN-10 already in use")


# =============================================================================
# CRUD Endpoints
# =============================================================================

@router.get(
    "",
    response_model=list[BookResponse],
    summary="List books",
    description="List every book matching the optional filters, ordered by id.",
)
@limiter.limit(settings.rate_limit_default)
def list_books(
    request: Request,
    db: DbSession,
    filters: BookFilters,
) -> list[BookResponse]:
    """
    List books with optional filtering.

    Supported filters:
    - isbn13, isbn10, title, author, publisher, edition, genre, language,
      summaryContains: partial match, case-insensitive
    - publicationDateStart/publicationDateEnd: inclusive date range
    - pageCountMin/pageCountMax: inclusive page count range

    Examples:
        GET /book?title=moby
        GET /book?author=melville&pageCountMin=500
    """
    stmt = select(Book)

    if filters.has_filters:
        stmt = apply_book_filters(stmt, filters)

    books = db.execute(stmt.order_by(Book.id)).scalars().all()

    return [BookResponse.model_validate(book) for book in books]


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    summary="Get a book by ID",
    description="Retrieve detailed information about a specific book.",
)
@limiter.limit(settings.rate_limit_default)
def get_book(
    request: Request,
    book_id: int,
    db: DbSession,
) -> BookResponse:
    book = get_book_or_404(db, book_id)
    return BookResponse.model_validate(book)


@router.post(
    "",
    response_model=ResourceId,
    summary="Create a new book",
    description="Add a book to the catalog. At least one valid ISBN is required.",
    responses={409: {"description": "ISBN already in use"}},
)
@limiter.limit(settings.rate_limit_default)
def create_book(
    request: Request,
    book_data: BookCreate,
    db: DbSession,
) -> ResourceId:
    """
    Create a new book.

    Args:
        book_data: Validated book data from request body (ISBNs normalized)
        db: Database session

    Returns:
        Identifier of the created book

    Raises:
        ConflictError: 409 if either ISBN already belongs to a book
    """
    check_isbn_conflicts(db, book_data.isbn13, book_data.isbn10)

    book = Book(**book_data.model_dump())
    db.add(book)
    commit_or_conflict(db, "Book already exists")
    db.refresh(book)

    logger.info(f"Book created: {book.id}")

    return ResourceId(id=book.id)


@router.put(
    "/{book_id}",
    response_model=ResourceId,
    summary="Update a book",
    description="Update a book. Omitted or null fields keep their current value.",
    responses={409: {"description": "ISBN already in use"}},
)
@limiter.limit(settings.rate_limit_default)
def update_book(
    request: Request,
    book_id: int,
    book_data: BookUpdate,
    db: DbSession,
) -> ResourceId:
    """
    Update an existing book.

    Uses PUT with optional fields: only supplied, non-null fields are
    written. New ISBNs are validated and must not belong to another book.

    Raises:
        NotFoundError: 404 if book not found
        ConflictError: 409 if a supplied ISBN belongs to another book
    """
    book = get_book_or_404(db, book_id)

    update_data = book_data.model_dump(exclude_unset=True, exclude_none=True)

    check_isbn_conflicts(
        db,
        update_data.get("isbn13"),
        update_data.get("isbn10"),
        exclude_id=book.id,
    )

    for field, value in update_data.items():
        setattr(book, field, value)

    commit_or_conflict(db, "Book already exists")

    return ResourceId(id=book.id)


@router.delete(
    "/{book_id}",
    response_model=ResourceId,
    summary="Delete a book",
    description="Delete a book. It is also removed from every reading list.",
)
@limiter.limit(settings.rate_limit_default)
def delete_book(
    request: Request,
    book_id: int,
    db: DbSession,
) -> ResourceId:
    book = get_book_or_404(db, book_id)
    db.delete(book)
    db.commit()

    logger.info(f"Book deleted: {book_id}")

    return ResourceId(id=book_id)
