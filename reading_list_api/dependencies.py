"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

WHY Dependency Injection?
=========================
1. Reusability: Write once, use in many routes
2. Testing: Easy to swap the database session in tests
3. Separation of Concerns: Routes focus on business logic
4. Lifecycle Management: FastAPI handles creation/cleanup

Dependencies defined here:
- DbSession: per-request database session
- BookFilters: the catalog filter query parameters
- TokenUser: user id from the identity token header (required)
- token_gate: router-level check, active only when REQUIRE_TOKEN is set
- get_xxx_or_404: look-ups shared by several routes
"""

from datetime import date
from typing import Annotated

from fastapi import Depends, Header, Query
from sqlalchemy.orm import Session

from reading_list_api.config import get_settings
from reading_list_api.database import get_db
from reading_list_api.exceptions import MissingTokenError, NotFoundError
from reading_list_api.models import Book, ReadingList, User
from reading_list_api.services.security import decode_access_token

settings = get_settings()

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def get_book(db: Session = Depends(get_db)):
#
# You can write:
#   def get_book(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Book Search Filters
# =============================================================================
class BookSearchParams:
    """
    Filter parameters for book list endpoints.

    Text filters are case-insensitive substring matches. Date and page
    count bounds are inclusive. An omitted filter does not restrict the
    result at all (rows with a NULL column are kept).

    All parameters are optional and can be combined.

    Usage:
        GET /book?title=moby&pageCountMin=300
        GET /readingList/1/books?author=melville&publicationDateEnd=1900-01-01
    """

    def __init__(
        self,
        isbn13: str | None = Query(
            default=None,
            max_length=20,
            description="Filter by ISBN-13 (partial match)",
        ),
        isbn10: str | None = Query(
            default=None,
            max_length=15,
            description="Filter by ISBN-10 (partial match)",
        ),
        title: str | None = Query(
            default=None,
            max_length=500,
            description="Filter by title (partial match, case-insensitive)",
            examples=["moby"],
        ),
        author: str | None = Query(
            default=None,
            max_length=255,
            description="Filter by author (partial match, case-insensitive)",
            examples=["melville"],
        ),
        publisher: str | None = Query(default=None, max_length=255),
        edition: str | None = Query(default=None, max_length=100),
        genre: str | None = Query(default=None, max_length=100),
        language: str | None = Query(default=None, max_length=50),
        summary_contains: str | None = Query(
            default=None,
            alias="summaryContains",
            description="Filter by a phrase in the summary (case-insensitive)",
        ),
        publication_date_start: date | None = Query(
            default=None,
            alias="publicationDateStart",
            description="Earliest publication date (inclusive)",
            examples=["1800-01-01"],
        ),
        publication_date_end: date | None = Query(
            default=None,
            alias="publicationDateEnd",
            description="Latest publication date (inclusive)",
            examples=["1900-12-31"],
        ),
        page_count_min: int | None = Query(
            default=None,
            ge=0,
            alias="pageCountMin",
            description="Minimum page count (inclusive)",
        ),
        page_count_max: int | None = Query(
            default=None,
            ge=0,
            alias="pageCountMax",
            description="Maximum page count (inclusive)",
        ),
    ) -> None:
        self.isbn13 = isbn13
        self.isbn10 = isbn10
        self.title = title
        self.author = author
        self.publisher = publisher
        self.edition = edition
        self.genre = genre
        self.language = language
        self.summary_contains = summary_contains
        self.publication_date_start = publication_date_start
        self.publication_date_end = publication_date_end
        self.page_count_min = page_count_min
        self.page_count_max = page_count_max

    @property
    def has_filters(self) -> bool:
        """Check if any filters are applied."""
        return any(value is not None for value in vars(self).values())


# Type alias for cleaner route signatures
BookFilters = Annotated[BookSearchParams, Depends()]


# =============================================================================
# Token Authorization
# =============================================================================
def get_token_user_id(
    token: str | None = Header(
        default=None,
        alias=settings.token_header,
        description="Identity token returned by /register or /login",
    ),
) -> int:
    """
    Resolve the caller's user id from the token header.

    Only verifies the token; the store is never touched.

    Raises:
        MissingTokenError: 403 if the header is absent
        InvalidTokenError: 401 if the token is malformed, forged or expired
    """
    if not token:
        raise MissingTokenError()
    return decode_access_token(token)


def token_gate(
    token: str | None = Header(default=None, alias=settings.token_header),
) -> None:
    """
    Router-level authorization gate.

    Attached to the resource routers in main.py. It enforces the token only
    when REQUIRE_TOKEN is set; otherwise the routes stay open.
    """
    if settings.require_token:
        get_token_user_id(token)


TokenUser = Annotated[int, Depends(get_token_user_id)]


# =============================================================================
# Shared Look-ups
# =============================================================================
def get_book_or_404(db: Session, book_id: int) -> Book:
    book = db.get(Book, book_id)
    if book is None:
        raise NotFoundError("Book not found")
    return book


def get_reading_list_or_404(db: Session, reading_list_id: int) -> ReadingList:
    reading_list = db.get(ReadingList, reading_list_id)
    if reading_list is None:
        raise NotFoundError("Reading List not found")
    return reading_list


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user
