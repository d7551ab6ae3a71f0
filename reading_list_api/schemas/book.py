"""
Book Pydantic Schemas

Handles:
- ISBN-13 / ISBN-10 check-digit validation and normalization
- The "at least one ISBN" rule on create
- All-optional update schema for coalescing updates
- Book records as returned by the catalog and by reading lists
"""

from datetime import date, datetime

from pydantic import ConfigDict, Field, field_validator, model_validator

from reading_list_api.schemas.common import CamelModel, strip_optional, strip_required
from reading_list_api.utils.isbn import clean_isbn10, clean_isbn13


class BookBase(CamelModel):
    """
    Optional descriptive fields shared by create and update.

    Contains validation for:
    - ISBN check digits (hyphens and spaces are stripped for storage)
    - Page count (must not be negative)
    """

    isbn13: str | None = Field(
        default=None,
        max_length=20,
        description="ISBN-13, hyphens allowed",
        examples=["978-0-14-243724-7"],
    )

    isbn10: str | None = Field(
        default=None,
        max_length=15,
        description="ISBN-10, hyphens allowed",
        examples=["0-451-52493-4"],
    )

    publisher: str | None = Field(default=None, max_length=255, examples=["Penguin Classics"])

    publication_date: date | None = Field(
        default=None,
        description="Date of publication",
        examples=["1851-10-18"],
    )

    edition: str | None = Field(default=None, max_length=100, examples=["Reprint"])
    genre: str | None = Field(default=None, max_length=100, examples=["Adventure"])
    language: str | None = Field(default=None, max_length=50, examples=["English"])

    page_count: int | None = Field(
        default=None,
        ge=0,
        description="Number of pages",
        examples=[720],
    )

    summary: str | None = Field(
        default=None,
        description="Book summary",
        examples=["The voyage of the whaling ship Pequod..."],
    )

    @field_validator("isbn13")
    @classmethod
    def validate_isbn13(cls, v: str | None) -> str | None:
        return clean_isbn13(v)

    @field_validator("isbn10")
    @classmethod
    def validate_isbn10(cls, v: str | None) -> str | None:
        return clean_isbn10(v)


class BookCreate(BookBase):
    """
    Schema for adding a book to the catalog.

    Example request body:
    {
        "isbn13": "9780142437247",
        "title": "Moby-Dick",
        "author": "Herman Melville",
        "publicationDate": "1851-10-18",
        "pageCount": 720
    }
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Book title",
        examples=["Moby-Dick"],
    )

    author: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author name",
        examples=["Herman Melville"],
    )

    @field_validator("title", "author")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        return strip_required(v)

    @model_validator(mode="after")
    def requires_an_isbn(self) -> "BookCreate":
        if self.isbn13 is None and self.isbn10 is None:
            raise ValueError("At least one of isbn13 or isbn10 is required")
        return self


class BookUpdate(BookBase):
    """
    Schema for updating a book.

    All fields are optional. Fields that are omitted or null keep their
    current value.
    """

    title: str | None = Field(default=None, min_length=1, max_length=500)
    author: str | None = Field(default=None, min_length=1, max_length=255)

    @field_validator("title", "author")
    @classmethod
    def must_not_be_blank(cls, v: str | None) -> str | None:
        return strip_optional(v)


class BookResponse(CamelModel):
    """
    Schema for book responses.

    Returns the stored record, ISBNs in normalized form.
    """

    id: int = Field(..., description="Unique identifier")
    isbn13: str | None = None
    isbn10: str | None = None
    title: str
    author: str
    publisher: str | None = None
    publication_date: date | None = None
    edition: str | None = None
    genre: str | None = None
    language: str | None = None
    page_count: int | None = None
    summary: str | None = None
    created_at: datetime = Field(..., description="When the book was created")
    updated_at: datetime = Field(..., description="When the book was last updated")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "isbn13": "9780142437247",
                "isbn10": None,
                "title": "Moby-Dick",
                "author": "Herman Melville",
                "publisher": "Penguin Classics",
                "publicationDate": "1851-10-18",
                "edition": None,
                "genre": "Adventure",
                "language": "English",
                "pageCount": 720,
                "summary": None,
                "createdAt": "2024-01-15T10:30:00Z",
                "updatedAt": "2024-01-15T10:30:00Z",
            }
        },
    )
