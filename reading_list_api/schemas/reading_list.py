"""
Reading List Pydantic Schemas

- ReadingListCreate / ReadingListUpdate / ReadingListResponse: the list itself
- ReadingListBookAdd / ReadingListBookStatusUpdate: entries in the matrix
- ReadingListBookResponse: a book as seen through a list (with its status)
- BookStatusResponse: the status lookup
"""

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from reading_list_api.schemas.book import BookResponse
from reading_list_api.schemas.common import CamelModel, strip_required


class ReadingListCreate(CamelModel):
    """
    Schema for creating a reading list.

    Example request body:
    {
        "userId": 1,
        "title": "Summer 2024"
    }
    """

    user_id: int = Field(..., gt=0, description="Owner of the list", examples=[1])
    title: str = Field(..., min_length=1, max_length=255, examples=["Summer 2024"])

    @field_validator("title")
    @classmethod
    def title_must_not_be_blank(cls, v: str) -> str:
        return strip_required(v)


class ReadingListUpdate(CamelModel):
    """Schema for renaming a reading list."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Winter 2024"])

    @field_validator("title")
    @classmethod
    def title_must_not_be_blank(cls, v: str) -> str:
        return strip_required(v)


class ReadingListResponse(CamelModel):
    """Schema for reading list responses."""

    id: int
    user_id: int
    title: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReadingListBookAdd(CamelModel):
    """Schema for placing a book on a reading list."""

    book_id: int = Field(..., gt=0, examples=[1])
    status_id: int = Field(..., gt=0, description="Reading status id", examples=[1])


class ReadingListBookStatusUpdate(CamelModel):
    """Schema for changing the status of a book on a reading list."""

    status_id: int = Field(..., gt=0, description="Reading status id", examples=[2])


class ReadingListBookResponse(BookResponse):
    """A book on a reading list, with the id and status of its entry."""

    entry_id: int = Field(..., description="Identifier of the reading list entry")
    status_id: int = Field(..., description="Reading status id")


class BookStatusResponse(CamelModel):
    """Schema for the reading status lookup."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)
