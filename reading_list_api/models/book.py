"""
Book Model

The catalog entry shared by every reading list.

A book is identified to the outside world by its ISBN-13 and/or ISBN-10.
Both columns are nullable but unique: a book must carry at least one of
them (checked by the request schemas), and no two books may share either.
"""

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from reading_list_api.database import Base

if TYPE_CHECKING:
    from reading_list_api.models.reading_list import ReadingListEntry


class Book(Base):
    """
    Book model representing books in the catalog.

    Table: book

    Fields:
    - isbn13 / isbn10: Normalized ISBNs (digits only, unique, nullable)
    - title, author: Required
    - publisher, publication_date, edition, genre, language,
      page_count, summary: Optional metadata

    Relationships:
    - entries: Reading list pairings; removed when the book is deleted

    Example:
        book = Book(
            title="Moby-Dick",
            author="Herman Melville",
            isbn13="9780142437247",
            publication_date=date(1851, 10, 18),
            page_count=720,
        )
    """

    __tablename__ = "book"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Identifiers
    # -------------------------------------------------------------------------
    isbn13: Mapped[str | None] = mapped_column(
        String(13),
        unique=True,
        index=True,
        nullable=True,
        comment="ISBN-13 without separators"
    )

    isbn10: Mapped[str | None] = mapped_column(
        String(10),
        unique=True,
        index=True,
        nullable=True,
        comment="ISBN-10 without separators"
    )

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
        comment="Author name as printed on the book"
    )

    publisher: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Date (not DateTime) because we only care about the day, not time
    publication_date: Mapped[date | None] = mapped_column(
        Date,
        index=True,
        nullable=True,
        comment="Date of publication"
    )

    edition: Mapped[str | None] = mapped_column(String(100), nullable=True)
    genre: Mapped[str | None] = mapped_column(String(100), nullable=True)
    language: Mapped[str | None] = mapped_column(String(50), nullable=True)

    page_count: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Number of pages in the book"
    )

    summary: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Book summary"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    entries: Mapped[list["ReadingListEntry"]] = relationship(
        "ReadingListEntry",
        back_populates="book",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint("page_count >= 0", name="ck_book_page_count_positive"),
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', isbn13='{self.isbn13}')"
