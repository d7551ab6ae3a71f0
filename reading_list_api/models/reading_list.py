"""
Reading List Models

- ReadingList: A named list owned by one user.
- ReadingListEntry: The association matrix linking a reading list to a
  book with a reading status.

WHY a full model for the association?
=====================================
A plain association Table is enough when the link carries no data. Each
pairing here has its own status and its own id (returned to clients when
a book is added), so the junction is a mapped class.

Business Rules:
- A book appears at most once per reading list (unique constraint)
- Deleting a reading list or a book deletes its entries
- status_id must reference lu_book_status
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from reading_list_api.database import Base

if TYPE_CHECKING:
    from reading_list_api.models.book import Book
    from reading_list_api.models.book_status import BookStatus
    from reading_list_api.models.user import User


class ReadingList(Base):
    """
    Reading list owned by a user.

    Table: reading_list
    """

    __tablename__ = "reading_list"

    id: Mapped[int] = mapped_column(primary_key=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Reading list title",
    )

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

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="reading_lists")
    entries: Mapped[list["ReadingListEntry"]] = relationship(
        "ReadingListEntry",
        back_populates="reading_list",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<ReadingList(id={self.id}, user_id={self.user_id}, title='{self.title}')>"


class ReadingListEntry(Base):
    """
    A book placed on a reading list, with its reading status.

    Table: reading_list_matrix
    """

    __tablename__ = "reading_list_matrix"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    reading_list_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("reading_list.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    book_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("book.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("lu_book_status.id"),
        nullable=False,
    )

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

    # Relationships
    reading_list: Mapped["ReadingList"] = relationship(
        "ReadingList", back_populates="entries"
    )
    book: Mapped["Book"] = relationship("Book", back_populates="entries")
    status: Mapped["BookStatus"] = relationship("BookStatus")

    # Constraints
    __table_args__ = (
        # One entry per book per reading list
        UniqueConstraint(
            "reading_list_id", "book_id", name="uq_reading_list_matrix_list_book"
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<ReadingListEntry(id={self.id}, reading_list_id={self.reading_list_id}, "
            f"book_id={self.book_id}, status_id={self.status_id})>"
        )
