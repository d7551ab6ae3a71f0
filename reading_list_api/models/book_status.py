"""
Book Status Lookup

The small, fixed set of reading states an entry can be in. Rows are
seeded by the initial migration (and database.seed_book_statuses); the
API only reads them.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from reading_list_api.database import Base


class BookStatus(Base):
    """Reading status lookup, e.g. to-read / reading / finished."""

    __tablename__ = "lu_book_status"

    # Ids are fixed by the seed data, not generated.
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"BookStatus(id={self.id}, name='{self.name}')"
