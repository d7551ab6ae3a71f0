"""
Registration Key Model

Single-use invitation codes that gate account creation. Keys are
provisioned out-of-band (scripts/create_registration_keys.py) and flip
from unused to used exactly once, when a registration claims them.
"""

from datetime import UTC, datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from reading_list_api.database import Base


class RegistrationKey(Base):
    """
    Registration key model.

    Table: registration_key

    A key is claimed with a conditional UPDATE (used = false -> true), so
    two registrations racing for the same key cannot both succeed.
    """

    __tablename__ = "registration_key"

    id: Mapped[int] = mapped_column(primary_key=True)

    key_code: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        index=True,
        nullable=False,
        comment="Invitation code handed to the new user"
    )

    used: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        comment="Whether a registration has consumed the key"
    )

    used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="When the key was consumed"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"RegistrationKey(id={self.id}, used={self.used})"
