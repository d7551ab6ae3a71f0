"""
Registration Key Provisioning

Registration is invitation only: each new account consumes one unused
registration key (see routers/auth.py). Keys are created out of band by
an operator, with scripts/create_registration_keys.py or the seed script.
"""

import logging
import secrets

from sqlalchemy import select
from sqlalchemy.orm import Session

from reading_list_api.models import RegistrationKey

logger = logging.getLogger(__name__)

# 12 random bytes -> 16 URL-safe characters
KEY_BYTES = 12


def generate_key_code() -> str:
    """Return a random, URL-safe registration key code."""
    return secrets.token_urlsafe(KEY_BYTES)


def create_registration_keys(
    db: Session,
    count: int,
    codes: list[str] | None = None,
) -> list[str]:
    """
    Store new unused registration keys.

    Args:
        db: Database session
        count: Number of random keys to generate (ignored when codes is given)
        codes: Explicit key codes to store instead of random ones

    Returns:
        The key codes that were stored, in creation order

    Raises:
        ValueError: If an explicit code already exists
    """
    if codes is None:
        codes = [generate_key_code() for _ in range(count)]

    existing = db.execute(
        select(RegistrationKey.key_code).where(RegistrationKey.key_code.in_(codes))
    ).scalars().all()
    if existing:
        raise ValueError(f"Registration keys already exist: {', '.join(existing)}")

    db.add_all(RegistrationKey(key_code=code) for code in codes)
    db.commit()

    logger.info(f"Created {len(codes)} registration key(s)")
    return codes


def list_unused_keys(db: Session) -> list[str]:
    stmt = (
        select(RegistrationKey.key_code)
        .where(RegistrationKey.used.is_(False))
        .order_by(RegistrationKey.id)
    )
    return list(db.execute(stmt).scalars().all())
