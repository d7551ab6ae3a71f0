"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the Reading List API.

We use SYNCHRONOUS SQLAlchemy with psycopg2 against PostgreSQL. The
handlers are short sequences of queries, so a thread-pooled sync session
is simpler than an async stack and just as fast for this workload.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives -> create a new session
2. Use session for all database operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends

The session is the only handle to the store a handler ever receives. It is
injected with FastAPI's Depends(get_db), so tests substitute their own.
"""

import logging
from collections.abc import Generator

from sqlalchemy import create_engine, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from reading_list_api.config import get_settings
from reading_list_api.exceptions import ConflictError

logger = logging.getLogger(__name__)
settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# Key parameters:
# - pool_size: Number of connections to keep open permanently
# - max_overflow: How many extra connections can be created during high load
# - pool_pre_ping: Test connection health before using (prevents stale connections)
# - echo: Log all SQL statements (useful for debugging, disable in production)

def build_engine(database_url: str):
    """
    Create the engine for a database URL.

    SQLite (local development) needs check_same_thread disabled because
    FastAPI runs sync handlers in a thread pool.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=settings.debug,
        )

    return create_engine(
        database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )


engine = build_engine(settings.database_url)


# =============================================================================
# Session Factory
# =============================================================================
# - autocommit=False: We control when to commit (explicit is better than implicit)
# - autoflush=False: Don't auto-flush before queries (more predictable behavior)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic reads Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield creates the session, the handler uses it, and the
    finally block closes it even when the handler raised.

    Usage in Routes:
        @router.get("/book/{book_id}")
        def get_book(book_id: int, db: Session = Depends(get_db)):
            ...

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_conflict(db: Session, detail: str) -> None:
    """
    Commit the session, turning a constraint violation into a 409.

    Unique constraints (email, ISBNs, reading list pairings) are the
    authoritative duplicate check. Handlers still look for duplicates first
    to produce a precise message, but two concurrent requests can both pass
    that look-up; the loser of the race lands here.

    Args:
        db: Database session with pending changes
        detail: Message returned to the client on conflict

    Raises:
        ConflictError: If the commit violated an integrity constraint
    """
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(f"Integrity conflict on commit: {exc.orig}")
        raise ConflictError(detail) from None


# =============================================================================
# Utility Functions
# =============================================================================
# Status lookup rows the API references but never creates.
DEFAULT_BOOK_STATUSES = {
    1: "to-read",
    2: "reading",
    3: "finished",
}


def seed_book_statuses(db: Session) -> int:
    """
    Insert the default reading statuses that are missing.

    Safe to run repeatedly.

    Returns:
        Number of statuses inserted
    """
    from reading_list_api.models import BookStatus

    existing = set(db.execute(select(BookStatus.id)).scalars().all())
    missing = [
        BookStatus(id=status_id, name=name)
        for status_id, name in DEFAULT_BOOK_STATUSES.items()
        if status_id not in existing
    ]
    db.add_all(missing)
    db.commit()
    return len(missing)


def create_tables() -> None:
    """
    Create all database tables.

    WARNING: In production, use Alembic migrations instead!
    This function doesn't track schema changes or allow rollbacks.
    """
    import reading_list_api.models  # noqa: F401 - registers every table

    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Never use in production.
    """
    Base.metadata.drop_all(bind=engine)
