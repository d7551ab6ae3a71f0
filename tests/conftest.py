"""
pytest Fixtures for Reading List API Tests

This file contains shared fixtures used across all test files.

WHAT ARE FIXTURES?
==================
Fixtures are reusable test setup/teardown functions.
They provide:
- Test data (sample users, books, reading lists)
- Test resources (database connections, HTTP clients)
- Setup/cleanup logic (create/drop tables)

FIXTURE SCOPES:
- function (default): New instance per test function
- session: Single instance for entire test session

For database tests, we use:
- session scope for engine (expensive to create)
- function scope for sessions (isolation between tests)
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
# This disables rate limiting, sets a test secret key and keeps the
# module-level engine on SQLite
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

from collections.abc import Generator
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from reading_list_api.database import Base, get_db, seed_book_statuses
from reading_list_api.main import app
from reading_list_api.models import (
    Book,
    ReadingList,
    ReadingListEntry,
    RegistrationKey,
    User,
)
from reading_list_api.services.security import create_access_token, hash_password

SAMPLE_PASSWORD = "abc123"  # password of sample_user

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# We use SQLite in-memory for tests because:
# - Fast: No disk I/O, runs in memory
# - Isolated: Each test run starts fresh
# - Simple: No external database needed


def build_test_engine():
    """
    Create a SQLite in-memory database engine with every table.

    StaticPool keeps the connection alive for the entire session.
    Without it, SQLite in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # SQLite only enforces foreign keys when asked to
    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture(scope="session")
def engine():
    engine = build_test_engine()

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session is wrapped in a transaction that's rolled back,
    ensuring test isolation without needing to recreate tables.
    The reading status lookup is seeded inside that transaction.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    seed_book_statuses(session)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


def _override_get_db(db_session: Session):
    def override_get_db():
        """Provide test database session instead of real one."""
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    return override_get_db


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    We override the get_db dependency to use our test session.
    """
    app.dependency_overrides[get_db] = _override_get_db(db_session)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def lenient_client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Test client that returns 500 responses instead of re-raising.

    Used to observe what the API answers when a handler fails unexpectedly.
    """
    app.dependency_overrides[get_db] = _override_get_db(db_session)

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def committing_session() -> Generator[Session, None, None]:
    """
    Session on a private database whose commits and rollbacks are real.

    db_session joins an outer transaction, so a rollback inside a handler
    would discard the whole test transaction. Tests that need a handler to
    roll back (constraint violations) use this session instead.
    """
    engine = build_test_engine()
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()

    seed_book_statuses(session)

    yield session

    session.close()
    engine.dispose()


@pytest.fixture(scope="function")
def committing_client(committing_session: Session) -> Generator[TestClient, None, None]:
    """Test client bound to committing_session."""
    app.dependency_overrides[get_db] = _override_get_db(committing_session)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def registration_key(db_session: Session) -> RegistrationKey:
    """Create an unused registration key."""
    key = RegistrationKey(key_code="TEST-KEY-0001")
    db_session.add(key)
    db_session.commit()
    db_session.refresh(key)
    return key


@pytest.fixture
def sample_user(db_session: Session) -> User:
    """Create a sample user whose password is SAMPLE_PASSWORD."""
    user = User(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        password_hash=hash_password(SAMPLE_PASSWORD),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(sample_user: User) -> dict[str, str]:
    """Token header for sample_user."""
    return {"token": create_access_token(sample_user.id)}


@pytest.fixture
def sample_book(db_session: Session) -> Book:
    """Create a sample book."""
    book = Book(
        isbn13="9780142437247",
        isbn10="0142437247",
        title="Moby-Dick",
        author="Herman Melville",
        publisher="Penguin Classics",
        publication_date=date(1851, 10, 18),
        genre="Adventure",
        language="English",
        page_count=720,
        summary="Ishmael recounts Captain Ahab's hunt for the white whale.",
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def multiple_books(db_session: Session, sample_book: Book) -> list[Book]:
    """
    Three books; the last one leaves every optional column NULL.
    """
    books = [
        sample_book,
        Book(
            isbn13="9780140447934",
            title="War and Peace",
            author="Leo Tolstoy",
            publisher="Penguin Classics",
            publication_date=date(1869, 1, 1),
            genre="Historical Fiction",
            language="English",
            page_count=1440,
        ),
        Book(
            isbn10="0451524934",
            title="1984",
            author="George Orwell",
        ),
    ]
    db_session.add_all(books[1:])
    db_session.commit()
    for book in books:
        db_session.refresh(book)

    return books


@pytest.fixture
def sample_reading_list(db_session: Session, sample_user: User) -> ReadingList:
    """Create an empty reading list owned by sample_user."""
    reading_list = ReadingList(user_id=sample_user.id, title="Summer 2024")
    db_session.add(reading_list)
    db_session.commit()
    db_session.refresh(reading_list)
    return reading_list


@pytest.fixture
def populated_reading_list(
    db_session: Session,
    sample_reading_list: ReadingList,
    multiple_books: list[Book],
) -> ReadingList:
    """
    Reading list holding every book of multiple_books.

    Statuses: Moby-Dick to-read (1), War and Peace reading (2),
    1984 finished (3).
    """
    for status_id, book in enumerate(multiple_books, start=1):
        db_session.add(
            ReadingListEntry(
                reading_list_id=sample_reading_list.id,
                book_id=book.id,
                status_id=status_id,
            )
        )
    db_session.commit()
    db_session.refresh(sample_reading_list)
    return sample_reading_list
