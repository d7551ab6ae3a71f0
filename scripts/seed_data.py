#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample data for development and testing.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py

    # Keep existing rows and only add what is missing
    python scripts/seed_data.py --keep

This script:
1. Connects to the database using app settings
2. Clears existing data (unless --keep)
3. Seeds the reading status lookup
4. Creates sample books, a demo user with a reading list, and one
   unused registration key
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from reading_list_api.database import SessionLocal, create_tables, seed_book_statuses
from reading_list_api.models import (
    Book,
    ReadingList,
    ReadingListEntry,
    RegistrationKey,
    User,
)
from reading_list_api.services.registration_keys import create_registration_keys
from reading_list_api.services.security import hash_password

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo-password"
DEMO_REGISTRATION_KEY = "WELCOME-2024"


def clear_data(db: Session) -> None:
    """Clear all existing data (the status lookup is kept)."""
    logger.info("Clearing existing data...")
    db.execute(delete(ReadingListEntry))
    db.execute(delete(ReadingList))
    db.execute(delete(Book))
    db.execute(delete(User))
    db.execute(delete(RegistrationKey))
    db.commit()


def create_books(db: Session) -> list[Book]:
    """Create sample books, skipping ISBNs already in the catalog."""
    books_data = [
        {
            "isbn13": "9780451524935",
            "isbn10": "0451524934",
            "title": "1984",
            "author": "George Orwell",
            "publisher": "Signet Classics",
            "publication_date": date(1949, 6, 8),
            "genre": "Dystopian",
            "language": "English",
            "page_count": 328,
            "summary": "A dystopian novel set in a totalitarian society under constant surveillance.",
        },
        {
            "isbn13": "9780142437247",
            "isbn10": "0142437247",
            "title": "Moby-Dick",
            "author": "Herman Melville",
            "publisher": "Penguin Classics",
            "publication_date": date(1851, 10, 18),
            "genre": "Adventure",
            "language": "English",
            "page_count": 720,
            "summary": "Ishmael recounts Captain Ahab's obsessive hunt for the white whale.",
        },
        {
            "isbn13": "9780140447934",
            "isbn10": "0140447938",
            "title": "War and Peace",
            "author": "Leo Tolstoy",
            "publisher": "Penguin Classics",
            "publication_date": date(1869, 1, 1),
            "edition": "Anthony Briggs translation",
            "genre": "Historical Fiction",
            "language": "English",
            "page_count": 1440,
        },
        {
            "isbn13": "9780141439518",
            "isbn10": "0141439513",
            "title": "Pride and Prejudice",
            "author": "Jane Austen",
            "publisher": "Penguin Classics",
            "publication_date": date(1813, 1, 28),
            "genre": "Romance",
            "language": "English",
            "page_count": 432,
        },
        {
            "isbn13": "9780547928227",
            "title": "The Hobbit",
            "author": "J.R.R. Tolkien",
            "publication_date": date(1937, 9, 21),
            "genre": "Fantasy",
            "page_count": 310,
        },
        {
            "isbn13": "9780553293357",
            "title": "Foundation",
            "author": "Isaac Asimov",
            "publication_date": date(1951, 5, 1),
            "genre": "Science Fiction",
            "page_count": 244,
        },
    ]

    existing = set(db.execute(select(Book.isbn13)).scalars().all())
    books = [Book(**data) for data in books_data if data["isbn13"] not in existing]

    db.add_all(books)
    db.commit()
    for book in books:
        db.refresh(book)

    logger.info(f"Created {len(books)} books.")
    return books


def create_demo_user(db: Session, books: list[Book]) -> User | None:
    """Create a demo user owning one reading list with the sample books."""
    if db.execute(select(User.id).where(User.email == DEMO_EMAIL)).first():
        logger.info("Demo user already exists.")
        return None

    user = User(
        first_name="Demo",
        last_name="Reader",
        email=DEMO_EMAIL,
        password_hash=hash_password(DEMO_PASSWORD),
    )
    reading_list = ReadingList(user=user, title="Classics")
    # Cycle through to-read (1), reading (2), finished (3)
    reading_list.entries = [
        ReadingListEntry(book=book, status_id=(i % 3) + 1)
        for i, book in enumerate(books[:3])
    ]

    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"Created demo user {DEMO_EMAIL} with reading list '{reading_list.title}'.")
    return user


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    logger.info("=" * 60)
    logger.info("Starting database seed...")
    logger.info("=" * 60)

    # Create tables if they don't exist
    create_tables()

    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        statuses = seed_book_statuses(db)
        books = create_books(db)
        user = create_demo_user(db, books)

        key_exists = db.execute(
            select(RegistrationKey.id).where(RegistrationKey.key_code == DEMO_REGISTRATION_KEY)
        ).first()
        if not key_exists:
            create_registration_keys(db, 1, codes=[DEMO_REGISTRATION_KEY])

        logger.info("=" * 60)
        logger.info("Database seeding completed successfully!")
        logger.info("=" * 60)
        logger.info(f"  - Statuses added: {statuses}")
        logger.info(f"  - Books added: {len(books)}")
        if user is not None:
            logger.info(f"  - Demo login: {DEMO_EMAIL}")
        logger.info(f"  - Registration key: {DEMO_REGISTRATION_KEY}")
        logger.info("API documentation at http://localhost:8001/docs")

    except Exception:
        logger.exception("Error seeding database")
        db.rollback()
        raise
    finally:
        db.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the reading list database")
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep existing rows instead of clearing them first",
    )
    args = parser.parse_args()

    seed_database(clear_existing=not args.keep)


if __name__ == "__main__":
    main()
