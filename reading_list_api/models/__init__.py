"""
SQLAlchemy Models Package

This package contains all database models for the Reading List API.

Model Relationships:
- User -> ReadingList: One-to-Many (a user owns many reading lists)
- ReadingList <-> Book: Many-to-Many through ReadingListEntry, which also
  carries the reading status of the book on that list
- ReadingListEntry -> BookStatus: Many-to-One lookup

Import all models here to:
1. Make them available as: from reading_list_api.models import Book, User
2. Ensure Alembic discovers them for migrations
"""

# The order matters for SQLAlchemy to resolve relationships
from reading_list_api.models.book_status import BookStatus
from reading_list_api.models.user import User
from reading_list_api.models.registration_key import RegistrationKey
from reading_list_api.models.book import Book
from reading_list_api.models.reading_list import ReadingList, ReadingListEntry

__all__ = [
    "BookStatus",
    "User",
    "RegistrationKey",
    "Book",
    "ReadingList",
    "ReadingListEntry",
]
