"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Security: Control exactly what data is exposed in API responses
2. Validation: Different rules for create vs update vs response
3. Decoupling: Database schema can evolve independently of API

Schema Naming Convention:
- XxxCreate: Fields required when creating a new record
- XxxUpdate: Fields allowed when updating (all optional for books)
- XxxResponse: Fields returned in API responses

Every schema derives from CamelModel, so JSON field names are camelCase.
"""

from reading_list_api.schemas.book import (
    BookBase,
    BookCreate,
    BookResponse,
    BookUpdate,
)
from reading_list_api.schemas.common import CamelModel, ResourceId
from reading_list_api.schemas.reading_list import (
    BookStatusResponse,
    ReadingListBookAdd,
    ReadingListBookResponse,
    ReadingListBookStatusUpdate,
    ReadingListCreate,
    ReadingListResponse,
    ReadingListUpdate,
)
from reading_list_api.schemas.user import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserDeleteRequest,
    UserResponse,
    UserUpdate,
)

__all__ = [
    # Shared
    "CamelModel",
    "ResourceId",
    # Book schemas
    "BookBase",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    # Reading list schemas
    "ReadingListCreate",
    "ReadingListUpdate",
    "ReadingListResponse",
    "ReadingListBookAdd",
    "ReadingListBookStatusUpdate",
    "ReadingListBookResponse",
    "BookStatusResponse",
    # Auth/User schemas
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    "UserResponse",
    "UserUpdate",
    "UserDeleteRequest",
]
