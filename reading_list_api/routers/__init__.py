"""
API Routers Package

This package contains FastAPI routers that handle API endpoints.

WHY Routers?
============
1. Organization: Group related endpoints together
2. Modularity: Each router can have its own prefix, tags, dependencies
3. Maintainability: Easy to find and modify endpoint code

Router Structure:
- auth.py: /register and /login
- books.py: /book/* endpoints
- reading_lists.py: /readingList/* endpoints
- users.py: /user/* endpoints

Each router is imported and registered in main.py.
"""

from reading_list_api.routers.auth import router as auth_router
from reading_list_api.routers.books import router as books_router
from reading_list_api.routers.reading_lists import router as reading_lists_router
from reading_list_api.routers.users import router as users_router

__all__ = [
    "auth_router",
    "books_router",
    "reading_lists_router",
    "users_router",
]
