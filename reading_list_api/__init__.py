"""
Reading List API Application Package

REST backend for a personal reading-list application: registration gated by
one-time keys, token login, a book catalog, and reading lists that track a
status per book.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and table helpers
- exceptions.py: HTTP error taxonomy raised by the handlers
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions (session, token gate, filters)
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Password hashing, tokens, rate limiting, filter building
- utils/: ISBN helpers
"""

__version__ = "0.1.0"
