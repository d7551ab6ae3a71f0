"""
Services Package

This package contains business logic services that are:
- Separate from HTTP handling (routers)
- Reusable across different parts of the application
- Easier to test in isolation

Current services:
- book_search.py: Book filters shared by the catalog and reading lists
- rate_limiter.py: Rate limiting with slowapi
- registration_keys.py: Creating and listing registration keys
- security.py: Password hashing and identity tokens
"""
