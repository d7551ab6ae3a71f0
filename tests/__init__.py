"""
Test Suite for the Reading List API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_auth.py: /register, /login and the token header
- test_books.py: /book endpoints and filters
- test_reading_lists.py: /readingList endpoints
- test_users.py: /user endpoints and the optional token requirement
- test_security.py, test_isbn.py, test_registration_keys.py: services and helpers
- test_health.py: /health, / and error formatting

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
