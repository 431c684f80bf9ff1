"""
Test Suite for Library API

Test Organization:
- conftest.py: Shared fixtures (repository, client, sample books)
- test_repository.py: InMemoryBookRepository behaviour and concurrency
- test_locks.py: RWLock semantics
- test_books.py: Tests for /books endpoints
- test_app.py: Utility endpoints, error mapping, settings

Running Tests:
    # Run all tests
    pytest

    # Run with coverage
    pytest --cov=app --cov-report=html

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
