"""
pytest Fixtures for Library API Tests

This file contains shared fixtures used across all test files.

FIXTURE STRATEGY:
=================
- repo: a brand new InMemoryBookRepository per test, so tests never share
  books with each other
- client: a TestClient whose get_book_repository dependency is overridden
  to return that same repo, so a test can arrange data directly on the
  repository and then exercise the HTTP layer
- sample data: books created through the repository
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
# This disables rate limiting for the whole test session
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"

from collections.abc import Generator
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_book_repository
from app.main import app
from app.models import Book
from app.repositories import InMemoryBookRepository

DON_QUIXOTE_ID = UUID("b19537af-7997-422b-a3ff-9cac51b4d59e")
WAR_AND_PEACE_ID = UUID("4f1a0c8e-2d7b-4b8e-9a51-6c3e2f7d9b10")


# =============================================================================
# REPOSITORY AND CLIENT FIXTURES
# =============================================================================
@pytest.fixture(scope="function")
def repo() -> InMemoryBookRepository:
    """Create an empty repository for each test."""
    return InMemoryBookRepository()


@pytest.fixture(scope="function")
def client(repo: InMemoryBookRepository) -> Generator[TestClient, None, None]:
    """
    Create a test client wired to the per-test repository.

    We override the get_book_repository dependency so every request in
    this test talks to `repo`.
    """
    app.dependency_overrides[get_book_repository] = lambda: repo

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def don_quixote(repo: InMemoryBookRepository) -> Book:
    """Store Don Quixote (no publisher) and return the stored copy."""
    repo.create(Book(id=DON_QUIXOTE_ID, title="Don Quixote", author="Cervantes"))
    return repo.get(DON_QUIXOTE_ID)


@pytest.fixture
def war_and_peace(repo: InMemoryBookRepository) -> Book:
    """Store War and Peace (with publisher) and return the stored copy."""
    repo.create(
        Book(
            id=WAR_AND_PEACE_ID,
            title="War and Peace",
            author="Tolstoy",
            publisher="The Russian Messenger",
        )
    )
    return repo.get(WAR_AND_PEACE_ID)


@pytest.fixture
def multiple_books(repo: InMemoryBookRepository) -> list[Book]:
    """Store five books in a known order for pagination tests."""
    books = []
    for i in range(5):
        book_id = UUID(int=i + 1)
        repo.create(Book(id=book_id, title=f"Test Book {i + 1}", author=f"Author {i + 1}"))
        books.append(repo.get(book_id))
    return books
