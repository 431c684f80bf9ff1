"""
Repositories Package

Storage for book records, kept behind an abstract interface so the
routers never depend on a concrete backend.

- base.py: BookRepository contract and BookNotFoundError
- memory.py: InMemoryBookRepository, the thread-safe in-memory store
"""

from app.repositories.base import BookNotFoundError, BookRepository
from app.repositories.memory import InMemoryBookRepository

__all__ = [
    "BookNotFoundError",
    "BookRepository",
    "InMemoryBookRepository",
]
