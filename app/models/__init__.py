"""
Domain Models Package

Plain dataclasses for the in-memory book store.

Import models from here:
    from app.models import Book, Library
"""

from app.models.book import Book, Library, utc_now

__all__ = [
    "Book",
    "Library",
    "utc_now",
]
