"""
In-Memory Book Repository

Thread-safe book storage kept entirely in process memory.

Storage layout:
===============
- _books: list of Book in insertion order (the collection)
- _index: dict mapping book id -> position in _books

The index turns get/update/delete lookups into O(1) dict hits instead of
a scan over the list. The price is paid on delete: every entry that sat
after the removed book moves one slot left, so its index value is
decremented (O(n)).

Locking:
========
One RWLock guards both structures together. Reads (get, list, count)
share the lock; create, update and delete hold it exclusively for the
whole lookup + mutate + fix-up sequence, so no caller ever sees the list
and the index disagree.

Duplicate ids:
==============
create() on an id that is already stored behaves as an upsert: the record
keeps its position and created_date, its descriptive fields are replaced
and last_modified_date is refreshed. This keeps `PUT /books` idempotent.
"""

from datetime import datetime
from uuid import UUID

from app.models import Book, Library, utc_now
from app.repositories.base import BookNotFoundError, BookRepository
from app.utils import RWLock


class InMemoryBookRepository(BookRepository):
    """Thread-safe in-memory book storage."""

    def __init__(self) -> None:
        self._books: list[Book] = []
        self._index: dict[UUID, int] = {}
        self._lock = RWLock()

    def list(self, count: int, page: int) -> Library:
        with self._lock.read_lock():
            total = len(self._books)
            start = count * page
            end = min(start + count, total)
            books = [book.copy() for book in self._books[start:end]] if start < total else []
            return Library(books=books, page=page, total_books=total)

    def get(self, book_id: UUID) -> Book:
        with self._lock.read_lock():
            return self._lookup(book_id).copy()

    def create(self, book: Book) -> None:
        with self._lock.write_lock():
            now = utc_now()
            position = self._index.get(book.id)
            if position is not None:
                self._apply_changes(self._books[position], book, now)
                return

            stored = book.copy()
            stored.created_date = now
            stored.last_modified_date = now
            self._index[stored.id] = len(self._books)
            self._books.append(stored)

    def update(self, book: Book) -> None:
        with self._lock.write_lock():
            current = self._lookup(book.id)
            self._apply_changes(current, book, utc_now())

    def delete(self, book_id: UUID) -> None:
        with self._lock.write_lock():
            position = self._index.get(book_id)
            if position is None:
                raise BookNotFoundError(book_id)

            del self._books[position]
            del self._index[book_id]
            for other_id, other_position in self._index.items():
                if other_position > position:
                    self._index[other_id] = other_position - 1

    def count(self) -> int:
        with self._lock.read_lock():
            return len(self._books)

    def _lookup(self, book_id: UUID) -> Book:
        # Caller must hold the lock.
        position = self._index.get(book_id)
        if position is None:
            raise BookNotFoundError(book_id)
        return self._books[position]

    @staticmethod
    def _apply_changes(current: Book, changes: Book, now: datetime) -> None:
        current.title = changes.title
        current.author = changes.author
        current.publisher = changes.publisher
        current.last_modified_date = now
