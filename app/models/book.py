"""
Book Model

The domain entity stored by the book repository.

Unlike a database row, a Book lives in process memory for the lifetime
of the service. The repository owns the stored instances; everything it
hands out is a copy (see Book.copy), so callers can never reach into the
store and change a record behind the lock's back.

Field ownership:
- id: supplied by the client, never changed after creation
- title, author, publisher: replaced on update
- created_date, last_modified_date: set by the repository, always UTC
"""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


@dataclass
class Book:
    """
    A single book record.

    Attributes:
        id: Unique identifier (client generated UUID)
        title: Book title
        author: Book author
        publisher: Optional publisher name
        created_date: When the record was created
        last_modified_date: When the record was last updated
    """

    id: UUID
    title: str
    author: str
    publisher: str | None = None
    created_date: datetime | None = None
    last_modified_date: datetime | None = None

    def copy(self) -> "Book":
        """Return a detached copy of this record."""
        return replace(self)


@dataclass
class Library:
    """
    One page of books returned by a list operation.

    Attributes:
        books: Records on this page, in store order
        page: The requested page index (0-based)
        total_books: Number of live records in the whole store
    """

    books: list[Book] = field(default_factory=list)
    page: int = 0
    total_books: int = 0
