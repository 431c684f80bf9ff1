"""
Book Repository Contract

Defines the storage interface the HTTP layer depends on, plus the one
domain error a repository may raise.

WHY an abstract base class?
===========================
The routers only ever talk to BookRepository. Swapping the in-memory
store for a real database later means writing a new subclass, not
touching the endpoints. Tests use the same seam to inject a mock.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from app.models import Book, Library


class BookNotFoundError(LookupError):
    """No live book exists for the requested identifier."""

    def __init__(self, book_id: UUID) -> None:
        self.book_id = book_id
        super().__init__(f"Book with id {book_id} not found")


class BookRepository(ABC):
    """Storage operations for book records."""

    @abstractmethod
    def list(self, count: int, page: int) -> Library:
        """
        Return one page of books.

        Args:
            count: Page size (zero or positive)
            page: Page index, 0-based (zero or positive)

        Returns:
            Library with the page's books and the total record count.
            A page past the end is empty, not an error.
        """

    @abstractmethod
    def get(self, book_id: UUID) -> Book:
        """
        Return a copy of the book with the given id.

        Raises:
            BookNotFoundError: If no such book exists
        """

    @abstractmethod
    def create(self, book: Book) -> None:
        """Store a new book, stamping its timestamps."""

    @abstractmethod
    def update(self, book: Book) -> None:
        """
        Replace title, author and publisher of an existing book.

        Raises:
            BookNotFoundError: If no such book exists
        """

    @abstractmethod
    def delete(self, book_id: UUID) -> None:
        """
        Remove a book.

        Raises:
            BookNotFoundError: If no such book exists
        """

    @abstractmethod
    def count(self) -> int:
        """Number of live books."""
