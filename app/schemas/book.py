"""
Book Pydantic Schemas

Request and response shapes for the /books endpoints.

Request bodies are parsed leniently (BookPayload) and checked for
required fields by hand, so the API can answer with a 400 and a list of
the missing fields instead of FastAPI's generic 422 validation error.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models import Book


class BookPayload(BaseModel):
    """
    Body of PUT /books (create) and PATCH /books (update).

    Example request body:
    {
        "id": "b19537af-7997-422b-a3ff-9cac51b4d59e",
        "title": "Don Quixote",
        "author": "Miguel de Cervantes",
        "publisher": "Francisco de Robles"
    }
    """

    id: UUID | None = Field(
        default=None,
        description="Client generated identifier",
        examples=["b19537af-7997-422b-a3ff-9cac51b4d59e"],
    )

    title: str = Field(
        default="",
        max_length=500,
        description="Book title",
        examples=["Don Quixote", "War and Peace"],
    )

    author: str = Field(
        default="",
        max_length=500,
        description="Book author",
        examples=["Miguel de Cervantes"],
    )

    publisher: str | None = Field(
        default=None,
        max_length=500,
        description="Publisher name",
        examples=["The Russian Messenger"],
    )

    @field_validator("title", "author", mode="before")
    @classmethod
    def null_text_is_empty(cls, v: object) -> object:
        """A JSON null title or author is reported as missing, like an empty one."""
        return "" if v is None else v

    @field_validator("title", "author")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Normalize surrounding whitespace."""
        return v.strip()

    @field_validator("publisher")
    @classmethod
    def blank_publisher_is_none(cls, v: str | None) -> str | None:
        """Treat an empty publisher the same as an absent one."""
        if v is None or not v.strip():
            return None
        return v.strip()

    def missing_fields(self) -> list[str]:
        """
        Names of required fields that are absent or empty.

        A nil UUID (all zeros) counts as a missing id.
        """
        missing = []
        if self.id is None or self.id.int == 0:
            missing.append("id")
        if not self.title:
            missing.append("title")
        if not self.author:
            missing.append("author")
        return missing

    def to_book(self) -> Book:
        """Build the domain record; timestamps are left to the repository."""
        return Book(
            id=self.id,
            title=self.title,
            author=self.author,
            publisher=self.publisher,
        )


class BookResponse(BaseModel):
    """
    Full representation of a single book.

    `publisher` is omitted from the JSON when it is not set.
    """

    id: UUID = Field(..., description="Unique identifier")
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Book author")
    publisher: str | None = Field(default=None, description="Publisher name")
    created_date: datetime = Field(..., description="When the book was created (UTC)")
    last_modified_date: datetime = Field(..., description="When the book was last updated (UTC)")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "b19537af-7997-422b-a3ff-9cac51b4d59e",
                "title": "War and Peace",
                "author": "Leo Tolstoy",
                "publisher": "The Russian Messenger",
                "created_date": "2024-01-15T10:30:00Z",
                "last_modified_date": "2024-01-15T10:30:00Z",
            }
        },
    )


class BookSummary(BaseModel):
    """A list entry: the title plus a link to the full record."""

    title: str = Field(..., description="Book title")
    href: str = Field(..., description="Absolute URL of the book resource")


class BookListResponse(BaseModel):
    """
    Schema for paginated book list responses.

    - books: Summaries for this page
    - total_books: Number of books in the whole library
    - next_href: Link to the next page (omitted on the last page)
    - prev_href: Link to the previous page (omitted on the first page)
    """

    books: list[BookSummary] = Field(
        default_factory=list,
        description="Books on this page",
    )

    total_books: int = Field(
        ...,
        ge=0,
        description="Total number of books",
    )

    next_href: str | None = Field(
        default=None,
        description="URL of the next page",
    )

    prev_href: str | None = Field(
        default=None,
        description="URL of the previous page",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "books": [
                    {
                        "title": "War and Peace",
                        "href": "http://localhost:8080/books/b19537af-7997-422b-a3ff-9cac51b4d59e",
                    }
                ],
                "total_books": 11,
                "next_href": "http://localhost:8080/books?count=10&page=1",
            }
        },
    )
