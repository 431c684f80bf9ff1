"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

WHY Dependency Injection?
=========================
1. Reusability: Write once, use in many routes
2. Testing: Easy to swap the repository for a fresh one or a mock
3. Separation of Concerns: Routes focus on mapping HTTP to repository calls

Dependencies provided here:
- The book repository (one shared in-memory store per process)
- Lenient pagination parameters
- Request body parsing with 400 (not 422) on bad input
- Book id path parsing
"""

import logging
from functools import lru_cache
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, Path, Query, Request, status
from pydantic import ValidationError

from app.repositories import BookRepository, InMemoryBookRepository
from app.schemas import BookPayload

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
DEFAULT_PAGE = 0


# =============================================================================
# Repository
# =============================================================================
@lru_cache
def get_book_repository() -> BookRepository:
    """
    Get the process-wide book repository.

    Cached so every request shares the same store. Tests replace it through
    app.dependency_overrides[get_book_repository].
    """
    logger.info("Initializing in-memory book repository")
    return InMemoryBookRepository()


BookRepo = Annotated[BookRepository, Depends(get_book_repository)]


# =============================================================================
# Pagination Parameters
# =============================================================================
def _parse_non_negative(raw: str | None, default: int) -> int:
    """Parse a query value, falling back to the default when unusable."""
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


class PageParams:
    """
    Pagination parameters for GET /books.

    - count: How many books per page (default 10)
    - page: Which page to return, 0-indexed (default 0)

    Values that are absent, not integers, or negative fall back to the
    defaults instead of failing the request:
        GET /books?count=abc&page=-1   ->   count=10, page=0
    """

    def __init__(
        self,
        count: str | None = Query(
            default=None,
            description="Number of books per page (default 10)",
            examples=["10", "25"],
        ),
        page: str | None = Query(
            default=None,
            description="Page number, 0-indexed (default 0)",
            examples=["0", "1"],
        ),
    ) -> None:
        self.count = _parse_non_negative(count, DEFAULT_PAGE_SIZE)
        self.page = _parse_non_negative(page, DEFAULT_PAGE)


Pagination = Annotated[PageParams, Depends()]


# =============================================================================
# Request Parsing
# =============================================================================
async def read_book_payload(request: Request) -> BookPayload:
    """
    Parse the JSON body of a create/update request.

    Raises:
        HTTPException: 400 if the body is not valid JSON for a book
    """
    body = await request.body()
    try:
        return BookPayload.model_validate_json(body)
    except ValidationError as e:
        logger.error(f"An error occurred while reading body: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid Book: input format unparsable",
        ) from e


BookBody = Annotated[BookPayload, Depends(read_book_payload)]


def parse_book_id(
    book_id: str = Path(..., description="Book identifier (UUID)"),
) -> UUID:
    """
    Parse the {book_id} path segment.

    Raises:
        HTTPException: 400 if the segment is not a UUID
    """
    try:
        return UUID(book_id)
    except ValueError as e:
        logger.error(f"An error occurred while parsing identifier: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid Identifier: input format unparsable",
        ) from e


BookId = Annotated[UUID, Depends(parse_book_id)]
