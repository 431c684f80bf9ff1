"""
Books Router

CRUD endpoints for books, backed by the injected BookRepository.

Route design:
=============
- Clients generate the book id (a UUID), so creation is an idempotent
  PUT /books: sending the same body twice leaves one book behind.
- Updates use PATCH /books with the id in the body. Unlike PUT, a PATCH
  for an unknown id is a 404.
- GET /books returns lightweight summaries with links, and next/prev
  page links computed from the total book count.

Repository errors are not caught here: BookNotFoundError propagates to
the exception handler registered in app.main, which turns it into a 404.
"""

import logging

from fastapi import APIRouter, HTTPException, Request, Response, status

from app.dependencies import BookBody, BookId, BookRepo, Pagination
from app.models import Library
from app.schemas import BookListResponse, BookPayload, BookResponse, BookSummary
from app.services.rate_limiter import read_limit, write_limit

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
    },
)


# =============================================================================
# Helper Functions
# =============================================================================
def require_fields(payload: BookPayload) -> None:
    """
    Reject a book body with missing required fields.

    Raises:
        HTTPException: 400 listing the missing fields (id, title, author)
    """
    missing = payload.missing_fields()
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid Book, the following fields are required: {', '.join(missing)}",
        )


def build_list_response(request: Request, library: Library, count: int) -> BookListResponse:
    """
    Map a Library page onto the list response, adding navigation links.

    next_href is set while books remain after this page; prev_href is set
    for every page but the first.
    """
    page = library.page
    next_href = None
    if (page + 1) * count < library.total_books:
        next_href = str(request.url.include_query_params(count=count, page=page + 1))
    prev_href = None
    if page > 0:
        prev_href = str(request.url.include_query_params(count=count, page=page - 1))

    books = [
        BookSummary(
            title=book.title,
            href=str(request.url_for("get_book", book_id=str(book.id))),
        )
        for book in library.books
    ]
    return BookListResponse(
        books=books,
        total_books=library.total_books,
        next_href=next_href,
        prev_href=prev_href,
    )


# =============================================================================
# CRUD Endpoints
# =============================================================================
@router.get(
    "",
    response_model=BookListResponse,
    response_model_exclude_none=True,
    summary="List books",
    description="Get one page of book summaries. Bad paging values fall back to the defaults.",
)
@read_limit
def list_books(
    request: Request,
    repo: BookRepo,
    pagination: Pagination,
) -> BookListResponse:
    """
    List books with pagination.

    Examples:
        GET /books
        GET /books?count=5&page=2
    """
    library = repo.list(pagination.count, pagination.page)
    return build_list_response(request, library, pagination.count)


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    response_model_exclude_none=True,
    summary="Get a book by ID",
    description="Retrieve the full record of a single book.",
)
@read_limit
def get_book(
    request: Request,
    book_id: BookId,
    repo: BookRepo,
) -> BookResponse:
    """
    Get a single book by its ID.

    Raises:
        HTTPException: 400 if the id is not a UUID
        BookNotFoundError: mapped to 404 by the application
    """
    book = repo.get(book_id)
    return BookResponse.model_validate(book)


@router.put(
    "",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    summary="Create a book",
    description="Create a book with a client supplied id. Repeating the call updates it.",
)
@write_limit
def create_book(
    request: Request,
    payload: BookBody,
    repo: BookRepo,
) -> Response:
    """
    Create (or idempotently re-create) a book.

    Raises:
        HTTPException: 400 if the body is unparsable or misses id/title/author
    """
    require_fields(payload)
    repo.create(payload.to_book())
    logger.info(f"Stored book {payload.id}")
    return Response(status_code=status.HTTP_200_OK)


@router.patch(
    "",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    summary="Update a book",
    description="Replace the title, author and publisher of an existing book.",
)
@write_limit
def update_book(
    request: Request,
    payload: BookBody,
    repo: BookRepo,
) -> Response:
    """
    Update an existing book.

    Raises:
        HTTPException: 400 if the body is unparsable or misses id/title/author
        BookNotFoundError: mapped to 404 by the application
    """
    require_fields(payload)
    repo.update(payload.to_book())
    logger.info(f"Updated book {payload.id}")
    return Response(status_code=status.HTTP_200_OK)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    summary="Delete a book",
    description="Remove a book from the library.",
)
@write_limit
def delete_book(
    request: Request,
    book_id: BookId,
    repo: BookRepo,
) -> Response:
    """
    Delete a book.

    Raises:
        HTTPException: 400 if the id is not a UUID
        BookNotFoundError: mapped to 404 by the application
    """
    repo.delete(book_id)
    logger.info(f"Deleted book {book_id}")
    return Response(status_code=status.HTTP_200_OK)
