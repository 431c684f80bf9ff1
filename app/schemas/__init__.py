"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

WHY Separate Schemas from Domain Models?
========================================
1. Security: Control exactly what data is exposed in API responses
2. Validation: Request parsing rules stay out of the store
3. Decoupling: The stored Book can evolve independently of the API
4. Documentation: Schemas generate OpenAPI documentation
"""

from app.schemas.book import (
    BookListResponse,
    BookPayload,
    BookResponse,
    BookSummary,
)

__all__ = [
    "BookPayload",
    "BookResponse",
    "BookSummary",
    "BookListResponse",
]
