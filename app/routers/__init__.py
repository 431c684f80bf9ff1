"""
API Routers Package

This package contains FastAPI routers that handle API endpoints.

Router Structure:
- books.py: /books/* endpoints

Each router is imported and registered in main.py.
"""

from app.routers.books import router as books_router

__all__ = [
    "books_router",
]
