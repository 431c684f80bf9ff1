"""
Library API Application Package

A small book library service backed by a thread-safe in-memory store.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- models/: Domain dataclasses (Book, Library)
- repositories/: Book storage (in-memory implementation)
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Cross-cutting services (rate limiting)
- utils/: Helpers (readers-writer lock)
"""

__version__ = "1.0.0"
