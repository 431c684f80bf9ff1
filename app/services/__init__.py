"""
Services Package

Cross-cutting services that sit beside the HTTP handling.

Current services:
- rate_limiter.py: Rate limiting with slowapi and in-process storage
"""
