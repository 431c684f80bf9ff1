"""
Utilities Package

This package contains helper code used across the application.

Current utilities:
- locks.py: RWLock, a readers-writer lock for shared in-memory state
"""

from app.utils.locks import RWLock

__all__ = ["RWLock"]
