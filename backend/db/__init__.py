"""Database helpers."""

from .errors import is_foreign_key_violation, is_unique_violation
from .session import AsyncSessionMaker, async_engine

__all__ = [
    "AsyncSessionMaker",
    "async_engine",
    "is_foreign_key_violation",
    "is_unique_violation",
]
