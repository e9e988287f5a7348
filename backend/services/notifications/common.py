"""Shared SQLAlchemy helpers for notification services."""

from __future__ import annotations

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession


def dialect_insert(session: AsyncSession, model: Any) -> Any:
    """Return an INSERT supporting ``on_conflict_do_update`` for the bound dialect."""
    dialect_name = session.get_bind().dialect.name
    if dialect_name == "postgresql":
        return postgresql.insert(model)
    if dialect_name == "sqlite":
        # Test suite uses SQLite; runtime production DB is PostgreSQL.
        return sqlite.insert(model)
    raise RuntimeError(f"Upserts are not supported on dialect {dialect_name!r}")
