"""Typed SQLAlchemy expression helpers shared by services and endpoints."""

from __future__ import annotations

from collections.abc import Collection
from typing import Any, cast

from sqlalchemy.sql import ColumnElement


def eq(column: Any, value: Any) -> ColumnElement[bool]:
    """Typed equality expression helper."""
    return cast(ColumnElement[bool], column == value)


def in_(column: Any, values: Collection[Any]) -> ColumnElement[bool]:
    """Typed IN expression helper."""
    return cast(ColumnElement[bool], cast(ColumnElement[Any], column).in_(list(values)))
