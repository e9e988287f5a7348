"""Forum page (topic) model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlmodel import Field, SQLModel

MAX_PAGE_ID_LENGTH = 32


class Page(SQLModel, table=True):
    """A discussion page; only the fields notification routing needs."""

    __tablename__ = "pages"

    id: str = Field(sa_column=Column(String(MAX_PAGE_ID_LENGTH), primary_key=True))
    site_id: int = Field(sa_column=Column(Integer, nullable=False, index=True))
    category_id: int | None = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("categories.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
    )
    title: str = Field(sa_column=Column(String(200), nullable=False))
    created_at: datetime = Field(
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )
    )
