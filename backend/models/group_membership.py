"""Group membership relationship model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, String, func
from sqlmodel import Field, SQLModel


class GroupMembership(SQLModel, table=True):
    """Represents a group -> member relationship."""

    __tablename__ = "group_memberships"
    __table_args__ = (
        CheckConstraint("group_id <> member_id", name="ck_group_memberships_no_self"),
        Index("ix_group_memberships_member_group", "member_id", "group_id"),
    )

    group_id: str = Field(
        sa_column=Column(
            String(36),
            ForeignKey("members.id", ondelete="CASCADE"),
            primary_key=True,
        )
    )
    member_id: str = Field(
        sa_column=Column(
            String(36),
            ForeignKey("members.id", ondelete="CASCADE"),
            primary_key=True,
        )
    )
    created_at: datetime = Field(
        sa_column=Column(
            DateTime(timezone=True),
            server_default=func.now(),
            nullable=False,
        )
    )
