"""Group membership lookups and changes."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from db.errors import is_unique_violation
from models import GroupMembership, Member

from .common import eq


class MembershipNotFound(ValueError):
    """The group or the member does not exist."""


async def load_group_ids_for_member(
    session: AsyncSession,
    member_id: str,
) -> list[str]:
    """Return ids of the groups the member directly belongs to."""
    group_id_column = cast(ColumnElement[str], GroupMembership.group_id)
    result = await session.execute(
        select(group_id_column)
        .where(eq(GroupMembership.member_id, member_id))
        .order_by(group_id_column)
    )
    return [row[0] for row in result.all()]


async def add_group_member(
    session: AsyncSession,
    *,
    group_id: str,
    member_id: str,
) -> bool:
    """Add the member to the group.

    Returns True when a new membership row is created, False when it already existed.
    Raises MembershipNotFound for unknown ids and ValueError for memberships
    that can never exist.
    """
    group = await session.get(Member, group_id)
    if group is None:
        raise MembershipNotFound("Group not found")
    if await session.get(Member, member_id) is None:
        raise MembershipNotFound("Member not found")
    if not group.is_group:
        raise ValueError("Not a group")
    if group_id == member_id:
        raise ValueError("A group cannot be a member of itself")

    existing = await session.execute(
        select(GroupMembership).where(
            eq(GroupMembership.group_id, group_id),
            eq(GroupMembership.member_id, member_id),
        )
    )
    if existing.scalar_one_or_none() is not None:
        return False

    session.add(GroupMembership(group_id=group_id, member_id=member_id))
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        if not is_unique_violation(exc):
            raise
        # Concurrent insert of the same membership.
        return False
    return True


async def remove_group_member(
    session: AsyncSession,
    *,
    group_id: str,
    member_id: str,
) -> bool:
    existing = await session.execute(
        select(GroupMembership).where(
            eq(GroupMembership.group_id, group_id),
            eq(GroupMembership.member_id, member_id),
        )
    )
    membership = existing.scalar_one_or_none()
    if membership is None:
        return False

    await session.delete(membership)
    await session.commit()
    return True
