"""Group membership endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db
from services.memberships import MembershipNotFound, add_group_member, remove_group_member
from services.notifications.schemas import GroupMembershipResponse

from .lookups import require_member

router = APIRouter(prefix="/groups", tags=["groups"])


@router.put(
    "/{group_id}/members/{member_id}",
    response_model=GroupMembershipResponse,
    status_code=status.HTTP_200_OK,
)
async def add_member_to_group(
    group_id: str,
    member_id: str,
    session: AsyncSession = Depends(get_db),
) -> GroupMembershipResponse:
    try:
        added = await add_group_member(session, group_id=group_id, member_id=member_id)
    except MembershipNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return GroupMembershipResponse(
        detail="Added" if added else "Already a member",
        is_member=True,
    )


@router.delete(
    "/{group_id}/members/{member_id}",
    response_model=GroupMembershipResponse,
    status_code=status.HTTP_200_OK,
)
async def remove_member_from_group(
    group_id: str,
    member_id: str,
    session: AsyncSession = Depends(get_db),
) -> GroupMembershipResponse:
    await require_member(session, group_id)
    removed = await remove_group_member(session, group_id=group_id, member_id=member_id)
    return GroupMembershipResponse(
        detail="Removed" if removed else "Was not a member",
        is_member=False,
    )
