"""Entity lookups shared by v1 endpoints."""

from __future__ import annotations

from typing import NoReturn

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from models import Category, Member, Page


def raise_not_found(detail: str) -> NoReturn:
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


async def require_member(session: AsyncSession, member_id: str) -> Member:
    member = await session.get(Member, member_id)
    if member is None:
        raise_not_found("Member not found")
    return member


async def require_page(session: AsyncSession, page_id: str, *, site_id: int) -> Page:
    page = await session.get(Page, page_id)
    if page is None or page.site_id != site_id:
        raise_not_found("Page not found")
    return page


async def require_category(session: AsyncSession, category_id: int, *, site_id: int) -> Category:
    category = await session.get(Category, category_id)
    if category is None or category.site_id != site_id:
        raise_not_found("Category not found")
    return category
