"""Notification preference endpoints."""

from __future__ import annotations

from typing import Annotated, cast

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from api.deps import get_db, get_site_id
from db.errors import is_foreign_key_violation
from models import Page
from models.page import MAX_PAGE_ID_LENGTH
from services.common import eq, in_
from services.notifications import (
    CategoryScope,
    ConstraintViolation,
    NotfLevel,
    PageNotfPref,
    PageScope,
    Scope,
    WholeSiteScope,
    delete_page_notf_pref,
    load_member_and_groups_broad_prefs,
    load_own_page_notf_levels,
    load_page_notf_prefs_for_scope,
    resolve_page_notf_pref,
    resolve_page_notf_prefs_bulk,
    resolve_site_notf_pref,
    scope_from_columns,
    upsert_page_notf_pref,
)
from services.notifications.schemas import (
    DeleteNotfPrefResponse,
    EffectiveNotfPrefListResponse,
    EffectiveNotfPrefResponse,
    NotfPrefListResponse,
    NotfPrefResponse,
    NotfPrefUpsertRequest,
    OwnNotfLevelsResponse,
)

from .lookups import require_category, require_member, require_page

router = APIRouter(tags=["notf-prefs"])
MAX_BULK_PAGES = 100


def _constraint_error(exc: ConstraintViolation) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=str(exc),
    )


@router.get(
    "/members/{member_id}/notf-prefs/site",
    response_model=EffectiveNotfPrefResponse,
)
async def get_effective_site_notf_pref(
    member_id: str,
    session: AsyncSession = Depends(get_db),
    site_id: int = Depends(get_site_id),
) -> EffectiveNotfPrefResponse:
    await require_member(session, member_id)
    eff_pref = await resolve_site_notf_pref(session, member_id=member_id, site_id=site_id)
    return EffectiveNotfPrefResponse.from_effective(eff_pref)


@router.get(
    "/members/{member_id}/notf-prefs/pages/{page_id}",
    response_model=EffectiveNotfPrefResponse,
)
async def get_effective_page_notf_pref(
    member_id: str,
    page_id: str,
    session: AsyncSession = Depends(get_db),
    site_id: int = Depends(get_site_id),
) -> EffectiveNotfPrefResponse:
    await require_member(session, member_id)
    page = await require_page(session, page_id, site_id=site_id)
    eff_pref = await resolve_page_notf_pref(
        session,
        member_id=member_id,
        page_id=page.id,
        category_id=page.category_id,
        site_id=site_id,
    )
    return EffectiveNotfPrefResponse.from_effective(eff_pref)


@router.get(
    "/members/{member_id}/notf-prefs/pages",
    response_model=EffectiveNotfPrefListResponse,
)
async def list_effective_page_notf_prefs(
    member_id: str,
    page_ids: Annotated[
        list[str],
        Query(alias="page_id", min_length=1, max_length=MAX_BULK_PAGES),
    ],
    session: AsyncSession = Depends(get_db),
    site_id: int = Depends(get_site_id),
) -> EffectiveNotfPrefListResponse:
    """Effective levels for a topic list; unknown page ids are skipped."""
    await require_member(session, member_id)

    unique_page_ids = list(dict.fromkeys(page_ids))
    page_id_column = cast(ColumnElement[str], Page.id)
    category_id_column = cast(ColumnElement[int | None], Page.category_id)
    result = await session.execute(
        select(page_id_column, category_id_column).where(
            in_(Page.id, unique_page_ids),
            eq(Page.site_id, site_id),
        )
    )
    category_id_by_found_page = {page_id: category_id for page_id, category_id in result.all()}
    category_id_by_page_id = {
        page_id: category_id_by_found_page[page_id]
        for page_id in unique_page_ids
        if page_id in category_id_by_found_page
    }

    eff_prefs = await resolve_page_notf_prefs_bulk(
        session,
        member_id=member_id,
        category_id_by_page_id=category_id_by_page_id,
        site_id=site_id,
    )
    return EffectiveNotfPrefListResponse(
        prefs=[
            EffectiveNotfPrefResponse.from_effective(eff_prefs[page_id])
            for page_id in category_id_by_page_id
        ]
    )


@router.get(
    "/members/{member_id}/notf-prefs/own",
    response_model=OwnNotfLevelsResponse,
)
async def get_own_notf_levels(
    member_id: str,
    page_id: Annotated[str, Query(min_length=1)],
    session: AsyncSession = Depends(get_db),
    site_id: int = Depends(get_site_id),
) -> OwnNotfLevelsResponse:
    await require_member(session, member_id)
    page = await require_page(session, page_id, site_id=site_id)
    levels = await load_own_page_notf_levels(
        session,
        member_id=member_id,
        page_id=page.id,
        category_id=page.category_id,
        site_id=site_id,
    )
    return OwnNotfLevelsResponse.from_levels(page.id, levels)


@router.get(
    "/members/{member_id}/notf-prefs/categories-and-site",
    response_model=NotfPrefListResponse,
)
async def list_category_and_site_notf_prefs(
    member_id: str,
    session: AsyncSession = Depends(get_db),
    site_id: int = Depends(get_site_id),
) -> NotfPrefListResponse:
    """The member's and their groups' category and whole-site preferences."""
    await require_member(session, member_id)
    prefs = await load_member_and_groups_broad_prefs(
        session,
        member_id=member_id,
        site_id=site_id,
    )
    return NotfPrefListResponse(prefs=[NotfPrefResponse.from_pref(pref) for pref in prefs])


@router.put(
    "/members/{member_id}/notf-prefs",
    response_model=NotfPrefResponse,
)
async def save_notf_pref(
    member_id: str,
    payload: NotfPrefUpsertRequest,
    session: AsyncSession = Depends(get_db),
    site_id: int = Depends(get_site_id),
) -> NotfPrefResponse:
    await require_member(session, member_id)
    try:
        pref = PageNotfPref.from_columns(
            member_id,
            NotfLevel(payload.notf_level),
            page_id=payload.page_id,
            category_id=payload.pages_in_category_id,
            whole_site=payload.whole_site,
        )
    except ConstraintViolation as exc:
        raise _constraint_error(exc) from exc

    if pref.page_id is not None:
        await require_page(session, pref.page_id, site_id=site_id)
    if pref.category_id is not None:
        await require_category(session, pref.category_id, site_id=site_id)

    try:
        await upsert_page_notf_pref(session, pref, site_id=site_id)
    except IntegrityError as exc:
        # The page or category was deleted after the lookup.
        if is_foreign_key_violation(exc):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Page or category not found",
            ) from exc
        raise
    return NotfPrefResponse.from_pref(pref)


@router.delete(
    "/members/{member_id}/notf-prefs",
    response_model=DeleteNotfPrefResponse,
)
async def delete_notf_pref(
    member_id: str,
    page_id: Annotated[str | None, Query(min_length=1, max_length=MAX_PAGE_ID_LENGTH)] = None,
    pages_in_category_id: Annotated[int | None, Query()] = None,
    whole_site: Annotated[bool, Query()] = False,
    session: AsyncSession = Depends(get_db),
    site_id: int = Depends(get_site_id),
) -> DeleteNotfPrefResponse:
    await require_member(session, member_id)
    try:
        scope = scope_from_columns(
            page_id=page_id,
            category_id=pages_in_category_id,
            whole_site=whole_site,
        )
    except ConstraintViolation as exc:
        raise _constraint_error(exc) from exc

    deleted = await delete_page_notf_pref(session, member_id, scope, site_id=site_id)
    return DeleteNotfPrefResponse(deleted=deleted)


async def _list_prefs_at_scope(
    session: AsyncSession,
    scope: Scope,
    *,
    site_id: int,
) -> NotfPrefListResponse:
    prefs = await load_page_notf_prefs_for_scope(session, scope, site_id=site_id)
    return NotfPrefListResponse(prefs=[NotfPrefResponse.from_pref(pref) for pref in prefs])


@router.get("/notf-prefs/pages/{page_id}", response_model=NotfPrefListResponse)
async def list_page_notf_prefs(
    page_id: str,
    session: AsyncSession = Depends(get_db),
    site_id: int = Depends(get_site_id),
) -> NotfPrefListResponse:
    return await _list_prefs_at_scope(session, PageScope(page_id), site_id=site_id)


@router.get("/notf-prefs/categories/{category_id}", response_model=NotfPrefListResponse)
async def list_category_notf_prefs(
    category_id: int,
    session: AsyncSession = Depends(get_db),
    site_id: int = Depends(get_site_id),
) -> NotfPrefListResponse:
    return await _list_prefs_at_scope(session, CategoryScope(category_id), site_id=site_id)


@router.get("/notf-prefs/site", response_model=NotfPrefListResponse)
async def list_site_notf_prefs(
    session: AsyncSession = Depends(get_db),
    site_id: int = Depends(get_site_id),
) -> NotfPrefListResponse:
    return await _list_prefs_at_scope(session, WholeSiteScope(), site_id=site_id)
