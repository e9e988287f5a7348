"""Load-then-resolve helpers combining the store, memberships and the resolver."""

from __future__ import annotations

from collections.abc import Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from services.memberships import load_group_ids_for_member

from .prefs import EffectivePreference, PageNotfPref, PageScope, WholeSiteScope
from .resolver import resolve_effective_pref, resolve_effective_prefs_for_pages
from .snapshot import MemberAndGroupsPrefs, build_member_and_groups_prefs
from .store import (
    load_category_and_site_notf_prefs,
    load_applicable_page_notf_prefs,
    load_notf_prefs_for_pages,
    load_page_notf_prefs_for_subjects_at_scope,
)


async def load_member_and_groups_prefs_for_page(
    session: AsyncSession,
    *,
    member_id: str,
    page_id: str,
    category_id: int | None,
    site_id: int,
) -> MemberAndGroupsPrefs:
    group_ids = await load_group_ids_for_member(session, member_id)
    prefs = await load_applicable_page_notf_prefs(
        session,
        page_id=page_id,
        category_id=category_id,
        subject_ids=[member_id, *group_ids],
        site_id=site_id,
    )
    return build_member_and_groups_prefs(member_id, prefs, group_ids)


async def resolve_page_notf_pref(
    session: AsyncSession,
    *,
    member_id: str,
    page_id: str,
    category_id: int | None,
    site_id: int,
) -> EffectivePreference:
    snapshot = await load_member_and_groups_prefs_for_page(
        session,
        member_id=member_id,
        page_id=page_id,
        category_id=category_id,
        site_id=site_id,
    )
    return resolve_effective_pref(snapshot, PageScope(page_id))


async def resolve_site_notf_pref(
    session: AsyncSession,
    *,
    member_id: str,
    site_id: int,
) -> EffectivePreference:
    group_ids = await load_group_ids_for_member(session, member_id)
    prefs = await load_page_notf_prefs_for_subjects_at_scope(
        session,
        WholeSiteScope(),
        [member_id, *group_ids],
        site_id=site_id,
    )
    snapshot = build_member_and_groups_prefs(member_id, prefs, group_ids)
    return resolve_effective_pref(snapshot, WholeSiteScope())


async def resolve_page_notf_prefs_bulk(
    session: AsyncSession,
    *,
    member_id: str,
    category_id_by_page_id: Mapping[str, int | None],
    site_id: int,
) -> dict[str, EffectivePreference]:
    """Resolve many pages with one membership lookup and one preference query."""
    if not category_id_by_page_id:
        return {}

    group_ids = await load_group_ids_for_member(session, member_id)
    category_ids = {
        category_id
        for category_id in category_id_by_page_id.values()
        if category_id is not None
    }
    prefs = await load_notf_prefs_for_pages(
        session,
        page_ids=list(category_id_by_page_id),
        category_ids=category_ids,
        subject_ids=[member_id, *group_ids],
        site_id=site_id,
    )
    return resolve_effective_prefs_for_pages(
        prefs,
        member_id=member_id,
        group_ids=group_ids,
        category_id_by_page_id=category_id_by_page_id,
    )


async def load_member_and_groups_broad_prefs(
    session: AsyncSession,
    *,
    member_id: str,
    site_id: int,
) -> list[PageNotfPref]:
    """Category and whole-site preferences of the member and of their groups."""
    group_ids = await load_group_ids_for_member(session, member_id)
    return await load_category_and_site_notf_prefs(
        session,
        [member_id, *group_ids],
        site_id=site_id,
    )
