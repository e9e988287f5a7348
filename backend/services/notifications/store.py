"""Page notification preference persistence operations.

One row per (site, scope column, subject). Writes are single statements that
commit immediately; failures roll back and propagate to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import Any, cast

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from models import PageNotfPrefRow
from services.common import eq, in_

from .common import dialect_insert
from .levels import DEFAULT_NOTF_LEVEL, NotfLevel
from .prefs import (
    CategoryScope,
    PageNotfLevels,
    PageNotfPref,
    PageScope,
    Scope,
    WholeSiteScope,
)

logger = logging.getLogger(__name__)


def _scope_column_name_value(scope: Scope) -> tuple[str, Any]:
    if isinstance(scope, PageScope):
        return "page_id", scope.page_id
    if isinstance(scope, CategoryScope):
        return "pages_in_category_id", scope.category_id
    if isinstance(scope, WholeSiteScope):
        return "pages_in_whole_site", True
    raise ValueError(f"Unsupported notification preference scope: {scope!r}")


def _scope_filter(scope: Scope) -> ColumnElement[bool]:
    column_name, value = _scope_column_name_value(scope)
    return eq(getattr(PageNotfPrefRow, column_name), value)


def _pref_from_row(row: PageNotfPrefRow) -> PageNotfPref:
    level = NotfLevel.from_int(row.notf_level)
    if level is None:
        logger.warning(
            "Unknown notification level in page_notf_prefs row, reading as default",
            extra={"row_id": row.id, "notf_level": row.notf_level},
        )
        level = DEFAULT_NOTF_LEVEL
    return PageNotfPref.from_columns(
        row.people_id,
        level,
        page_id=row.page_id,
        category_id=row.pages_in_category_id,
        whole_site=bool(row.pages_in_whole_site),
    )


async def _load_prefs(
    session: AsyncSession,
    *conditions: ColumnElement[bool],
    site_id: int,
) -> list[PageNotfPref]:
    result = await session.execute(
        select(PageNotfPrefRow)
        .where(eq(PageNotfPrefRow.site_id, site_id), *conditions)
        .order_by(cast(ColumnElement[int], PageNotfPrefRow.id))
        # Rows may have changed through upserts issued on this same session.
        .execution_options(populate_existing=True)
    )
    return [_pref_from_row(row) for row in result.scalars().all()]


async def upsert_page_notf_pref(
    session: AsyncSession,
    pref: PageNotfPref,
    *,
    site_id: int,
) -> None:
    """Insert the preference, or overwrite the level of the row with the same scope key."""
    column_name, _ = _scope_column_name_value(pref.scope)
    stmt = dialect_insert(session, PageNotfPrefRow).values(
        site_id=site_id,
        people_id=pref.subject_id,
        notf_level=int(pref.level),
        page_id=pref.page_id,
        pages_in_category_id=pref.category_id,
        # NULL unless true, see the whole-site unique constraint.
        pages_in_whole_site=True if pref.whole_site else None,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["site_id", column_name, "people_id"],
        set_={"notf_level": stmt.excluded.notf_level},
    )
    try:
        await session.execute(stmt)
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.warning(
            "Failed to upsert page notification preference",
            extra={"site_id": site_id, "subject_id": pref.subject_id, "scope": column_name},
            exc_info=exc,
        )
        raise

    logger.info(
        "Upserted page notification preference",
        extra={
            "site_id": site_id,
            "subject_id": pref.subject_id,
            "scope": column_name,
            "notf_level": int(pref.level),
        },
    )


async def delete_page_notf_pref(
    session: AsyncSession,
    subject_id: str,
    scope: Scope,
    *,
    site_id: int,
) -> bool:
    """Delete the subject's preference for the scope; False when there was none."""
    column_name, _ = _scope_column_name_value(scope)
    try:
        delete_result = await session.execute(
            delete(PageNotfPrefRow).where(
                eq(PageNotfPrefRow.site_id, site_id),
                eq(PageNotfPrefRow.people_id, subject_id),
                _scope_filter(scope),
            )
        )
        deleted_rows = int(cast(Any, delete_result).rowcount or 0)
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.warning(
            "Failed to delete page notification preference",
            extra={"site_id": site_id, "subject_id": subject_id, "scope": column_name},
            exc_info=exc,
        )
        raise

    if deleted_rows > 0:
        logger.info(
            "Deleted page notification preference",
            extra={"site_id": site_id, "subject_id": subject_id, "scope": column_name},
        )
    return deleted_rows > 0


async def load_page_notf_prefs_for_scope(
    session: AsyncSession,
    scope: Scope,
    *,
    site_id: int,
) -> list[PageNotfPref]:
    """Everyone's explicit preference at exactly this scope."""
    return await _load_prefs(session, _scope_filter(scope), site_id=site_id)


async def load_page_notf_prefs_for_subjects_at_scope(
    session: AsyncSession,
    scope: Scope,
    subject_ids: Collection[str],
    *,
    site_id: int,
) -> list[PageNotfPref]:
    if not subject_ids:
        return []
    return await _load_prefs(
        session,
        _scope_filter(scope),
        in_(PageNotfPrefRow.people_id, subject_ids),
        site_id=site_id,
    )


async def load_applicable_page_notf_prefs(
    session: AsyncSession,
    *,
    page_id: str,
    category_id: int | None,
    subject_ids: Collection[str],
    site_id: int,
) -> list[PageNotfPref]:
    """Rows for this page, this page's category and the site, for the given subjects."""
    return await load_notf_prefs_for_pages(
        session,
        page_ids=[page_id],
        category_ids=[category_id] if category_id is not None else [],
        subject_ids=subject_ids,
        site_id=site_id,
    )


async def load_notf_prefs_for_pages(
    session: AsyncSession,
    *,
    page_ids: Collection[str],
    category_ids: Collection[int],
    subject_ids: Collection[str],
    site_id: int,
) -> list[PageNotfPref]:
    if not subject_ids:
        return []

    scope_conditions = [eq(PageNotfPrefRow.pages_in_whole_site, True)]
    if page_ids:
        scope_conditions.append(in_(PageNotfPrefRow.page_id, page_ids))
    if category_ids:
        scope_conditions.append(in_(PageNotfPrefRow.pages_in_category_id, category_ids))
    return await _load_prefs(
        session,
        in_(PageNotfPrefRow.people_id, subject_ids),
        cast(ColumnElement[bool], or_(*scope_conditions)),
        site_id=site_id,
    )


async def load_category_and_site_notf_prefs(
    session: AsyncSession,
    subject_ids: Collection[str],
    *,
    site_id: int,
) -> list[PageNotfPref]:
    """The subjects' category and whole-site rows; page rows are skipped."""
    if not subject_ids:
        return []
    return await _load_prefs(
        session,
        in_(PageNotfPrefRow.people_id, subject_ids),
        eq(PageNotfPrefRow.page_id, None),
        site_id=site_id,
    )


async def load_own_page_notf_levels(
    session: AsyncSession,
    *,
    member_id: str,
    page_id: str,
    category_id: int | None,
    site_id: int,
) -> PageNotfLevels:
    """The member's own page, category and site levels for one page, groups excluded."""
    prefs = await load_applicable_page_notf_prefs(
        session,
        page_id=page_id,
        category_id=category_id,
        subject_ids=[member_id],
        site_id=site_id,
    )
    for_page = next((pref.level for pref in prefs if pref.page_id == page_id), None)
    for_category = next(
        (pref.level for pref in prefs if pref.category_id is not None),
        None,
    )
    for_whole_site = next((pref.level for pref in prefs if pref.whole_site), None)
    return PageNotfLevels(
        for_page=for_page,
        for_category=for_category,
        for_whole_site=for_whole_site,
    )
