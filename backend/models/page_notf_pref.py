"""Page notification preference persistence model."""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    SmallInteger,
    String,
    UniqueConstraint,
)
from sqlmodel import Field, SQLModel

from .page import MAX_PAGE_ID_LENGTH

# Keep in sync with the page_notf_prefs migration.
ONE_SCOPE_CHECK = (
    "(CASE WHEN page_id IS NOT NULL THEN 1 ELSE 0 END"
    " + CASE WHEN pages_in_category_id IS NOT NULL THEN 1 ELSE 0 END"
    " + CASE WHEN pages_in_whole_site IS NOT NULL THEN 1 ELSE 0 END) = 1"
)
WHOLE_SITE_NULL_OR_TRUE_CHECK = "pages_in_whole_site IS NULL OR pages_in_whole_site"
NOTF_LEVEL_RANGE_CHECK = "notf_level BETWEEN 1 AND 9"
# WatchingFirst (5) is about new topics, which cannot appear inside one page.
PAGE_NOT_WATCHING_FIRST_CHECK = "page_id IS NULL OR notf_level <> 5"

PAGE_UNIQUE_NAME = "ux_page_notf_prefs_site_page_people"
CATEGORY_UNIQUE_NAME = "ux_page_notf_prefs_site_category_people"
WHOLE_SITE_UNIQUE_NAME = "ux_page_notf_prefs_site_wholesite_people"


class PageNotfPrefRow(SQLModel, table=True):
    """One member's (or group's) notification level for a page, category or the site."""

    __tablename__ = "page_notf_prefs"
    __table_args__ = (
        CheckConstraint(ONE_SCOPE_CHECK, name="ck_page_notf_prefs_one_scope"),
        CheckConstraint(
            WHOLE_SITE_NULL_OR_TRUE_CHECK,
            name="ck_page_notf_prefs_wholesite_null_or_true",
        ),
        CheckConstraint(NOTF_LEVEL_RANGE_CHECK, name="ck_page_notf_prefs_level_range"),
        CheckConstraint(
            PAGE_NOT_WATCHING_FIRST_CHECK,
            name="ck_page_notf_prefs_page_not_watching_first",
        ),
        UniqueConstraint("site_id", "page_id", "people_id", name=PAGE_UNIQUE_NAME),
        UniqueConstraint(
            "site_id",
            "pages_in_category_id",
            "people_id",
            name=CATEGORY_UNIQUE_NAME,
        ),
        UniqueConstraint(
            "site_id",
            "pages_in_whole_site",
            "people_id",
            name=WHOLE_SITE_UNIQUE_NAME,
        ),
    )

    id: int | None = Field(default=None, primary_key=True)
    site_id: int = Field(sa_column=Column(Integer, nullable=False))
    people_id: str = Field(
        sa_column=Column(
            String(36),
            ForeignKey("members.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    notf_level: int = Field(sa_column=Column(SmallInteger, nullable=False))
    page_id: str | None = Field(
        default=None,
        sa_column=Column(
            String(MAX_PAGE_ID_LENGTH),
            ForeignKey("pages.id", ondelete="CASCADE"),
            nullable=True,
        ),
    )
    pages_in_category_id: int | None = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("categories.id", ondelete="CASCADE"),
            nullable=True,
        ),
    )
    # NULL rather than false so the whole-site unique constraint allows
    # one true row per subject.
    pages_in_whole_site: bool | None = Field(
        default=None,
        sa_column=Column(Boolean, nullable=True),
    )
