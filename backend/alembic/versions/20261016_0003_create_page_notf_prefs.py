"""Create page notification preference table."""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "20261016_0003"
down_revision: str | None = "20261016_0002"
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None

# Same expressions as models/page_notf_pref.py.
ONE_SCOPE_CHECK = (
    "(CASE WHEN page_id IS NOT NULL THEN 1 ELSE 0 END"
    " + CASE WHEN pages_in_category_id IS NOT NULL THEN 1 ELSE 0 END"
    " + CASE WHEN pages_in_whole_site IS NOT NULL THEN 1 ELSE 0 END) = 1"
)


def upgrade() -> None:
    op.create_table(
        "page_notf_prefs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("site_id", sa.Integer(), nullable=False),
        sa.Column("people_id", sa.String(length=36), nullable=False),
        sa.Column("notf_level", sa.SmallInteger(), nullable=False),
        sa.Column("page_id", sa.String(length=32), nullable=True),
        sa.Column("pages_in_category_id", sa.Integer(), nullable=True),
        sa.Column("pages_in_whole_site", sa.Boolean(), nullable=True),
        sa.CheckConstraint(ONE_SCOPE_CHECK, name="ck_page_notf_prefs_one_scope"),
        sa.CheckConstraint(
            "pages_in_whole_site IS NULL OR pages_in_whole_site",
            name="ck_page_notf_prefs_wholesite_null_or_true",
        ),
        sa.CheckConstraint(
            "notf_level BETWEEN 1 AND 9",
            name="ck_page_notf_prefs_level_range",
        ),
        sa.CheckConstraint(
            "page_id IS NULL OR notf_level <> 5",
            name="ck_page_notf_prefs_page_not_watching_first",
        ),
        sa.ForeignKeyConstraint(["people_id"], ["members.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["page_id"], ["pages.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["pages_in_category_id"],
            ["categories.id"],
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint(
            "site_id",
            "page_id",
            "people_id",
            name="ux_page_notf_prefs_site_page_people",
        ),
        sa.UniqueConstraint(
            "site_id",
            "pages_in_category_id",
            "people_id",
            name="ux_page_notf_prefs_site_category_people",
        ),
        sa.UniqueConstraint(
            "site_id",
            "pages_in_whole_site",
            "people_id",
            name="ux_page_notf_prefs_site_wholesite_people",
        ),
    )
    op.create_index(
        "ix_page_notf_prefs_people_id",
        "page_notf_prefs",
        ["people_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_page_notf_prefs_people_id", table_name="page_notf_prefs")
    op.drop_table("page_notf_prefs")
