"""Create category and page tables."""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "20261016_0002"
down_revision: str | None = "20261016_0001"
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None

TIMESTAMP_DEFAULT = sa.text("CURRENT_TIMESTAMP")


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("site_id", sa.Integer(), nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.ForeignKeyConstraint(["parent_id"], ["categories.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_categories_site_id", "categories", ["site_id"], unique=False)

    op.create_table(
        "pages",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("site_id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=TIMESTAMP_DEFAULT,
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_pages_site_id", "pages", ["site_id"], unique=False)
    op.create_index("ix_pages_category_id", "pages", ["category_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_pages_category_id", table_name="pages")
    op.drop_index("ix_pages_site_id", table_name="pages")
    op.drop_table("pages")
    op.drop_index("ix_categories_site_id", table_name="categories")
    op.drop_table("categories")
