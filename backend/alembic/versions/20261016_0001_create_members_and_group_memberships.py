"""Create members and group membership tables."""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "20261016_0001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None

TIMESTAMP_DEFAULT = sa.text("CURRENT_TIMESTAMP")


def upgrade() -> None:
    op.create_table(
        "members",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("username", sa.String(length=40), nullable=False),
        sa.Column(
            "is_group",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=TIMESTAMP_DEFAULT,
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=TIMESTAMP_DEFAULT,
            nullable=False,
        ),
    )
    op.create_index("ix_members_username", "members", ["username"], unique=True)

    op.create_table(
        "group_memberships",
        sa.Column("group_id", sa.String(length=36), nullable=False),
        sa.Column("member_id", sa.String(length=36), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=TIMESTAMP_DEFAULT,
            nullable=False,
        ),
        sa.CheckConstraint(
            "group_id <> member_id",
            name="ck_group_memberships_no_self",
        ),
        sa.ForeignKeyConstraint(
            ["group_id"],
            ["members.id"],
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["member_id"],
            ["members.id"],
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("group_id", "member_id"),
    )
    op.create_index(
        "ix_group_memberships_member_group",
        "group_memberships",
        ["member_id", "group_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(
        "ix_group_memberships_member_group",
        table_name="group_memberships",
    )
    op.drop_table("group_memberships")
    op.drop_index("ix_members_username", table_name="members")
    op.drop_table("members")
