"""Create users, swipes and collections tables

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Initial schema: accounts, saved links, and user-owned collections.
How:   Portable column types (Uuid, JSON, timezone-aware DateTime) so the same
       revision applies to PostgreSQL and SQLite.

Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(150), nullable=False, comment="Login name, matched exactly"),
        sa.Column("password", sa.String(255), nullable=False, comment="bcrypt hash of the user's password"),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("google_token", sa.String(2048), nullable=True),
        sa.Column("stripe_customer_id", sa.String(255), nullable=True),
        sa.Column("two_fa_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("two_fa_secret", sa.String(255), nullable=True),
        sa.Column(
            "max_collections",
            sa.Integer(),
            nullable=True,
            server_default=sa.text("5"),
            comment="Maximum number of collections this user may own",
        ),
        sa.Column(
            "max_swipes_per_collection",
            sa.Integer(),
            nullable=True,
            server_default=sa.text("20"),
            comment="Maximum number of swipe ids per collection",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )

    op.create_table(
        "swipes",
        sa.Column("id", sa.Uuid(), nullable=False),
        # Opaque client-supplied id; intentionally no foreign key
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("platform", sa.String(100), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_swipes"),
    )

    op.create_table(
        "collections",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("created_by", sa.Uuid(), nullable=False),
        sa.Column("items", sa.JSON(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_collections"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], name="fk_collections_created_by_users"),
    )


def downgrade() -> None:
    op.drop_table("collections")
    op.drop_table("swipes")
    op.drop_table("users")
