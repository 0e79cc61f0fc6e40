"""initial_schema

Create the schema for Trove:
- Users (profiles mirrored from the account service)
- Communities (roster stored inline as JSONB, optimistic version counter)
- Invitations (hashed bearer tokens, one pending invitation per email)

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2026-10-18 09:12:44.318502

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2b7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),  # Stored lowercased
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("profile_picture", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    # ========================================================================
    # COMMUNITIES table
    # ========================================================================
    op.create_table(
        "communities",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=False, server_default=""),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("creator_id", sa.UUID(), nullable=False),
        sa.Column(
            "members",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("location", postgresql.JSONB(), nullable=True),
        sa.Column(
            "is_public", sa.Boolean(), nullable=False, server_default=sa.text("true")
        ),
        sa.Column("max_members", sa.Integer(), nullable=False, server_default="100"),
        sa.Column(
            "tags", postgresql.ARRAY(sa.String(100)), nullable=False, server_default="{}"
        ),
        sa.Column(
            "rules",
            postgresql.ARRAY(sa.String(200)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("cover_image", sa.Text(), nullable=False, server_default=""),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["creator_id"], ["users.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "max_members BETWEEN 2 AND 1000", name="ck_communities_max_members"
        ),
        sa.CheckConstraint("version >= 1", name="ck_communities_version"),
    )
    op.create_index("idx_communities_category", "communities", ["category"])
    op.create_index("idx_communities_created_at", "communities", ["created_at"])
    op.create_index("idx_communities_creator_id", "communities", ["creator_id"])
    # Membership lookups use members @> '[{"user_id": ...}]'
    op.create_index(
        "idx_communities_members",
        "communities",
        ["members"],
        postgresql_using="gin",
        postgresql_ops={"members": "jsonb_path_ops"},
    )

    # ========================================================================
    # INVITATIONS table
    # ========================================================================
    op.create_table(
        "invitations",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("community_id", sa.UUID(), nullable=False),
        sa.Column("inviter_id", sa.UUID(), nullable=False),
        sa.Column("invitee_email", sa.String(255), nullable=False),
        sa.Column("invitee_user_id", sa.UUID(), nullable=True),
        sa.Column("token_digest", sa.String(64), nullable=False),
        sa.Column("message", sa.String(500), nullable=False, server_default=""),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("accepted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("declined_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("cancelled_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["community_id"], ["communities.id"], ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(["inviter_id"], ["users.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(
            ["invitee_user_id"], ["users.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token_digest", name="uq_invitations_token_digest"),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'declined', 'expired', 'cancelled')",
            name="ck_invitations_status",
        ),
    )
    op.create_index(
        "uq_invitations_pending_email",
        "invitations",
        ["community_id", "invitee_email"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )
    op.create_index(
        "idx_invitations_community_created",
        "invitations",
        ["community_id", "created_at"],
    )
    op.create_index("idx_invitations_invitee_email", "invitations", ["invitee_email"])
    op.create_index(
        "idx_invitations_pending_expiry",
        "invitations",
        ["expires_at"],
        postgresql_where=sa.text("status = 'pending'"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_invitations_pending_expiry", table_name="invitations")
    op.drop_index("idx_invitations_invitee_email", table_name="invitations")
    op.drop_index("idx_invitations_community_created", table_name="invitations")
    op.drop_index("uq_invitations_pending_email", table_name="invitations")
    op.drop_table("invitations")

    op.drop_index("idx_communities_members", table_name="communities")
    op.drop_index("idx_communities_creator_id", table_name="communities")
    op.drop_index("idx_communities_created_at", table_name="communities")
    op.drop_index("idx_communities_category", table_name="communities")
    op.drop_table("communities")

    op.drop_table("users")
