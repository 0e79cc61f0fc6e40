"""SQLAlchemy table definitions for Trove.

Used through SQLAlchemy Core; rows are mapped to the immutable domain
models by hand in ``trove.persistence.mappers``. They match the schema
created by the Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (owned by the account service, read here)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("username", String(50), nullable=False, unique=True),
    Column("email", String(255), nullable=False, unique=True),  # Stored lowercased
    Column("first_name", String(100), nullable=True),
    Column("last_name", String(100), nullable=True),
    Column("profile_picture", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
)

# ============================================================================
# COMMUNITIES TABLE
# ============================================================================
communities_table = Table(
    "communities",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("name", String(100), nullable=False),
    Column("description", String(500), nullable=False, server_default=""),
    Column("category", String(50), nullable=False),
    Column(
        "creator_id", UUID, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    ),
    # Ordered roster: [{"user_id", "role", "joined_at"}, ...]
    Column("members", JSONB, nullable=False, server_default=text("'[]'::jsonb")),
    # {"country", "city", "coordinates": {"latitude", "longitude"}}
    Column("location", JSONB, nullable=True),
    Column("is_public", Boolean, nullable=False, server_default=text("true")),
    Column("max_members", Integer, nullable=False, server_default="100"),
    Column("tags", ARRAY(String(100)), nullable=False, server_default="{}"),
    Column("rules", ARRAY(String(200)), nullable=False, server_default="{}"),
    Column("cover_image", Text, nullable=False, server_default=""),
    # Optimistic-concurrency counter, bumped on every write
    Column("version", Integer, nullable=False, server_default="1"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        "max_members BETWEEN 2 AND 1000", name="ck_communities_max_members"
    ),
    CheckConstraint("version >= 1", name="ck_communities_version"),
)

Index("idx_communities_category", communities_table.c.category)
Index("idx_communities_created_at", communities_table.c.created_at)
Index("idx_communities_creator_id", communities_table.c.creator_id)
Index(
    "idx_communities_members",
    communities_table.c.members,
    postgresql_using="gin",
    postgresql_ops={"members": "jsonb_path_ops"},
)

# ============================================================================
# INVITATIONS TABLE
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "community_id",
        UUID,
        ForeignKey("communities.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column(
        "inviter_id", UUID, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    ),
    Column("invitee_email", String(255), nullable=False),
    Column(
        "invitee_user_id",
        UUID,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    # SHA-256 hex of the bearer token; the token itself is never stored
    Column("token_digest", String(64), nullable=False, unique=True),
    Column("message", String(500), nullable=False, server_default=""),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("declined_at", TIMESTAMP(timezone=True), nullable=True),
    Column("cancelled_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        "status IN ('pending', 'accepted', 'declined', 'expired', 'cancelled')",
        name="ck_invitations_status",
    ),
)

# At most one pending invitation per community/email
Index(
    "uq_invitations_pending_email",
    invitations_table.c.community_id,
    invitations_table.c.invitee_email,
    unique=True,
    postgresql_where=text("status = 'pending'"),
)
Index(
    "idx_invitations_community_created",
    invitations_table.c.community_id,
    invitations_table.c.created_at,
)
Index("idx_invitations_invitee_email", invitations_table.c.invitee_email)
Index(
    "idx_invitations_pending_expiry",
    invitations_table.c.expires_at,
    postgresql_where=text("status = 'pending'"),
)
