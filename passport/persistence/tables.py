"""SQLAlchemy table definitions.

They match the schema defined in Alembic migrations.
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
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

HANDLE_CONSTRAINT = "uq_identities_login_handle"
SOCIAL_LINK_CONSTRAINT = "uq_social_link_provider_identity"

# ============================================================================
# IDENTITIES TABLE
# ============================================================================
identities_table = Table(
    "identities",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("login_handle", String(25), nullable=False),
    Column("credential_hash", String(255), nullable=False),
    Column("password_initialized", Boolean, nullable=False, server_default="false"),
    Column("display_name", String(50), nullable=False),
    Column("contact_id", String(100), nullable=True),
    Column("role", String(20), nullable=False, server_default="USER"),
    Column("account_status", String(20), nullable=False, server_default="ACTIVE"),
    Column(
        "advisor_status", String(20), nullable=False, server_default="NOT_REQUESTED"
    ),
    Column("points", Integer, nullable=False, server_default="0"),
    # Embedded advisor profile, all NULL when absent
    Column("profile_main_category", String(50), nullable=True),
    Column("profile_intro", Text, nullable=True),
    Column("profile_career_years", Integer, nullable=True),
    Column("profile_active", Boolean, nullable=True),
    Column("version", Integer, nullable=False, server_default="1"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    UniqueConstraint("login_handle", name=HANDLE_CONSTRAINT),
    CheckConstraint("points >= 0", name="ck_identities_points_non_negative"),
)

Index("idx_identities_advisor_status", identities_table.c.advisor_status)

# ============================================================================
# SOCIAL LINKS TABLE
# ============================================================================
social_links_table = Table(
    "social_links",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "identity_id",
        UUID(as_uuid=True),
        ForeignKey("identities.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("provider", String(20), nullable=False),  # 'kakao', 'google', 'naver'
    Column("provider_user_id", String(255), nullable=False),
    Column("email", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("provider", "provider_user_id", name=SOCIAL_LINK_CONSTRAINT),
)

Index("idx_social_links_identity_id", social_links_table.c.identity_id)
