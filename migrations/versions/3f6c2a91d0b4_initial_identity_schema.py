"""initial_identity_schema

Create the identity schema:
- Identities (login handle, credential hash, role, account and advisor state,
  points, embedded advisor profile)
- Social links (kakao, google, naver accounts attached to an identity)

Revision ID: 3f6c2a91d0b4
Revises:
Create Date: 2026-10-18 10:12:44.512309

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f6c2a91d0b4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # IDENTITIES table
    # ========================================================================
    op.create_table(
        "identities",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("login_handle", sa.String(25), nullable=False),
        sa.Column("credential_hash", sa.String(255), nullable=False),
        sa.Column(
            "password_initialized",
            sa.Boolean(),
            nullable=False,
            server_default="false",
        ),
        sa.Column("display_name", sa.String(50), nullable=False),
        sa.Column("contact_id", sa.String(100), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="USER"),
        sa.Column(
            "account_status", sa.String(20), nullable=False, server_default="ACTIVE"
        ),
        sa.Column(
            "advisor_status",
            sa.String(20),
            nullable=False,
            server_default="NOT_REQUESTED",
        ),
        sa.Column("points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("profile_main_category", sa.String(50), nullable=True),
        sa.Column("profile_intro", sa.Text(), nullable=True),
        sa.Column("profile_career_years", sa.Integer(), nullable=True),
        sa.Column("profile_active", sa.Boolean(), nullable=True),
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
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("login_handle", name="uq_identities_login_handle"),
        sa.CheckConstraint("points >= 0", name="ck_identities_points_non_negative"),
    )
    op.create_index(
        "idx_identities_advisor_status", "identities", ["advisor_status"]
    )

    # ========================================================================
    # SOCIAL_LINKS table
    # ========================================================================
    op.create_table(
        "social_links",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("identity_id", sa.UUID(), nullable=False),
        sa.Column("provider", sa.String(20), nullable=False),  # 'kakao', 'google', 'naver'
        sa.Column("provider_user_id", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["identity_id"], ["identities.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "provider", "provider_user_id", name="uq_social_link_provider_identity"
        ),
    )
    op.create_index(
        "idx_social_links_identity_id", "social_links", ["identity_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("social_links")
    op.drop_table("identities")
