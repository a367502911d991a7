"""Mappers for converting between database rows and domain models.

Since domain models are immutable Pydantic models, mapping is manual rather
than SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Iterable
from uuid import UUID

from passport.domain.model import AdvisorProfile, Identity
from passport.domain.value import (
    AccountStatus,
    AdvisorStatus,
    ContactId,
    DisplayName,
    IdentityId,
    LoginHandle,
    Role,
    SocialLink,
    SocialProvider,
)


def row_to_social_link(row: Dict[str, Any]) -> SocialLink:
    return SocialLink(
        provider=SocialProvider(row["provider"]),
        provider_user_id=row["provider_user_id"],
        email=row.get("email"),
    )


def row_to_identity(
    row: Dict[str, Any], link_rows: Iterable[Dict[str, Any]]
) -> Identity:
    """Convert database rows to the Identity domain model.

    Args:
        row: Identity row as dict
        link_rows: The identity's social link rows

    Returns:
        Identity domain model
    """
    profile = None
    if row.get("profile_main_category") is not None:
        profile = AdvisorProfile(
            main_category=row["profile_main_category"],
            intro=row.get("profile_intro") or "",
            career_years=row.get("profile_career_years") or 0,
            active=bool(row.get("profile_active")),
        )

    identity_id = row["id"] if isinstance(row["id"], UUID) else UUID(row["id"])
    return Identity(
        id=IdentityId(identity_id),
        login_handle=LoginHandle(row["login_handle"]),
        credential_hash=row["credential_hash"],
        password_initialized=row["password_initialized"],
        display_name=DisplayName(row["display_name"]),
        contact_id=ContactId(row["contact_id"]) if row.get("contact_id") else None,
        role=Role(row["role"]),
        account_status=AccountStatus(row["account_status"]),
        advisor_status=AdvisorStatus(row["advisor_status"]),
        linked_social_accounts=frozenset(row_to_social_link(r) for r in link_rows),
        points=row["points"],
        profile=profile,
        version=row["version"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def identity_to_dict(identity: Identity) -> Dict[str, Any]:
    """Convert Identity domain model to an identities row.

    Social links are stored separately and are not included.
    """
    profile = identity.profile
    return {
        "id": identity.id,
        "login_handle": identity.login_handle.root,
        "credential_hash": identity.credential_hash,
        "password_initialized": identity.password_initialized,
        "display_name": identity.display_name.root,
        "contact_id": identity.contact_id.root if identity.contact_id else None,
        "role": identity.role.value,
        "account_status": identity.account_status.value,
        "advisor_status": identity.advisor_status.value,
        "points": identity.points,
        "profile_main_category": profile.main_category if profile else None,
        "profile_intro": profile.intro if profile else None,
        "profile_career_years": profile.career_years if profile else None,
        "profile_active": profile.active if profile else None,
        "version": identity.version,
        "created_at": identity.created_at,
        "updated_at": identity.updated_at,
        "deleted_at": identity.deleted_at,
    }


def social_link_to_dict(identity_id: IdentityId, link: SocialLink) -> Dict[str, Any]:
    return {
        "identity_id": identity_id,
        "provider": link.provider.value,
        "provider_user_id": link.provider_user_id,
        "email": link.email,
    }
