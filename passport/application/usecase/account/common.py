"""Shared account response models."""

from datetime import datetime

from pydantic import BaseModel

from passport.domain.model import Identity
from passport.domain.value import AccountStatus, AdvisorStatus, Role, SocialProvider


class IdentityResponse(BaseModel):
    """Identity as shown to its owner and to administrators."""

    identity_id: str
    login_handle: str
    display_name: str
    contact_id: str | None
    role: Role
    account_status: AccountStatus
    advisor_status: AdvisorStatus
    points: int
    password_initialized: bool
    linked_providers: list[SocialProvider]
    created_at: datetime

    @classmethod
    def from_identity(cls, identity: Identity) -> "IdentityResponse":
        return cls(
            identity_id=str(identity.id),
            login_handle=str(identity.login_handle),
            display_name=str(identity.display_name),
            contact_id=str(identity.contact_id) if identity.contact_id else None,
            role=identity.role,
            account_status=identity.account_status,
            advisor_status=identity.advisor_status,
            points=identity.points,
            password_initialized=identity.password_initialized,
            linked_providers=sorted(
                {link.provider for link in identity.linked_social_accounts},
                key=lambda provider: provider.value,
            ),
            created_at=identity.created_at,
        )
