"""Domain value objects for identities and sessions."""

from passport.domain.value.identifiers import IdentityId
from passport.domain.value.types import (
    PRIVILEGED_ROLES,
    AccountStatus,
    AdvisorStatus,
    ContactId,
    DisplayName,
    LoginHandle,
    Role,
    SocialLink,
    SocialProfile,
    SocialProvider,
    TokenKind,
)

__all__ = [
    # Identifiers
    "IdentityId",
    # Types
    "AccountStatus",
    "AdvisorStatus",
    "ContactId",
    "DisplayName",
    "LoginHandle",
    "PRIVILEGED_ROLES",
    "Role",
    "SocialLink",
    "SocialProfile",
    "SocialProvider",
    "TokenKind",
]
