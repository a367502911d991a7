"""Test configuration and fixtures."""

import os

# Must be set before Settings is first instantiated
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTH__JWT_SECRET", "test-signing-key-not-for-production")

from passport.config import Settings  # noqa: E402
from passport.domain.model import AdvisorProfile, Identity  # noqa: E402
from passport.domain.value import (  # noqa: E402
    AdvisorStatus,
    Role,
    SocialLink,
    SocialProvider,
)
from passport.util.observability import configure_logfire  # noqa: E402

configure_logfire(Settings())


def make_identity(
    login_handle: str = "alice",
    credential_hash: str = "not-a-bcrypt-hash",
    display_name: str = "Alice",
    role: Role = Role.USER,
    advisor_status: AdvisorStatus = AdvisorStatus.NOT_REQUESTED,
    password_initialized: bool = True,
    links: list[tuple[SocialProvider, str, str | None]] | None = None,
    profile: AdvisorProfile | None = None,
    **overrides,
) -> Identity:
    """Helper function to build identities for tests.

    Args:
        login_handle: Login handle
        credential_hash: Stored credential; not a real hash unless given one
        display_name: Display name
        role: Role to assign
        advisor_status: Advisor status (APPROVED needs role ADVISOR)
        password_initialized: Whether a password counts as set
        links: (provider, provider_user_id, email) triples to link
        profile: Optional advisor profile
        **overrides: Any other Identity field

    Returns:
        Unsaved Identity with version 0
    """
    identity = Identity.create_local(
        login_handle=login_handle,
        credential_hash=credential_hash,
        display_name=display_name,
    )
    linked = frozenset(
        SocialLink(provider=provider, provider_user_id=user_id, email=email)
        for provider, user_id, email in (links or [])
    )
    return Identity.model_validate(
        {
            **identity.model_dump(),
            "role": role,
            "advisor_status": advisor_status,
            "password_initialized": password_initialized,
            "linked_social_accounts": linked,
            "profile": profile,
            **overrides,
        }
    )
