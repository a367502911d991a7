"""Identity aggregate root.

An identity is one user account. It is created by local signup or by the
first social login, and is changed only through the command functions in
``passport.domain.service.account_state`` followed by an explicit save.
"""

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import Field, model_validator

from passport.domain.model.common import DomainModel
from passport.domain.value import (
    AccountStatus,
    AdvisorStatus,
    ContactId,
    DisplayName,
    IdentityId,
    LoginHandle,
    Role,
    SocialLink,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AdvisorProfile(DomainModel):
    """Profile an identity presents when acting as an advisor."""

    main_category: str = Field(min_length=1, max_length=50)
    intro: str = Field(default="", max_length=1000)
    career_years: int = Field(default=0, ge=0)
    active: bool = True


class Identity(DomainModel):
    """Identity aggregate root.

    Invariants:
    - ``advisor_status == APPROVED`` implies ``role == ADVISOR``.
    - ``points`` never goes negative.
    - Social links are unique by (provider, provider_user_id).
    """

    id: IdentityId
    login_handle: LoginHandle
    credential_hash: str
    password_initialized: bool = False
    display_name: DisplayName
    contact_id: ContactId | None = None
    role: Role = Role.USER
    account_status: AccountStatus = AccountStatus.ACTIVE
    advisor_status: AdvisorStatus = AdvisorStatus.NOT_REQUESTED
    linked_social_accounts: frozenset[SocialLink] = frozenset()
    points: int = Field(default=0, ge=0)
    profile: AdvisorProfile | None = None
    version: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: datetime | None = None

    @model_validator(mode="after")
    def check_advisor_role(self) -> "Identity":
        if self.advisor_status == AdvisorStatus.APPROVED and self.role != Role.ADVISOR:
            raise ValueError("Approved advisors must hold the ADVISOR role")
        return self

    @property
    def is_deleted(self) -> bool:
        return (
            self.deleted_at is not None
            or self.account_status == AccountStatus.DELETED
        )

    @property
    def roles(self) -> list[Role]:
        return [self.role]

    @classmethod
    def create_local(
        cls,
        login_handle: str,
        credential_hash: str,
        display_name: str,
        contact_id: str | None = None,
    ) -> "Identity":
        """Create an identity from local signup.

        The caller chose the password, so it counts as initialized.
        """
        return cls(
            id=IdentityId(uuid4()),
            login_handle=LoginHandle(login_handle),
            credential_hash=credential_hash,
            password_initialized=True,
            display_name=DisplayName(display_name),
            contact_id=ContactId(contact_id) if contact_id else None,
        )

    @classmethod
    def create_with_social(
        cls,
        login_handle: str,
        unusable_credential_hash: str,
        display_name: str,
        link: SocialLink,
    ) -> "Identity":
        """Create an identity on first social login.

        The credential hash is a hash of a random secret nobody knows, so the
        password stays uninitialized until the user sets one.
        """
        return cls(
            id=IdentityId(uuid4()),
            login_handle=LoginHandle(login_handle),
            credential_hash=unusable_credential_hash,
            password_initialized=False,
            display_name=DisplayName(display_name[:50]),
            linked_social_accounts=frozenset({link}),
        )
