"""Domain value objects for identities and sessions.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

from enum import Enum

from pydantic import field_validator

from passport.domain.value.common import RootValueObject, ValueObject


class SocialProvider(str, Enum):
    """Supported social login providers."""

    KAKAO = "kakao"
    GOOGLE = "google"
    NAVER = "naver"


class Role(str, Enum):
    """Identity role, ordered from least to most privileged."""

    USER = "USER"
    ADVISOR = "ADVISOR"
    MANAGER = "MANAGER"
    MASTER = "MASTER"


PRIVILEGED_ROLES = frozenset({Role.MANAGER, Role.MASTER})


class AccountStatus(str, Enum):
    """Lifecycle status of an identity."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    BLOCKED = "BLOCKED"
    DELETED = "DELETED"


class AdvisorStatus(str, Enum):
    """Advisor promotion status.

    NOT_REQUESTED -> PENDING -> APPROVED, with REJECTED as the terminal
    alternative to APPROVED.
    """

    NOT_REQUESTED = "NOT_REQUESTED"
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class TokenKind(str, Enum):
    """Intended use of a signed token."""

    ACCESS = "access"
    REFRESH = "refresh"


class LoginHandle(RootValueObject[str]):
    """Unique login name, user-chosen or generated for social identities."""

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle is not blank and within length limits."""
        if not v.strip():
            raise ValueError("Login handle must not be blank")
        if len(v) > 25:
            raise ValueError("Login handle must be 1-25 characters")
        return v


class DisplayName(RootValueObject[str]):
    """Human-facing name."""

    @field_validator("root")
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        if not v.strip() or len(v) > 50:
            raise ValueError("Display name must be 1-50 characters")
        return v


class ContactId(RootValueObject[str]):
    """Chat or messenger handle used to reach the person behind an identity."""

    @field_validator("root")
    @classmethod
    def validate_contact_id(cls, v: str) -> str:
        if not v.strip() or len(v) > 100:
            raise ValueError("Contact id must be 1-100 characters")
        return v


class SocialLink(ValueObject):
    """A social account attached to an identity.

    Equality and hashing use only (provider, provider_user_id); email is
    informational.
    """

    provider: SocialProvider
    provider_user_id: str
    email: str | None = None

    @property
    def key(self) -> tuple[SocialProvider, str]:
        return (self.provider, self.provider_user_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SocialLink):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


class SocialProfile(ValueObject):
    """Provider profile normalized to the common shape."""

    provider: SocialProvider
    provider_user_id: str
    email: str | None = None
    display_name: str

    def to_link(self) -> SocialLink:
        """Build the social link this profile resolves to."""
        return SocialLink(
            provider=self.provider,
            provider_user_id=self.provider_user_id,
            email=self.email,
        )
