"""Account state transitions.

Each command takes an identity snapshot and returns the updated snapshot.
Nothing is persisted here; callers save the result explicitly. Commands
that can legitimately do nothing (advisor apply/approve) return an outcome
instead of raising, and hand back the very same snapshot when unchanged.
"""

from pydantic import BaseModel, ValidationError

from passport.domain.error import (
    CurrentPasswordMismatchError,
    InvalidAmountError,
    InvalidFieldError,
    NotFoundError,
    PasswordAlreadyInitializedError,
    PasswordNotInitializedError,
    ProfileAlreadyExistsError,
)
from passport.domain.model.identity import AdvisorProfile, Identity, utcnow
from passport.domain.service.password import PasswordHasher
from passport.domain.value import AdvisorStatus, ContactId, DisplayName, Role

APPLY_ACCEPTED = "Advisor application submitted."
APPLY_ALREADY_PENDING = "Advisor application is already pending review."
APPLY_ALREADY_APPROVED = "Already an approved advisor."
APPLY_ALREADY_REJECTED = "Advisor application was already rejected."
APPROVE_ALREADY_APPROVED = "Already an approved advisor."
APPROVE_PROMOTED = "Promoted to advisor."


class AdvisorOutcome(BaseModel):
    """Result of an advisor transition."""

    message: str
    advisor_status: AdvisorStatus
    changed: bool


def _touch(identity: Identity, **changes) -> Identity:
    return identity.model_copy(update={**changes, "updated_at": utcnow()})


def initialize_password(
    identity: Identity, raw_password: str, hasher: PasswordHasher
) -> Identity:
    """Set the first password a social-only identity knows.

    Raises:
        PasswordAlreadyInitializedError: If a password was already set
    """
    if identity.password_initialized:
        raise PasswordAlreadyInitializedError()
    return _touch(
        identity,
        credential_hash=hasher.hash(raw_password),
        password_initialized=True,
    )


def change_password(
    identity: Identity,
    current_password: str,
    new_password: str,
    hasher: PasswordHasher,
) -> Identity:
    """Replace a known password.

    Raises:
        PasswordNotInitializedError: If no password has been set yet
        CurrentPasswordMismatchError: If ``current_password`` is wrong
    """
    if not identity.password_initialized:
        raise PasswordNotInitializedError()
    if not hasher.verify(current_password, identity.credential_hash):
        raise CurrentPasswordMismatchError()
    return _touch(identity, credential_hash=hasher.hash(new_password))


_APPLY_TRANSITIONS: dict[AdvisorStatus, tuple[AdvisorStatus, str]] = {
    AdvisorStatus.NOT_REQUESTED: (AdvisorStatus.PENDING, APPLY_ACCEPTED),
    AdvisorStatus.PENDING: (AdvisorStatus.PENDING, APPLY_ALREADY_PENDING),
    AdvisorStatus.APPROVED: (AdvisorStatus.APPROVED, APPLY_ALREADY_APPROVED),
    AdvisorStatus.REJECTED: (AdvisorStatus.REJECTED, APPLY_ALREADY_REJECTED),
}


def apply_for_advisor(identity: Identity) -> tuple[Identity, AdvisorOutcome]:
    """Request advisor promotion. Only NOT_REQUESTED moves (to PENDING)."""
    next_status, message = _APPLY_TRANSITIONS[identity.advisor_status]
    changed = next_status != identity.advisor_status
    outcome = AdvisorOutcome(
        message=message, advisor_status=next_status, changed=changed
    )
    if not changed:
        return identity, outcome
    return _touch(identity, advisor_status=next_status), outcome


def approve_advisor(identity: Identity) -> tuple[Identity, AdvisorOutcome]:
    """Promote an identity to advisor.

    Role and advisor status change together. Approving an approved advisor
    is a no-op.
    """
    if identity.advisor_status == AdvisorStatus.APPROVED:
        return identity, AdvisorOutcome(
            message=APPROVE_ALREADY_APPROVED,
            advisor_status=AdvisorStatus.APPROVED,
            changed=False,
        )
    updated = _touch(identity, advisor_status=AdvisorStatus.APPROVED, role=Role.ADVISOR)
    return updated, AdvisorOutcome(
        message=APPROVE_PROMOTED,
        advisor_status=AdvisorStatus.APPROVED,
        changed=True,
    )


def add_points(identity: Identity, amount: int) -> Identity:
    """Add a positive amount to the points balance.

    Raises:
        InvalidAmountError: If ``amount <= 0``
    """
    if amount <= 0:
        raise InvalidAmountError(amount)
    return _touch(identity, points=identity.points + amount)


def update_basic_info(
    identity: Identity, display_name: str, contact_id: str | None
) -> Identity:
    try:
        name = DisplayName(display_name)
        contact = ContactId(contact_id) if contact_id else None
    except ValidationError as e:
        raise InvalidFieldError.from_validation(e) from e
    return _touch(identity, display_name=name, contact_id=contact)


def create_profile(identity: Identity, profile: AdvisorProfile) -> Identity:
    """Attach an advisor profile.

    Raises:
        ProfileAlreadyExistsError: If the identity already has one
    """
    if identity.profile is not None:
        raise ProfileAlreadyExistsError()
    return _touch(identity, profile=profile)


def update_profile(
    identity: Identity, main_category: str, intro: str, career_years: int
) -> Identity:
    """Edit an existing advisor profile, keeping its active flag."""
    current = _require_profile(identity)
    profile = AdvisorProfile(
        main_category=main_category,
        intro=intro,
        career_years=career_years,
        active=current.active,
    )
    return _touch(identity, profile=profile)


def deactivate_profile(identity: Identity) -> Identity:
    current = _require_profile(identity)
    return _touch(identity, profile=current.model_copy(update={"active": False}))


def _require_profile(identity: Identity) -> AdvisorProfile:
    if identity.profile is None:
        raise NotFoundError("Profile", str(identity.id))
    return identity.profile
