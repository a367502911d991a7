"""Account mutations with optimistic concurrency."""

from collections.abc import Callable, Iterable
from typing import TypeVar

import logfire

from passport.domain.error import ForbiddenError, NotFoundError, StaleIdentityError
from passport.domain.model.identity import AdvisorProfile, Identity
from passport.domain.repository import IdentityRepository
from passport.domain.value import PRIVILEGED_ROLES, AdvisorStatus, IdentityId, Role

from . import account_state
from .account_state import AdvisorOutcome
from .base import Service
from .password import PasswordHasher

R = TypeVar("R")


def require_privileged(caller_roles: Iterable[Role], action: str) -> None:
    """Raise ForbiddenError unless the caller is a MANAGER or MASTER."""
    if not PRIVILEGED_ROLES.intersection(caller_roles):
        raise ForbiddenError(action)


class AccountService(Service):
    """Domain service applying state transitions to stored identities.

    Every mutation loads the identity, applies a pure command from
    ``account_state`` and saves the result. A save that loses a race to a
    concurrent writer is retried against a fresh snapshot, so the retried
    command observes the other writer's effect.
    """

    def __init__(
        self,
        identity_repository: IdentityRepository,
        password_hasher: PasswordHasher,
        max_attempts: int = 3,
    ) -> None:
        """Initialize account service.

        Args:
            identity_repository: Repository for identity persistence
            password_hasher: Hash used for password transitions
            max_attempts: Saves attempted before a conflict is surfaced
        """
        self.identity_repository = identity_repository
        self.password_hasher = password_hasher
        self.max_attempts = max_attempts

    async def get_identity(self, identity_id: IdentityId) -> Identity:
        """Get identity by ID.

        Raises:
            NotFoundError: If the identity does not exist or is deleted
        """
        identity = await self.identity_repository.find_by_id(identity_id)
        if not identity:
            raise NotFoundError("User", str(identity_id))
        return identity

    async def _apply(
        self,
        identity_id: IdentityId,
        operation: str,
        command: Callable[[Identity], tuple[Identity, R]],
    ) -> tuple[Identity, R]:
        for attempt in range(1, self.max_attempts + 1):
            identity = await self.get_identity(identity_id)
            updated, result = command(identity)
            if updated is identity:
                return identity, result
            try:
                saved = await self.identity_repository.save(updated)
            except StaleIdentityError:
                logfire.warn(
                    "Concurrent identity update, retrying",
                    operation=operation,
                    identity_id=str(identity_id),
                    attempt=attempt,
                )
                if attempt == self.max_attempts:
                    raise
                continue
            return saved, result
        raise AssertionError("unreachable")

    async def _mutate(
        self,
        identity_id: IdentityId,
        operation: str,
        command: Callable[[Identity], Identity],
    ) -> Identity:
        with logfire.span(f"account_service.{operation}", identity_id=str(identity_id)):
            saved, _ = await self._apply(
                identity_id, operation, lambda identity: (command(identity), None)
            )
            logfire.info("Identity updated", operation=operation, identity_id=str(identity_id))
            return saved

    async def initialize_password(
        self, identity_id: IdentityId, raw_password: str
    ) -> Identity:
        """Set the first password for an identity.

        Raises:
            PasswordAlreadyInitializedError: If a password was already set
        """
        return await self._mutate(
            identity_id,
            "initialize_password",
            lambda identity: account_state.initialize_password(
                identity, raw_password, self.password_hasher
            ),
        )

    async def change_password(
        self, identity_id: IdentityId, current_password: str, new_password: str
    ) -> Identity:
        """Change a known password.

        Raises:
            PasswordNotInitializedError: If no password has been set yet
            CurrentPasswordMismatchError: If the current password is wrong
        """
        return await self._mutate(
            identity_id,
            "change_password",
            lambda identity: account_state.change_password(
                identity, current_password, new_password, self.password_hasher
            ),
        )

    async def add_points(self, identity_id: IdentityId, amount: int) -> Identity:
        """Add points to an identity's balance.

        Raises:
            InvalidAmountError: If ``amount <= 0``
        """
        return await self._mutate(
            identity_id,
            "add_points",
            lambda identity: account_state.add_points(identity, amount),
        )

    async def update_basic_info(
        self, identity_id: IdentityId, display_name: str, contact_id: str | None
    ) -> Identity:
        return await self._mutate(
            identity_id,
            "update_basic_info",
            lambda identity: account_state.update_basic_info(
                identity, display_name, contact_id
            ),
        )

    async def create_profile(
        self, identity_id: IdentityId, profile: AdvisorProfile
    ) -> Identity:
        """Attach an advisor profile.

        Raises:
            ProfileAlreadyExistsError: If one already exists
        """
        return await self._mutate(
            identity_id,
            "create_profile",
            lambda identity: account_state.create_profile(identity, profile),
        )

    async def get_profile(self, identity_id: IdentityId) -> AdvisorProfile:
        """Get an identity's advisor profile.

        Raises:
            NotFoundError: If the identity or its profile is absent
        """
        identity = await self.get_identity(identity_id)
        if identity.profile is None:
            raise NotFoundError("Profile", str(identity_id))
        return identity.profile

    async def update_profile(
        self,
        identity_id: IdentityId,
        main_category: str,
        intro: str,
        career_years: int,
    ) -> Identity:
        return await self._mutate(
            identity_id,
            "update_profile",
            lambda identity: account_state.update_profile(
                identity, main_category, intro, career_years
            ),
        )

    async def deactivate_profile(self, identity_id: IdentityId) -> Identity:
        return await self._mutate(
            identity_id, "deactivate_profile", account_state.deactivate_profile
        )

    async def apply_for_advisor(self, identity_id: IdentityId) -> AdvisorOutcome:
        """Request advisor promotion for an identity.

        Returns:
            Outcome message and resulting advisor status
        """
        with logfire.span(
            "account_service.apply_for_advisor", identity_id=str(identity_id)
        ):
            _, outcome = await self._apply(
                identity_id, "apply_for_advisor", account_state.apply_for_advisor
            )
            logfire.info(
                "Advisor application processed",
                identity_id=str(identity_id),
                advisor_status=outcome.advisor_status.value,
                changed=outcome.changed,
            )
            return outcome

    async def approve_advisor(
        self, caller_roles: Iterable[Role], identity_id: IdentityId
    ) -> AdvisorOutcome:
        """Promote an identity to advisor.

        Args:
            caller_roles: Roles of the authenticated caller
            identity_id: Identity to promote

        Returns:
            Outcome message; approving twice reports "already approved"

        Raises:
            ForbiddenError: If the caller is neither MANAGER nor MASTER
            NotFoundError: If the identity does not exist
        """
        require_privileged(caller_roles, "approve advisors")
        with logfire.span(
            "account_service.approve_advisor", identity_id=str(identity_id)
        ):
            _, outcome = await self._apply(
                identity_id, "approve_advisor", account_state.approve_advisor
            )
            logfire.info(
                "Advisor approval processed",
                identity_id=str(identity_id),
                changed=outcome.changed,
            )
            return outcome

    async def list_pending_advisors(
        self, caller_roles: Iterable[Role]
    ) -> list[Identity]:
        """List identities waiting for advisor approval.

        Raises:
            ForbiddenError: If the caller is neither MANAGER nor MASTER
        """
        require_privileged(caller_roles, "list advisor applications")
        return await self.identity_repository.find_by_advisor_status(
            AdvisorStatus.PENDING
        )

    async def list_identities(
        self, caller_roles: Iterable[Role], offset: int = 0, limit: int = 20
    ) -> list[Identity]:
        """List identities page by page.

        Raises:
            ForbiddenError: If the caller is neither MANAGER nor MASTER
        """
        require_privileged(caller_roles, "list users")
        return await self.identity_repository.list(offset=offset, limit=limit)
