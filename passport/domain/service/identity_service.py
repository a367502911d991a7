"""Identity resolution for local and social login."""

from collections.abc import Callable

import logfire
from pydantic import ValidationError

from passport.domain.error import (
    AccountNotActiveError,
    ConflictError,
    DuplicateHandleError,
    DuplicateSocialLinkError,
    InvalidCredentialsError,
    InvalidFieldError,
    NotFoundError,
)
from passport.domain.model.identity import Identity
from passport.domain.repository import IdentityRepository
from passport.domain.value import (
    AccountStatus,
    ContactId,
    DisplayName,
    IdentityId,
    LoginHandle,
    SocialProfile,
    SocialProvider,
)

from .base import Service
from .handle_generator import generate_social_handle
from .password import PasswordHasher


class IdentityResolver(Service):
    """Domain service that turns login events into a stable identity."""

    def __init__(
        self,
        identity_repository: IdentityRepository,
        password_hasher: PasswordHasher,
        handle_generation_attempts: int = 5,
        handle_generator: Callable[[SocialProvider], str] = generate_social_handle,
    ) -> None:
        """Initialize identity resolver.

        Args:
            identity_repository: Repository for identity persistence
            password_hasher: Slow salted hash used for credentials
            handle_generation_attempts: Bound on generated-handle collisions
            handle_generator: Produces candidate handles for social identities
        """
        self.identity_repository = identity_repository
        self.password_hasher = password_hasher
        self.handle_generation_attempts = handle_generation_attempts
        self.handle_generator = handle_generator

    async def get_by_id(self, identity_id: IdentityId) -> Identity:
        """Get identity by ID.

        Raises:
            NotFoundError: If the identity does not exist or is deleted
        """
        identity = await self.identity_repository.find_by_id(identity_id)
        if not identity:
            raise NotFoundError("User", str(identity_id))
        return identity

    async def register_local(
        self,
        login_handle: str,
        raw_password: str,
        display_name: str,
        contact_id: str | None = None,
    ) -> Identity:
        """Create an identity from local signup.

        Args:
            login_handle: Requested login handle
            raw_password: Password chosen by the user
            display_name: Human-facing name
            contact_id: Optional chat handle

        Returns:
            The created identity

        Raises:
            DuplicateHandleError: If the handle is already taken
            InvalidFieldError: If the handle or names are blank or too long
        """
        with logfire.span("identity_resolver.register_local", handle=login_handle):
            try:
                handle = LoginHandle(login_handle)
                DisplayName(display_name)
                if contact_id:
                    ContactId(contact_id)
            except ValidationError as e:
                raise InvalidFieldError.from_validation(e) from e

            if await self.identity_repository.find_by_handle(handle):
                logfire.info("Signup rejected, handle taken", handle=login_handle)
                raise DuplicateHandleError(login_handle)

            identity = Identity.create_local(
                login_handle=login_handle,
                credential_hash=self.password_hasher.hash(raw_password),
                display_name=display_name,
                contact_id=contact_id,
            )
            saved = await self.identity_repository.save(identity)
            logfire.info(
                "Local identity created", identity_id=str(saved.id), handle=login_handle
            )
            return saved

    async def resolve_local(self, login_handle: str, raw_password: str) -> Identity:
        """Authenticate a handle/password pair.

        An unknown handle still costs one hash verification, and both failure
        cases raise the same error.

        Raises:
            InvalidCredentialsError: If the handle is unknown or the password wrong
            AccountNotActiveError: If the credentials match but the account is
                not active
        """
        with logfire.span("identity_resolver.resolve_local", handle=login_handle):
            identity = await self._find_by_raw_handle(login_handle)

            if identity is None:
                self.password_hasher.verify_dummy(raw_password)
                logfire.info("Local login failed", handle=login_handle, reason="unknown_handle")
                raise InvalidCredentialsError()

            if not self.password_hasher.verify(raw_password, identity.credential_hash):
                logfire.info(
                    "Local login failed",
                    handle=login_handle,
                    reason="password_mismatch",
                    identity_id=str(identity.id),
                )
                raise InvalidCredentialsError()

            self._require_active(identity)
            logfire.info("Local login succeeded", identity_id=str(identity.id))
            return identity

    async def _find_by_raw_handle(self, login_handle: str) -> Identity | None:
        try:
            handle = LoginHandle(login_handle)
        except ValidationError:
            return None
        return await self.identity_repository.find_by_handle(handle)

    async def resolve_or_create_social(self, profile: SocialProfile) -> Identity:
        """Find the identity linked to a social account, creating it if new.

        Existing identities are returned unchanged: display name and email
        are not refreshed from the provider on re-login.

        Args:
            profile: Normalized provider profile

        Returns:
            The linked identity

        Raises:
            ConflictError: If no unique handle could be generated
            AccountNotActiveError: If the linked account is not active
        """
        with logfire.span(
            "identity_resolver.resolve_or_create_social",
            provider=profile.provider.value,
            provider_user_id=profile.provider_user_id,
        ):
            existing = await self.identity_repository.find_by_social_link(
                profile.provider, profile.provider_user_id
            )
            if existing:
                self._require_active(existing)
                logfire.info("Social login matched", identity_id=str(existing.id))
                return existing

            return await self._create_social(profile)

    async def _create_social(self, profile: SocialProfile) -> Identity:
        link = profile.to_link()

        for attempt in range(1, self.handle_generation_attempts + 1):
            candidate = Identity.create_with_social(
                login_handle=self.handle_generator(profile.provider),
                unusable_credential_hash=self.password_hasher.unusable_hash(),
                display_name=profile.display_name,
                link=link,
            )
            try:
                saved = await self.identity_repository.save(candidate)
            except DuplicateHandleError as e:
                logfire.warn(
                    "Generated handle collided, retrying",
                    handle=e.login_handle,
                    attempt=attempt,
                )
                continue
            except DuplicateSocialLinkError:
                # Another request created the identity first
                winner = await self.identity_repository.find_by_social_link(
                    profile.provider, profile.provider_user_id
                )
                if winner is None:
                    raise
                logfire.info(
                    "Social identity created concurrently, using existing",
                    identity_id=str(winner.id),
                )
                self._require_active(winner)
                return winner

            logfire.info(
                "Social identity created",
                identity_id=str(saved.id),
                provider=profile.provider.value,
                handle=str(saved.login_handle),
            )
            return saved

        logfire.error(
            "Could not generate a unique login handle",
            provider=profile.provider.value,
            attempts=self.handle_generation_attempts,
        )
        raise ConflictError(
            f"Could not generate a unique login handle after "
            f"{self.handle_generation_attempts} attempts"
        )

    @staticmethod
    def _require_active(identity: Identity) -> None:
        if identity.account_status != AccountStatus.ACTIVE:
            raise AccountNotActiveError(identity.account_status.value)
