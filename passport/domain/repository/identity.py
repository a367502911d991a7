"""Identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from passport.domain.model.identity import Identity
from passport.domain.value import AdvisorStatus, IdentityId, LoginHandle, SocialProvider


class IdentityRepository(ABC):
    """Repository for the Identity aggregate.

    Every find excludes soft-deleted identities. Implementations must enforce
    uniqueness of ``login_handle`` and of each (provider, provider_user_id)
    social link, and must reject saves carrying a stale ``version``.
    """

    @abstractmethod
    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        """Find an identity by ID.

        Args:
            identity_id: The identity's unique identifier

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_handle(self, login_handle: LoginHandle) -> Optional[Identity]:
        """Find an identity by login handle.

        Args:
            login_handle: The handle used for local login

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_social_link(
        self, provider: SocialProvider, provider_user_id: str
    ) -> Optional[Identity]:
        """Find the identity a social account is linked to.

        Args:
            provider: The social login provider
            provider_user_id: The account's stable ID on that provider

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_advisor_status(self, status: AdvisorStatus) -> list[Identity]:
        """Find identities in the given advisor status, oldest first."""
        pass

    @abstractmethod
    async def list(self, offset: int = 0, limit: int = 20) -> list[Identity]:
        """List identities ordered by creation time.

        Args:
            offset: Number of identities to skip
            limit: Maximum number of identities to return

        Returns:
            A page of identities
        """
        pass

    @abstractmethod
    async def save(self, identity: Identity) -> Identity:
        """Save an identity (create or update).

        Creation and update are both atomic: an identity and its social links
        are stored together or not at all.

        Args:
            identity: The identity to save, carrying the version it was loaded at

        Returns:
            The saved identity with its version incremented

        Raises:
            DuplicateHandleError: If the login handle is taken by another identity
            DuplicateSocialLinkError: If a social link belongs to another identity
            StaleIdentityError: If the stored version differs from ``identity.version``
        """
        pass
