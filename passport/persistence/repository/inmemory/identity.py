"""In-memory identity repository for testing."""

from typing import Optional

from passport.domain.error import (
    DuplicateHandleError,
    DuplicateSocialLinkError,
    StaleIdentityError,
)
from passport.domain.model.identity import Identity
from passport.domain.repository.identity import IdentityRepository
from passport.domain.value import AdvisorStatus, IdentityId, LoginHandle, SocialProvider


class InMemoryIdentityRepository(IdentityRepository):
    """In-memory implementation of IdentityRepository for testing.

    Enforces the same uniqueness and version checks as the database. No
    method awaits between its checks and its writes, so each call is atomic
    within one event loop.
    """

    def __init__(self) -> None:
        self._identities: dict[IdentityId, Identity] = {}

    def _visible(self) -> list[Identity]:
        return [i for i in self._identities.values() if not i.is_deleted]

    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        identity = self._identities.get(identity_id)
        if identity is None or identity.is_deleted:
            return None
        return identity

    async def find_by_handle(self, login_handle: LoginHandle) -> Optional[Identity]:
        for identity in self._visible():
            if identity.login_handle == login_handle:
                return identity
        return None

    async def find_by_social_link(
        self, provider: SocialProvider, provider_user_id: str
    ) -> Optional[Identity]:
        for identity in self._visible():
            for link in identity.linked_social_accounts:
                if link.key == (provider, provider_user_id):
                    return identity
        return None

    async def find_by_advisor_status(self, status: AdvisorStatus) -> list[Identity]:
        matches = [i for i in self._visible() if i.advisor_status == status]
        return sorted(matches, key=lambda i: i.created_at)

    async def list(self, offset: int = 0, limit: int = 20) -> list[Identity]:
        ordered = sorted(self._visible(), key=lambda i: i.created_at)
        return ordered[offset : offset + limit]

    async def save(self, identity: Identity) -> Identity:
        """Save or update an identity, enforcing uniqueness and versions."""
        stored = self._identities.get(identity.id)
        if stored is not None and stored.version != identity.version:
            raise StaleIdentityError(str(identity.id), identity.version)

        # Soft-deleted rows still hold their handle and links
        for other in self._identities.values():
            if other.id == identity.id:
                continue
            clash = other.linked_social_accounts & identity.linked_social_accounts
            if clash:
                link = next(iter(clash))
                raise DuplicateSocialLinkError(link.provider.value, link.provider_user_id)
            if other.login_handle == identity.login_handle:
                raise DuplicateHandleError(identity.login_handle.root)

        saved = identity.model_copy(update={"version": identity.version + 1})
        self._identities[identity.id] = saved
        return saved
