"""Token blacklist store interface."""

from abc import ABC, abstractmethod


class TokenBlacklistStore(ABC):
    """Records revoked tokens until they would have expired anyway.

    Entries self-expire, so the store holds at most the revoked tokens that
    are still within their validity window. Concurrent operations on one
    token are linearized by the backing store.
    """

    @abstractmethod
    async def revoke(self, token: str, remaining_ms: int) -> bool:
        """Record a token as revoked for ``remaining_ms`` milliseconds.

        Args:
            token: The compact token string
            remaining_ms: Remaining validity; ``<= 0`` is a no-op

        Returns:
            True if this call recorded the revocation, False if the token was
            already revoked or ``remaining_ms <= 0``
        """
        pass

    @abstractmethod
    async def is_revoked(self, token: str) -> bool:
        """Check whether a token has been revoked and not yet expired."""
        pass
