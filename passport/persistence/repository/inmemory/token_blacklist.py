"""In-memory token blacklist for tests and single-process deployments."""

import hashlib
import time
from collections.abc import Callable

from passport.domain.repository.token_blacklist import TokenBlacklistStore


class InMemoryTokenBlacklistStore(TokenBlacklistStore):
    """Dict-backed blacklist with per-entry expiry.

    Expired entries are purged on every call, so the map only holds tokens
    still inside their validity window.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._entries: dict[str, float] = {}

    @staticmethod
    def _key(token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    def _purge(self, now: float) -> None:
        expired = [key for key, expires_at in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]

    async def revoke(self, token: str, remaining_ms: int) -> bool:
        if remaining_ms <= 0:
            return False
        now = self._clock()
        self._purge(now)
        key = self._key(token)
        if key in self._entries:
            return False
        self._entries[key] = now + remaining_ms / 1000
        return True

    async def is_revoked(self, token: str) -> bool:
        self._purge(self._clock())
        return self._key(token) in self._entries

    def __len__(self) -> int:
        self._purge(self._clock())
        return len(self._entries)
