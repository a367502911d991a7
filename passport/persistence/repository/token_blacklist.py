"""Redis implementation of the token blacklist."""

import hashlib

import logfire
import redis.asyncio as aioredis

from passport.domain.repository.token_blacklist import TokenBlacklistStore


class RedisTokenBlacklistStore(TokenBlacklistStore):
    """Blacklist stored in Redis with native key expiry.

    ``revoke`` is a single ``SET ... PX ... NX``, so Redis decides which of
    several concurrent revocations of one token wins.
    """

    def __init__(self, client: aioredis.Redis, key_prefix: str = "blacklist:jwt:") -> None:
        """Initialize store.

        Args:
            client: Redis client created with ``decode_responses=True``
            key_prefix: Namespace for blacklist keys
        """
        self.client = client
        self.key_prefix = key_prefix

    def _key(self, token: str) -> str:
        digest = hashlib.sha256(token.encode("utf-8")).hexdigest()
        return f"{self.key_prefix}{digest}"

    async def revoke(self, token: str, remaining_ms: int) -> bool:
        if remaining_ms <= 0:
            return False
        created = await self.client.set(self._key(token), "1", px=remaining_ms, nx=True)
        if created:
            logfire.debug("Token blacklisted", ttl_ms=remaining_ms)
        return bool(created)

    async def is_revoked(self, token: str) -> bool:
        return await self.client.exists(self._key(token)) > 0
