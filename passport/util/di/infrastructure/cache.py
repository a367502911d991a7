"""Token blacklist infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
import redis.asyncio as aioredis

from passport.config import Settings
from passport.domain.repository import TokenBlacklistStore
from passport.persistence.repository import RedisTokenBlacklistStore
from passport.persistence.repository.inmemory import InMemoryTokenBlacklistStore
from passport.util.di.base import ProviderBase


class CacheProvider(ProviderBase):
    """Token blacklist component base."""

    __mock_component__ = "cache"


class ProdCacheProvider(CacheProvider):
    """Production blacklist provider.

    Uses Redis when ``CACHE__BACKEND=redis``; otherwise revocations live in
    process memory, which is only correct with a single worker.
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_blacklist_store(
        self, settings: Settings
    ) -> AsyncIterator[TokenBlacklistStore]:
        """Provide the blacklist store, closing the Redis client on shutdown."""
        if settings.cache.backend == "memory":
            logfire.warn("Using in-process token blacklist")
            yield InMemoryTokenBlacklistStore()
            return

        client = aioredis.from_url(settings.cache.redis_url, decode_responses=True)
        try:
            yield RedisTokenBlacklistStore(client, key_prefix=settings.cache.key_prefix)
        finally:
            await client.aclose()
