"""Integration tests for RedisTokenBlacklistStore.

Run with ``CACHE__BACKEND=redis`` and a reachable ``CACHE__REDIS_URL``.
"""

import asyncio
import os
from uuid import uuid4

import pytest

from passport.domain.repository import TokenBlacklistStore
from passport.persistence.repository import RedisTokenBlacklistStore
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    os.environ.get("CACHE__BACKEND") != "redis", reason="CACHE__BACKEND is not redis"
)

# Integration test fixture
integration_env = create_env_fixture(unmock={"cache"})


class TestRedisTokenBlacklistStore:
    @pytest.mark.asyncio
    async def test_uses_redis(self, integration_env):
        store = await integration_env.get(TokenBlacklistStore)

        assert isinstance(store, RedisTokenBlacklistStore)

    @pytest.mark.asyncio
    async def test_revoke_once(self, integration_env):
        store = await integration_env.get(TokenBlacklistStore)
        token = f"token-{uuid4().hex}"

        assert await store.revoke(token, 5000) is True
        assert await store.revoke(token, 5000) is False
        assert await store.is_revoked(token) is True
        assert await store.revoke(f"other-{uuid4().hex}", 0) is False

    @pytest.mark.asyncio
    async def test_concurrent_revocations_have_one_winner(self, integration_env):
        store = await integration_env.get(TokenBlacklistStore)
        token = f"token-{uuid4().hex}"

        results = await asyncio.gather(*(store.revoke(token, 5000) for _ in range(5)))

        assert results.count(True) == 1

    @pytest.mark.asyncio
    async def test_entry_expires(self, integration_env):
        store = await integration_env.get(TokenBlacklistStore)
        token = f"token-{uuid4().hex}"

        await store.revoke(token, 50)
        await asyncio.sleep(0.2)

        assert await store.is_revoked(token) is False
