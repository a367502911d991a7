"""Unit tests for InMemoryTokenBlacklistStore."""

import pytest

from passport.persistence.repository.inmemory import InMemoryTokenBlacklistStore


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestInMemoryTokenBlacklistStore:
    """Tests for revoke/is_revoked and expiry."""

    @pytest.mark.asyncio
    async def test_revoke_then_is_revoked(self):
        """A revoked token should be reported as revoked."""
        store = InMemoryTokenBlacklistStore(clock=FakeClock())

        assert await store.revoke("token-a", 5000) is True
        assert await store.is_revoked("token-a") is True
        assert await store.is_revoked("token-b") is False

    @pytest.mark.asyncio
    async def test_second_revoke_reports_not_recorded(self):
        """Only the first revocation of a token should win."""
        store = InMemoryTokenBlacklistStore(clock=FakeClock())

        assert await store.revoke("token-a", 5000) is True
        assert await store.revoke("token-a", 5000) is False

    @pytest.mark.asyncio
    async def test_non_positive_remaining_is_noop(self):
        """A token with no validity left should not be stored."""
        store = InMemoryTokenBlacklistStore(clock=FakeClock())

        assert await store.revoke("token-a", 0) is False
        assert await store.revoke("token-b", -10) is False
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_entry_expires(self):
        """Entries should disappear once the token would have expired."""
        clock = FakeClock()
        store = InMemoryTokenBlacklistStore(clock=clock)
        await store.revoke("token-a", 2000)

        clock.now += 1.999
        assert await store.is_revoked("token-a") is True

        clock.now += 0.001
        assert await store.is_revoked("token-a") is False
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_only_live_entries_held(self):
        """Expired entries should be purged on the next call."""
        clock = FakeClock()
        store = InMemoryTokenBlacklistStore(clock=clock)
        await store.revoke("short", 1000)
        await store.revoke("long", 60_000)

        clock.now += 5

        assert len(store) == 1
        assert await store.is_revoked("long") is True
