"""Unit tests for TokenService."""

import asyncio
from datetime import timedelta

import pytest

from passport.domain.error import InvalidTokenError
from passport.domain.repository import TokenBlacklistStore
from passport.domain.service import TokenService
from passport.domain.value import Role, SocialProvider, TokenKind
from passport.persistence.repository.inmemory import InMemoryTokenBlacklistStore
from passport.util.jwt import TokenCodec
from tests.conftest import make_identity


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class FailingBlacklistStore(TokenBlacklistStore):
    """Blacklist whose backing store is unreachable."""

    async def revoke(self, token: str, remaining_ms: int) -> bool:
        raise ConnectionError("blacklist store unavailable")

    async def is_revoked(self, token: str) -> bool:
        raise ConnectionError("blacklist store unavailable")


class InterleavingBlacklistStore(InMemoryTokenBlacklistStore):
    """Blacklist that holds every revocation check until all callers arrive.

    Concurrent rotations of one token all see it as not yet revoked, so the
    conditional revoke alone has to pick the winner.
    """

    def __init__(self, clock, callers: int = 2) -> None:
        super().__init__(clock=clock)
        self.callers = callers
        self.checked = 0
        self.all_checked = asyncio.Event()
        self.revoke_results: list[bool] = []

    async def is_revoked(self, token: str) -> bool:
        revoked = await super().is_revoked(token)
        self.checked += 1
        if self.checked >= self.callers:
            self.all_checked.set()
        await self.all_checked.wait()
        return revoked

    async def revoke(self, token: str, remaining_ms: int) -> bool:
        claimed = await super().revoke(token, remaining_ms)
        self.revoke_results.append(claimed)
        return claimed


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def blacklist(clock) -> InMemoryTokenBlacklistStore:
    return InMemoryTokenBlacklistStore(clock=clock)


@pytest.fixture
def service(clock, blacklist) -> TokenService:
    return TokenService(
        codec=TokenCodec("unit-test-secret", clock=clock),
        blacklist=blacklist,
        access_ttl=timedelta(minutes=30),
        refresh_ttl=timedelta(days=14),
    )


class TestIssuePair:
    """Tests for TokenService.issue_pair()."""

    def test_pair_carries_identity_claims(self, service):
        """Both tokens should carry the identity snapshot with the right kind."""
        identity = make_identity(
            display_name="Alice",
            contact_id="alice#1",
            links=[
                (SocialProvider.NAVER, "n-1", "zed@naver.example"),
                (SocialProvider.KAKAO, "k-1", "alice@kakao.example"),
            ],
        )

        pair = service.issue_pair(identity)
        access = service.codec.parse(pair.access_token)
        refresh = service.codec.parse(pair.refresh_token)

        assert access.token_kind == TokenKind.ACCESS
        assert refresh.token_kind == TokenKind.REFRESH
        assert access.subject() == refresh.subject()
        assert access.subject_id == identity.id
        assert access.display_name == "Alice"
        assert access.contact_id == "alice#1"
        assert access.email == "alice@kakao.example"  # Lowest sorted email
        assert access.roles == [Role.USER]
        assert access.expires_at - access.issued_at == 30 * 60
        assert refresh.expires_at - refresh.issued_at == 14 * 24 * 3600


class TestRotate:
    """Tests for TokenService.rotate()."""

    @pytest.mark.asyncio
    async def test_rotate_issues_new_pair_and_consumes_token(self, service):
        """A refresh token should work exactly once."""
        pair = service.issue_pair(make_identity())

        new_pair, subject = await service.rotate(pair.refresh_token)

        assert new_pair.refresh_token != pair.refresh_token
        assert subject.display_name == "Alice"
        with pytest.raises(InvalidTokenError):
            await service.rotate(pair.refresh_token)

    @pytest.mark.asyncio
    async def test_new_refresh_token_is_usable(self, service):
        """The refresh token from a rotation should rotate again."""
        pair = service.issue_pair(make_identity())

        second, _ = await service.rotate(pair.refresh_token)
        third, _ = await service.rotate(second.refresh_token)

        assert third.access_token

    @pytest.mark.asyncio
    async def test_concurrent_rotation_has_one_winner(self, service):
        """Of two concurrent rotations of one token, exactly one succeeds."""
        pair = service.issue_pair(make_identity())

        results = await asyncio.gather(
            service.rotate(pair.refresh_token),
            service.rotate(pair.refresh_token),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, InvalidTokenError)]
        successes = [r for r in results if not isinstance(r, Exception)]
        assert len(successes) == 1
        assert len(failures) == 1

    @pytest.mark.asyncio
    async def test_interleaved_rotation_decided_by_conditional_revoke(self, clock):
        """Both rotations pass the revocation check; only one claims the token."""
        blacklist = InterleavingBlacklistStore(clock)
        service = TokenService(
            codec=TokenCodec("unit-test-secret", clock=clock),
            blacklist=blacklist,
            access_ttl=timedelta(minutes=30),
            refresh_ttl=timedelta(days=14),
        )
        pair = service.issue_pair(make_identity())

        results = await asyncio.wait_for(
            asyncio.gather(
                service.rotate(pair.refresh_token),
                service.rotate(pair.refresh_token),
                return_exceptions=True,
            ),
            timeout=5,
        )

        assert blacklist.checked == 2
        assert sorted(blacklist.revoke_results) == [False, True]
        failures = [r for r in results if isinstance(r, InvalidTokenError)]
        successes = [r for r in results if not isinstance(r, Exception)]
        assert len(successes) == 1
        assert len(failures) == 1

        with pytest.raises(InvalidTokenError):
            await service.rotate(pair.refresh_token)

    @pytest.mark.asyncio
    async def test_access_token_cannot_rotate(self, service):
        """An access token presented for refresh should be rejected."""
        pair = service.issue_pair(make_identity())

        with pytest.raises(InvalidTokenError):
            await service.rotate(pair.access_token)

    @pytest.mark.asyncio
    async def test_expired_refresh_token_rejected(self, service, clock):
        """A refresh token past its expiry should be rejected."""
        pair = service.issue_pair(make_identity())
        clock.now += 15 * 24 * 3600

        with pytest.raises(InvalidTokenError):
            await service.rotate(pair.refresh_token)

    @pytest.mark.asyncio
    async def test_rotated_claims_come_from_token(self, service):
        """The new pair should carry the presented token's claims."""
        identity = make_identity(display_name="Before")
        pair = service.issue_pair(identity)

        new_pair, subject = await service.rotate(pair.refresh_token)

        assert subject.display_name == "Before"
        assert service.codec.parse(new_pair.access_token).subject() == subject


class TestAuthenticate:
    """Tests for TokenService.authenticate()."""

    @pytest.mark.asyncio
    async def test_valid_access_token(self, service):
        identity = make_identity()
        pair = service.issue_pair(identity)

        claims = await service.authenticate(pair.access_token)

        assert claims.subject_id == identity.id

    @pytest.mark.asyncio
    async def test_refresh_token_rejected(self, service):
        """A refresh token cannot authorize a request."""
        pair = service.issue_pair(make_identity())

        with pytest.raises(InvalidTokenError):
            await service.authenticate(pair.refresh_token)

    @pytest.mark.asyncio
    async def test_forged_token_rejected(self, service):
        with pytest.raises(InvalidTokenError):
            await service.authenticate("forged.token.value")


class TestRevokeForLogout:
    """Tests for TokenService.revoke_for_logout()."""

    @pytest.mark.asyncio
    async def test_logout_revokes_both_tokens(self, service):
        """After logout neither token is accepted."""
        pair = service.issue_pair(make_identity())

        await service.revoke_for_logout(pair.access_token, pair.refresh_token)

        with pytest.raises(InvalidTokenError):
            await service.authenticate(pair.access_token)
        with pytest.raises(InvalidTokenError):
            await service.rotate(pair.refresh_token)

    @pytest.mark.asyncio
    async def test_logout_is_idempotent(self, service, blacklist):
        """Logging out twice should succeed and change nothing."""
        pair = service.issue_pair(make_identity())

        await service.revoke_for_logout(pair.access_token, pair.refresh_token)
        await service.revoke_for_logout(pair.access_token, pair.refresh_token)

        assert len(blacklist) == 2

    @pytest.mark.asyncio
    async def test_logout_skips_missing_and_invalid_tokens(self, service, blacklist):
        """Missing, garbage and wrong-kind tokens should be ignored."""
        pair = service.issue_pair(make_identity())

        await service.revoke_for_logout(None, None)
        await service.revoke_for_logout("garbage", pair.access_token)

        assert len(blacklist) == 0

    @pytest.mark.asyncio
    async def test_logout_with_expired_token_succeeds(self, service, clock, blacklist):
        """An expired token needs no revocation."""
        pair = service.issue_pair(make_identity())
        clock.now += 31 * 60

        await service.revoke_for_logout(pair.access_token, None)

        assert len(blacklist) == 0

    @pytest.mark.asyncio
    async def test_logout_absorbs_store_failures(self, clock):
        """Store errors during logout should be logged, not raised."""
        service = TokenService(
            codec=TokenCodec("unit-test-secret", clock=clock),
            blacklist=FailingBlacklistStore(),
            access_ttl=timedelta(minutes=30),
            refresh_ttl=timedelta(days=14),
        )
        pair = service.issue_pair(make_identity())

        await service.revoke_for_logout(pair.access_token, pair.refresh_token)
