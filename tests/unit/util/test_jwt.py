"""Unit tests for TokenCodec."""

from datetime import timedelta
from uuid import uuid4

import jwt
import pytest

from passport.domain.value import Role, TokenKind
from passport.util.jwt import (
    InvalidSignatureError,
    MalformedTokenError,
    SubjectClaims,
    TokenCodec,
    TokenExpiredError,
)

SECRET = "unit-test-secret"


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def codec(clock: FakeClock) -> TokenCodec:
    return TokenCodec(SECRET, clock=clock)


@pytest.fixture
def claims() -> SubjectClaims:
    return SubjectClaims(
        subject_id=uuid4(),
        display_name="Alice",
        email="alice@kakao.example",
        contact_id="alice#1234",
        roles=[Role.USER],
    )


class TestIssueAndParse:
    """Tests for TokenCodec.issue() and TokenCodec.parse()."""

    def test_parse_returns_issued_claims(self, codec, claims, clock):
        """Should round-trip subject claims and set kind and timestamps."""
        # Act
        token = codec.issue(claims, TokenKind.ACCESS, timedelta(minutes=30))
        parsed = codec.parse(token)

        # Assert
        assert parsed.subject() == claims
        assert parsed.token_kind == TokenKind.ACCESS
        assert parsed.issued_at == int(clock.now)
        assert parsed.expires_at == int(clock.now) + 30 * 60

    def test_each_token_gets_unique_id(self, codec, claims):
        """Two tokens for the same claims should differ by token id."""
        first = codec.issue(claims, TokenKind.REFRESH, timedelta(days=14))
        second = codec.issue(claims, TokenKind.REFRESH, timedelta(days=14))

        assert first != second
        assert codec.parse(first).token_id != codec.parse(second).token_id

    def test_remaining_ms(self, codec, claims, clock):
        """Should report remaining validity in milliseconds."""
        token = codec.issue(claims, TokenKind.ACCESS, timedelta(seconds=10))
        parsed = codec.parse(token)

        clock.now += 4
        assert parsed.remaining_ms(clock.now) == 6000

    def test_empty_secret_rejected(self):
        """Should refuse to sign with an empty key."""
        with pytest.raises(ValueError):
            TokenCodec("")


class TestParseFailures:
    """Tests for the ways TokenCodec.parse() rejects tokens."""

    def test_expired_token(self, codec, claims, clock):
        """Should reject a token at or after its expiry."""
        token = codec.issue(claims, TokenKind.ACCESS, timedelta(seconds=60))

        clock.now += 60

        with pytest.raises(TokenExpiredError):
            codec.parse(token)

    def test_token_signed_with_other_key(self, codec, claims, clock):
        """Should reject a token signed with another key."""
        other = TokenCodec("some-other-secret", clock=clock)
        token = other.issue(claims, TokenKind.ACCESS, timedelta(minutes=5))

        with pytest.raises(InvalidSignatureError):
            codec.parse(token)

    def test_tampered_payload(self, codec, claims):
        """Should reject a token whose payload was edited."""
        token = codec.issue(claims, TokenKind.ACCESS, timedelta(minutes=5))
        header, payload, signature = token.split(".")
        forged_payload = payload[:-2] + ("A" if payload[-2] != "A" else "B") + payload[-1]

        with pytest.raises((InvalidSignatureError, MalformedTokenError)):
            codec.parse(f"{header}.{forged_payload}.{signature}")

    def test_garbage(self, codec):
        """Should reject input that is not a JWT."""
        with pytest.raises(MalformedTokenError):
            codec.parse("not-a-token")

    def test_missing_required_claim(self, codec, clock):
        """Should reject a correctly signed token lacking the kind claim."""
        token = jwt.encode(
            {
                "sub": str(uuid4()),
                "name": "Alice",
                "roles": ["USER"],
                "jti": "abc",
                "iat": int(clock.now),
                "exp": int(clock.now) + 60,
            },
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(MalformedTokenError):
            codec.parse(token)

    def test_unknown_kind(self, codec, clock):
        """Should reject a correctly signed token with an unknown kind."""
        token = jwt.encode(
            {
                "sub": str(uuid4()),
                "name": "Alice",
                "roles": ["USER"],
                "type": "session",
                "jti": "abc",
                "iat": int(clock.now),
                "exp": int(clock.now) + 60,
            },
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(MalformedTokenError):
            codec.parse(token)
