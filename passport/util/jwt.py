"""JWT token utilities.

``TokenCodec`` signs and parses compact HS256 tokens. It performs no I/O and
holds the signing key given at construction; callers check ``token_kind``
against the use they expect.
"""

import time
from collections.abc import Callable
from datetime import timedelta
from uuid import UUID, uuid4

import jwt
from pydantic import BaseModel, ValidationError

from passport.domain.value import Role, TokenKind


class SubjectClaims(BaseModel):
    """Claims describing who a token was issued to."""

    subject_id: UUID
    display_name: str
    email: str | None = None
    contact_id: str | None = None
    roles: list[Role]


class TokenClaims(SubjectClaims):
    """Full claim set carried by a parsed token."""

    token_kind: TokenKind
    token_id: str
    issued_at: int
    expires_at: int

    def subject(self) -> SubjectClaims:
        """Drop the per-token fields, leaving what the token was issued for."""
        return SubjectClaims(
            subject_id=self.subject_id,
            display_name=self.display_name,
            email=self.email,
            contact_id=self.contact_id,
            roles=self.roles,
        )

    def remaining_ms(self, now: float) -> int:
        """Milliseconds of validity left at ``now`` (epoch seconds)."""
        return int((self.expires_at - now) * 1000)


class JWTError(Exception):
    """JWT-related error."""

    pass


class InvalidSignatureError(JWTError):
    pass


class TokenExpiredError(JWTError):
    pass


class MalformedTokenError(JWTError):
    pass


_REQUIRED_CLAIMS = ["sub", "type", "jti", "iat", "exp", "roles", "name"]


class TokenCodec:
    """Signs and verifies tokens with a process-wide symmetric key."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        clock: Callable[[], float] = time.time,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock

    def now(self) -> float:
        return self._clock()

    def issue(self, claims: SubjectClaims, kind: TokenKind, ttl: timedelta) -> str:
        """Create a signed token.

        Args:
            claims: Subject claims to embed
            kind: Whether the token is for access or refresh use
            ttl: How long the token stays valid

        Returns:
            Encoded JWT token
        """
        issued_at = int(self._clock())
        payload = {
            "sub": str(claims.subject_id),
            "name": claims.display_name,
            "email": claims.email,
            "contact": claims.contact_id,
            "roles": [role.value for role in claims.roles],
            "type": kind.value,
            "jti": uuid4().hex,
            "iat": issued_at,
            "exp": issued_at + int(ttl.total_seconds()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def parse(self, token: str) -> TokenClaims:
        """Verify and decode a token.

        Expiry is checked against the codec's clock rather than PyJWT's.

        Args:
            token: JWT token to verify

        Returns:
            The token's claims

        Raises:
            InvalidSignatureError: If the signature does not verify
            TokenExpiredError: If the token is past its expiry
            MalformedTokenError: If the token cannot be decoded or lacks claims
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": _REQUIRED_CLAIMS,
                },
            )
        except jwt.InvalidSignatureError:
            raise InvalidSignatureError("Token signature is invalid")
        except jwt.InvalidTokenError:
            raise MalformedTokenError("Invalid token")

        try:
            claims = TokenClaims(
                subject_id=payload["sub"],
                display_name=payload["name"],
                email=payload.get("email"),
                contact_id=payload.get("contact"),
                roles=payload["roles"],
                token_kind=payload["type"],
                token_id=payload["jti"],
                issued_at=payload["iat"],
                expires_at=payload["exp"],
            )
        except ValidationError:
            raise MalformedTokenError("Token claims are invalid")

        if self._clock() >= claims.expires_at:
            raise TokenExpiredError("Token has expired")

        return claims
