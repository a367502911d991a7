"""Token issuance, rotation and revocation."""

from datetime import timedelta

import logfire
from pydantic import BaseModel

from passport.domain.error import InvalidTokenError
from passport.domain.model.identity import Identity
from passport.domain.repository import TokenBlacklistStore
from passport.domain.value import TokenKind
from passport.util.jwt import JWTError, SubjectClaims, TokenClaims, TokenCodec

from .base import Service


class TokenPair(BaseModel):
    """Access and refresh tokens minted from one identity snapshot."""

    access_token: str
    refresh_token: str


class TokenService(Service):
    """Domain service for the token lifecycle.

    A token moves one way: issued, valid, then invalid once it is rotated,
    revoked, or expires.
    """

    def __init__(
        self,
        codec: TokenCodec,
        blacklist: TokenBlacklistStore,
        access_ttl: timedelta,
        refresh_ttl: timedelta,
    ) -> None:
        """Initialize token service.

        Args:
            codec: Signs and parses tokens
            blacklist: Store of revoked tokens
            access_ttl: Lifetime of access tokens (minutes)
            refresh_ttl: Lifetime of refresh tokens (days)
        """
        self.codec = codec
        self.blacklist = blacklist
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    @staticmethod
    def claims_for(identity: Identity) -> SubjectClaims:
        """Build subject claims from an identity snapshot."""
        emails = sorted(
            link.email for link in identity.linked_social_accounts if link.email
        )
        return SubjectClaims(
            subject_id=identity.id,
            display_name=str(identity.display_name),
            email=emails[0] if emails else None,
            contact_id=str(identity.contact_id) if identity.contact_id else None,
            roles=identity.roles,
        )

    def issue_pair(self, identity: Identity) -> TokenPair:
        """Mint an access/refresh pair for an identity.

        Args:
            identity: Identity to issue tokens for

        Returns:
            The token pair
        """
        with logfire.span("token_service.issue_pair", identity_id=str(identity.id)):
            return self._issue_from_claims(self.claims_for(identity))

    def _issue_from_claims(self, claims: SubjectClaims) -> TokenPair:
        return TokenPair(
            access_token=self.codec.issue(claims, TokenKind.ACCESS, self.access_ttl),
            refresh_token=self.codec.issue(claims, TokenKind.REFRESH, self.refresh_ttl),
        )

    async def rotate(self, refresh_token: str) -> tuple[TokenPair, SubjectClaims]:
        """Exchange a refresh token for a new pair, consuming it.

        The presented token is blacklisted before the new pair is minted.
        The blacklist write is conditional, so of two concurrent rotations of
        the same token only one succeeds.

        Args:
            refresh_token: The refresh token presented by the client

        Returns:
            The new token pair and the subject claims it was minted for

        Raises:
            InvalidTokenError: If the token is forged, expired, not a refresh
                token, or already used
        """
        with logfire.span("token_service.rotate"):
            claims = self._parse_kind(refresh_token, TokenKind.REFRESH)

            if await self.blacklist.is_revoked(refresh_token):
                logfire.warn(
                    "Revoked refresh token presented",
                    identity_id=str(claims.subject_id),
                )
                raise InvalidTokenError()

            remaining_ms = claims.remaining_ms(self.codec.now())
            claimed = await self.blacklist.revoke(refresh_token, remaining_ms)
            if not claimed:
                logfire.warn(
                    "Refresh token lost rotation race",
                    identity_id=str(claims.subject_id),
                )
                raise InvalidTokenError()

            subject = claims.subject()
            pair = self._issue_from_claims(subject)
            logfire.info("Token pair rotated", identity_id=str(claims.subject_id))
            return pair, subject

    async def authenticate(self, access_token: str) -> TokenClaims:
        """Validate an access token presented on a request.

        Raises:
            InvalidTokenError: If the token is invalid, revoked, or a refresh token
        """
        claims = self._parse_kind(access_token, TokenKind.ACCESS)
        if await self.blacklist.is_revoked(access_token):
            logfire.debug(
                "Revoked access token presented", identity_id=str(claims.subject_id)
            )
            raise InvalidTokenError()
        return claims

    async def revoke_for_logout(
        self, access_token: str | None, refresh_token: str | None
    ) -> None:
        """Blacklist whichever of the two tokens are present and valid.

        Never raises: missing, malformed, expired or wrong-kind tokens are
        skipped, and store failures are logged.
        """
        with logfire.span("token_service.revoke_for_logout"):
            await self._revoke_quietly(access_token, TokenKind.ACCESS)
            await self._revoke_quietly(refresh_token, TokenKind.REFRESH)

    async def _revoke_quietly(self, token: str | None, kind: TokenKind) -> None:
        if not token:
            return
        try:
            claims = self._parse_kind(token, kind)
        except InvalidTokenError:
            logfire.info("Logout skipped invalid token", token_kind=kind.value)
            return

        try:
            await self.blacklist.revoke(token, claims.remaining_ms(self.codec.now()))
            logfire.info(
                "Token revoked on logout",
                token_kind=kind.value,
                identity_id=str(claims.subject_id),
            )
        except Exception as e:
            logfire.warn(
                "Failed to revoke token on logout",
                token_kind=kind.value,
                error=str(e),
                error_type=type(e).__name__,
            )

    def _parse_kind(self, token: str, expected: TokenKind) -> TokenClaims:
        try:
            claims = self.codec.parse(token)
        except JWTError as e:
            logfire.debug("Token rejected", reason=type(e).__name__)
            raise InvalidTokenError() from e
        if claims.token_kind != expected:
            logfire.debug(
                "Token rejected",
                reason="wrong_kind",
                expected=expected.value,
                actual=claims.token_kind.value,
            )
            raise InvalidTokenError()
        return claims
