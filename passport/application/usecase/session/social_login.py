"""Social login use case."""

import logfire
from pydantic import BaseModel

from passport.domain.service import AuthService, IdentityResolver, TokenService

from .common import SessionResponse


class SocialLoginRequest(BaseModel):
    """Social login request from an OAuth callback."""

    provider: str  # Provider key from the callback path, any case
    code: str  # OAuth authorization code
    state: str  # State parameter for CSRF protection


class SocialLoginUseCase:
    """Use case for login through a social provider.

    Steps:
    1. Complete the OAuth handshake and normalize the provider profile
    2. Find the linked identity, or create one on first login
    3. Issue a token pair
    """

    def __init__(
        self,
        auth_service: AuthService,
        identity_resolver: IdentityResolver,
        token_service: TokenService,
    ) -> None:
        self.auth_service = auth_service
        self.identity_resolver = identity_resolver
        self.token_service = token_service

    async def execute(self, request: SocialLoginRequest) -> SessionResponse:
        """Execute social login flow.

        Raises:
            UnsupportedProviderError: If the provider key is unknown
            OAuthProviderError: If the provider handshake fails
        """
        with logfire.span("social_login", provider=request.provider):
            profile = await self.auth_service.complete_login(
                request.provider, request.code, request.state
            )
            identity = await self.identity_resolver.resolve_or_create_social(profile)
            pair = self.token_service.issue_pair(identity)
            return SessionResponse.from_pair(
                pair, self.token_service.claims_for(identity)
            )
