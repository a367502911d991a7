"""Local login use case."""

from pydantic import BaseModel

from passport.domain.service import IdentityResolver, TokenService

from .common import SessionResponse


class LoginRequest(BaseModel):
    """Local login request."""

    login_handle: str
    password: str


class LoginUseCase:
    """Use case for handle/password login."""

    def __init__(
        self, identity_resolver: IdentityResolver, token_service: TokenService
    ) -> None:
        """Initialize login use case.

        Args:
            identity_resolver: Identity domain service
            token_service: Token domain service
        """
        self.identity_resolver = identity_resolver
        self.token_service = token_service

    async def execute(self, request: LoginRequest) -> SessionResponse:
        """Verify credentials and issue a token pair.

        Raises:
            InvalidCredentialsError: If the handle is unknown or the password wrong
            AccountNotActiveError: If the account is not active
        """
        identity = await self.identity_resolver.resolve_local(
            request.login_handle, request.password
        )
        pair = self.token_service.issue_pair(identity)
        return SessionResponse.from_pair(pair, self.token_service.claims_for(identity))
