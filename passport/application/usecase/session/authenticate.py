"""Access token authentication use case."""

from pydantic import BaseModel

from passport.domain.service import TokenService
from passport.domain.value import IdentityId, Role


class AuthenticateRequest(BaseModel):
    access_token: str


class AuthenticatedCaller(BaseModel):
    """The identity a request is acting as."""

    identity_id: IdentityId
    roles: list[Role]


class AuthenticateUseCase:
    """Use case for resolving the caller behind a bearer access token."""

    def __init__(self, token_service: TokenService) -> None:
        self.token_service = token_service

    async def execute(self, request: AuthenticateRequest) -> AuthenticatedCaller:
        """Validate the access token.

        Raises:
            InvalidTokenError: If the token is invalid, revoked, or not an access token
        """
        claims = await self.token_service.authenticate(request.access_token)
        return AuthenticatedCaller(
            identity_id=IdentityId(claims.subject_id), roles=claims.roles
        )
