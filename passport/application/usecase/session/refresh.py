"""Token refresh use case."""

from pydantic import BaseModel

from passport.domain.service import TokenService

from .common import SessionResponse


class RefreshRequest(BaseModel):
    refresh_token: str


class RefreshUseCase:
    """Use case for exchanging a refresh token for a new pair.

    The new pair carries the claims of the presented token; the identity is
    not reloaded.
    """

    def __init__(self, token_service: TokenService) -> None:
        self.token_service = token_service

    async def execute(self, request: RefreshRequest) -> SessionResponse:
        """Rotate the refresh token.

        Raises:
            InvalidTokenError: If the token cannot be used for refresh
        """
        pair, subject = await self.token_service.rotate(request.refresh_token)
        return SessionResponse.from_pair(pair, subject)
