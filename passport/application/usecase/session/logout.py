"""Logout use case."""

from pydantic import BaseModel

from passport.domain.service import TokenService


class LogoutRequest(BaseModel):
    access_token: str | None = None
    refresh_token: str | None = None


class LogoutUseCase:
    """Use case for revoking a session's tokens. Always succeeds."""

    def __init__(self, token_service: TokenService) -> None:
        self.token_service = token_service

    async def execute(self, request: LogoutRequest) -> None:
        await self.token_service.revoke_for_logout(
            request.access_token, request.refresh_token
        )
