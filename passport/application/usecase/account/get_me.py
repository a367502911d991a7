"""Get current identity use case."""

from pydantic import BaseModel

from passport.domain.service import AccountService
from passport.domain.value import IdentityId

from .common import IdentityResponse


class GetMeRequest(BaseModel):
    identity_id: IdentityId  # From authenticated caller


class GetMeUseCase:
    """Use case for loading the caller's own identity."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: GetMeRequest) -> IdentityResponse:
        """Load the identity.

        Raises:
            NotFoundError: If the identity no longer exists
        """
        identity = await self.account_service.get_identity(request.identity_id)
        return IdentityResponse.from_identity(identity)
