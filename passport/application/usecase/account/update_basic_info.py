"""Update basic info use case."""

from pydantic import BaseModel, Field

from passport.domain.service import AccountService
from passport.domain.value import IdentityId

from .common import IdentityResponse


class UpdateBasicInfoRequest(BaseModel):
    """Update display name and contact handle."""

    identity_id: IdentityId  # From authenticated caller
    display_name: str = Field(min_length=1, max_length=50)
    contact_id: str | None = Field(default=None, max_length=100)


class UpdateBasicInfoUseCase:
    """Use case for editing the caller's display name and contact handle.

    Login handle, role and points cannot be changed here.
    """

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: UpdateBasicInfoRequest) -> IdentityResponse:
        identity = await self.account_service.update_basic_info(
            request.identity_id, request.display_name, request.contact_id
        )
        return IdentityResponse.from_identity(identity)
