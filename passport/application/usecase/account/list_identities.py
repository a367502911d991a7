"""List identities use case."""

from pydantic import BaseModel, Field

from passport.domain.service import AccountService
from passport.domain.value import Role

from .common import IdentityResponse


class ListIdentitiesRequest(BaseModel):
    caller_roles: list[Role]
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=20, ge=1, le=100)


class ListIdentitiesResponse(BaseModel):
    items: list[IdentityResponse]
    offset: int
    limit: int


class ListIdentitiesUseCase:
    """Use case for paging through all identities (privileged)."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: ListIdentitiesRequest) -> ListIdentitiesResponse:
        """List a page of identities.

        Raises:
            ForbiddenError: If the caller is neither MANAGER nor MASTER
        """
        identities = await self.account_service.list_identities(
            request.caller_roles, offset=request.offset, limit=request.limit
        )
        return ListIdentitiesResponse(
            items=[IdentityResponse.from_identity(i) for i in identities],
            offset=request.offset,
            limit=request.limit,
        )
