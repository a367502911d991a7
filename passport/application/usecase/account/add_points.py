"""Add points use case."""

from pydantic import BaseModel

from passport.domain.service import AccountService, require_privileged
from passport.domain.value import IdentityId, Role


class AddPointsRequest(BaseModel):
    caller_roles: list[Role]  # From authenticated caller
    identity_id: IdentityId
    amount: int


class AddPointsResponse(BaseModel):
    identity_id: str
    points: int


class AddPointsUseCase:
    """Use case for crediting points to an identity.

    Points are earned elsewhere in the product; crediting them is a
    privileged operation.
    """

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: AddPointsRequest) -> AddPointsResponse:
        """Credit the points.

        Raises:
            ForbiddenError: If the caller is neither MANAGER nor MASTER
            InvalidAmountError: If ``amount <= 0``
            NotFoundError: If the identity does not exist
        """
        require_privileged(request.caller_roles, "credit points")
        identity = await self.account_service.add_points(
            request.identity_id, request.amount
        )
        return AddPointsResponse(identity_id=str(identity.id), points=identity.points)
