"""Approve advisor use case."""

from pydantic import BaseModel

from passport.domain.service import AccountService
from passport.domain.value import IdentityId, Role

from .apply import AdvisorOutcomeResponse


class ApproveAdvisorRequest(BaseModel):
    caller_roles: list[Role]  # From authenticated caller
    target_id: IdentityId


class ApproveAdvisorUseCase:
    """Use case for promoting an identity to advisor (privileged)."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: ApproveAdvisorRequest) -> AdvisorOutcomeResponse:
        """Approve the target identity.

        Raises:
            ForbiddenError: If the caller is neither MANAGER nor MASTER
            NotFoundError: If the target does not exist
        """
        outcome = await self.account_service.approve_advisor(
            request.caller_roles, request.target_id
        )
        return AdvisorOutcomeResponse(
            identity_id=str(request.target_id),
            message=outcome.message,
            advisor_status=outcome.advisor_status,
            changed=outcome.changed,
        )
