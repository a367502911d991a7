"""Apply for advisor use case."""

from pydantic import BaseModel

from passport.domain.service import AccountService
from passport.domain.value import AdvisorStatus, IdentityId


class ApplyAdvisorRequest(BaseModel):
    identity_id: IdentityId  # From authenticated caller


class AdvisorOutcomeResponse(BaseModel):
    """Message describing what an advisor transition did."""

    identity_id: str
    message: str
    advisor_status: AdvisorStatus
    changed: bool


class ApplyAdvisorUseCase:
    """Use case for requesting advisor promotion.

    Applying again never fails; the response message says why nothing
    changed.
    """

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: ApplyAdvisorRequest) -> AdvisorOutcomeResponse:
        outcome = await self.account_service.apply_for_advisor(request.identity_id)
        return AdvisorOutcomeResponse(
            identity_id=str(request.identity_id),
            message=outcome.message,
            advisor_status=outcome.advisor_status,
            changed=outcome.changed,
        )
