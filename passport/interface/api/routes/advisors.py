"""Advisor promotion routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from passport.application.usecase.advisor import (
    ApplyAdvisorUseCase,
    ApproveAdvisorUseCase,
    ListPendingAdvisorsUseCase,
)
from passport.application.usecase.advisor.apply import (
    AdvisorOutcomeResponse,
    ApplyAdvisorRequest,
)
from passport.application.usecase.advisor.approve import ApproveAdvisorRequest
from passport.application.usecase.advisor.list_pending import (
    AdvisorCandidate,
    ListPendingAdvisorsRequest,
)
from passport.application.usecase.session import AuthenticateUseCase
from passport.domain.value import IdentityId
from passport.interface.api.security import AuthorizationHeader, authenticate

router = APIRouter(prefix="/advisors", tags=["advisors"], route_class=DishkaRoute)


@router.post("/apply", response_model=AdvisorOutcomeResponse)
async def apply_for_advisor(
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    apply_advisor_use_case: FromDishka[ApplyAdvisorUseCase],
    authorization: AuthorizationHeader = None,
) -> AdvisorOutcomeResponse:
    """Apply for advisor promotion.

    Repeated applications succeed with a message explaining the current
    status instead of failing.
    """
    caller = await authenticate(authorization, authenticate_use_case)
    return await apply_advisor_use_case.execute(
        ApplyAdvisorRequest(identity_id=caller.identity_id)
    )


@router.get("/pending", response_model=list[AdvisorCandidate])
async def list_pending_advisors(
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    list_pending_use_case: FromDishka[ListPendingAdvisorsUseCase],
    authorization: AuthorizationHeader = None,
) -> list[AdvisorCandidate]:
    """List pending applications. MANAGER or MASTER only."""
    caller = await authenticate(authorization, authenticate_use_case)
    return await list_pending_use_case.execute(
        ListPendingAdvisorsRequest(caller_roles=caller.roles)
    )


@router.post("/{identity_id}/approve", response_model=AdvisorOutcomeResponse)
async def approve_advisor(
    identity_id: UUID,
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    approve_advisor_use_case: FromDishka[ApproveAdvisorUseCase],
    authorization: AuthorizationHeader = None,
) -> AdvisorOutcomeResponse:
    """Promote an identity to advisor. MANAGER or MASTER only.

    Errors:
        403 FORBIDDEN: caller lacks a privileged role
        404 USER_NOT_FOUND
    """
    caller = await authenticate(authorization, authenticate_use_case)
    return await approve_advisor_use_case.execute(
        ApproveAdvisorRequest(
            caller_roles=caller.roles, target_id=IdentityId(identity_id)
        )
    )
