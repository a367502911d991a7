"""List pending advisor applications use case."""

from datetime import datetime

from pydantic import BaseModel

from passport.domain.service import AccountService
from passport.domain.value import Role


class ListPendingAdvisorsRequest(BaseModel):
    caller_roles: list[Role]


class AdvisorCandidate(BaseModel):
    identity_id: str
    login_handle: str
    display_name: str
    main_category: str | None
    career_years: int | None
    updated_at: datetime


class ListPendingAdvisorsUseCase:
    """Use case for reviewing advisor applications (privileged)."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(
        self, request: ListPendingAdvisorsRequest
    ) -> list[AdvisorCandidate]:
        """List PENDING applicants, oldest first.

        Raises:
            ForbiddenError: If the caller is neither MANAGER nor MASTER
        """
        identities = await self.account_service.list_pending_advisors(
            request.caller_roles
        )
        return [
            AdvisorCandidate(
                identity_id=str(identity.id),
                login_handle=str(identity.login_handle),
                display_name=str(identity.display_name),
                main_category=identity.profile.main_category if identity.profile else None,
                career_years=identity.profile.career_years if identity.profile else None,
                updated_at=identity.updated_at,
            )
            for identity in identities
        ]
