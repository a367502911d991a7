"""Advisor profile use cases."""

from pydantic import BaseModel, Field

from passport.domain.model import AdvisorProfile
from passport.domain.service import AccountService
from passport.domain.value import IdentityId


class ProfileRequest(BaseModel):
    """Create or update an advisor profile."""

    identity_id: IdentityId  # From authenticated caller
    main_category: str = Field(min_length=1, max_length=50)
    intro: str = Field(default="", max_length=1000)
    career_years: int = Field(default=0, ge=0)


class ProfileResponse(BaseModel):
    identity_id: str
    main_category: str
    intro: str
    career_years: int
    active: bool

    @classmethod
    def from_profile(
        cls, identity_id: IdentityId, profile: AdvisorProfile
    ) -> "ProfileResponse":
        return cls(
            identity_id=str(identity_id),
            main_category=profile.main_category,
            intro=profile.intro,
            career_years=profile.career_years,
            active=profile.active,
        )


class CreateProfileUseCase:
    """Use case for attaching an advisor profile."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: ProfileRequest) -> ProfileResponse:
        """Create the profile.

        Raises:
            ProfileAlreadyExistsError: If the identity already has one
        """
        profile = AdvisorProfile(
            main_category=request.main_category,
            intro=request.intro,
            career_years=request.career_years,
        )
        identity = await self.account_service.create_profile(
            request.identity_id, profile
        )
        return ProfileResponse.from_profile(identity.id, identity.profile)


class GetProfileUseCase:
    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, identity_id: IdentityId) -> ProfileResponse:
        profile = await self.account_service.get_profile(identity_id)
        return ProfileResponse.from_profile(identity_id, profile)


class UpdateProfileUseCase:
    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: ProfileRequest) -> ProfileResponse:
        """Update the profile.

        Raises:
            NotFoundError: If the identity has no profile
        """
        identity = await self.account_service.update_profile(
            request.identity_id,
            request.main_category,
            request.intro,
            request.career_years,
        )
        return ProfileResponse.from_profile(identity.id, identity.profile)


class DeactivateProfileUseCase:
    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, identity_id: IdentityId) -> ProfileResponse:
        identity = await self.account_service.deactivate_profile(identity_id)
        return ProfileResponse.from_profile(identity.id, identity.profile)
