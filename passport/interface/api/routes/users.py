"""Identity account routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field

from passport.application.usecase.account import (
    AddPointsUseCase,
    ChangePasswordUseCase,
    CreateProfileUseCase,
    DeactivateProfileUseCase,
    GetMeUseCase,
    GetProfileUseCase,
    InitializePasswordUseCase,
    ListIdentitiesUseCase,
    UpdateBasicInfoUseCase,
    UpdateProfileUseCase,
)
from passport.application.usecase.account.add_points import (
    AddPointsRequest,
    AddPointsResponse,
)
from passport.application.usecase.account.common import IdentityResponse
from passport.application.usecase.account.get_me import GetMeRequest
from passport.application.usecase.account.list_identities import (
    ListIdentitiesRequest,
    ListIdentitiesResponse,
)
from passport.application.usecase.account.password import (
    ChangePasswordRequest,
    InitializePasswordRequest,
)
from passport.application.usecase.account.profile import (
    ProfileRequest,
    ProfileResponse,
)
from passport.application.usecase.account.update_basic_info import (
    UpdateBasicInfoRequest,
)
from passport.application.usecase.session import AuthenticateUseCase
from passport.domain.value import IdentityId
from passport.interface.api.security import AuthorizationHeader, authenticate

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class UpdateBasicInfoBody(BaseModel):
    display_name: str = Field(min_length=1, max_length=50)
    contact_id: str | None = Field(default=None, max_length=100)


class InitializePasswordBody(BaseModel):
    new_password: str = Field(min_length=1, max_length=128)


class ChangePasswordBody(BaseModel):
    current_password: str
    new_password: str = Field(min_length=1, max_length=128)


class AddPointsBody(BaseModel):
    amount: int


class ProfileBody(BaseModel):
    main_category: str = Field(min_length=1, max_length=50)
    intro: str = Field(default="", max_length=1000)
    career_years: int = Field(default=0, ge=0)


@router.get("", response_model=ListIdentitiesResponse)
async def list_identities(
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    list_identities_use_case: FromDishka[ListIdentitiesUseCase],
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
    authorization: AuthorizationHeader = None,
) -> ListIdentitiesResponse:
    """List identities page by page. MANAGER or MASTER only."""
    caller = await authenticate(authorization, authenticate_use_case)
    return await list_identities_use_case.execute(
        ListIdentitiesRequest(caller_roles=caller.roles, offset=offset, limit=limit)
    )


@router.get("/me", response_model=IdentityResponse)
async def get_me(
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    get_me_use_case: FromDishka[GetMeUseCase],
    authorization: AuthorizationHeader = None,
) -> IdentityResponse:
    """Get the caller's identity."""
    caller = await authenticate(authorization, authenticate_use_case)
    return await get_me_use_case.execute(GetMeRequest(identity_id=caller.identity_id))


@router.patch("/me", response_model=IdentityResponse)
async def update_basic_info(
    body: UpdateBasicInfoBody,
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    update_basic_info_use_case: FromDishka[UpdateBasicInfoUseCase],
    authorization: AuthorizationHeader = None,
) -> IdentityResponse:
    """Update the caller's display name and contact handle.

    Tokens issued earlier keep the old values until they are refreshed.
    """
    caller = await authenticate(authorization, authenticate_use_case)
    return await update_basic_info_use_case.execute(
        UpdateBasicInfoRequest(
            identity_id=caller.identity_id,
            display_name=body.display_name,
            contact_id=body.contact_id,
        )
    )


@router.post("/me/password/init", status_code=status.HTTP_204_NO_CONTENT)
async def initialize_password(
    body: InitializePasswordBody,
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    initialize_password_use_case: FromDishka[InitializePasswordUseCase],
    authorization: AuthorizationHeader = None,
) -> None:
    """Set a first password for an identity created by social login.

    Errors:
        400 PASSWORD_ALREADY_INITIALIZED
    """
    caller = await authenticate(authorization, authenticate_use_case)
    await initialize_password_use_case.execute(
        InitializePasswordRequest(
            identity_id=caller.identity_id, new_password=body.new_password
        )
    )


@router.post("/me/password/change", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    body: ChangePasswordBody,
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    change_password_use_case: FromDishka[ChangePasswordUseCase],
    authorization: AuthorizationHeader = None,
) -> None:
    """Change the caller's password.

    Errors:
        400 PASSWORD_NOT_INITIALIZED
        400 INVALID_CURRENT_PASSWORD
    """
    caller = await authenticate(authorization, authenticate_use_case)
    await change_password_use_case.execute(
        ChangePasswordRequest(
            identity_id=caller.identity_id,
            current_password=body.current_password,
            new_password=body.new_password,
        )
    )


@router.post("/{identity_id}/points", response_model=AddPointsResponse)
async def add_points(
    identity_id: UUID,
    body: AddPointsBody,
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    add_points_use_case: FromDishka[AddPointsUseCase],
    authorization: AuthorizationHeader = None,
) -> AddPointsResponse:
    """Credit points to an identity. MANAGER or MASTER only.

    Errors:
        400 INVALID_AMOUNT: amount is zero or negative
    """
    caller = await authenticate(authorization, authenticate_use_case)
    return await add_points_use_case.execute(
        AddPointsRequest(
            caller_roles=caller.roles,
            identity_id=IdentityId(identity_id),
            amount=body.amount,
        )
    )


@router.post(
    "/me/profile", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED
)
async def create_profile(
    body: ProfileBody,
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    create_profile_use_case: FromDishka[CreateProfileUseCase],
    authorization: AuthorizationHeader = None,
) -> ProfileResponse:
    """Create the caller's advisor profile.

    Errors:
        400 PROFILE_ALREADY_EXISTS
    """
    caller = await authenticate(authorization, authenticate_use_case)
    return await create_profile_use_case.execute(
        ProfileRequest(identity_id=caller.identity_id, **body.model_dump())
    )


@router.get("/me/profile", response_model=ProfileResponse)
async def get_my_profile(
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    get_profile_use_case: FromDishka[GetProfileUseCase],
    authorization: AuthorizationHeader = None,
) -> ProfileResponse:
    caller = await authenticate(authorization, authenticate_use_case)
    return await get_profile_use_case.execute(caller.identity_id)


@router.put("/me/profile", response_model=ProfileResponse)
async def update_profile(
    body: ProfileBody,
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    update_profile_use_case: FromDishka[UpdateProfileUseCase],
    authorization: AuthorizationHeader = None,
) -> ProfileResponse:
    """Update the caller's advisor profile.

    Errors:
        404 PROFILE_NOT_FOUND
    """
    caller = await authenticate(authorization, authenticate_use_case)
    return await update_profile_use_case.execute(
        ProfileRequest(identity_id=caller.identity_id, **body.model_dump())
    )


@router.delete("/me/profile", response_model=ProfileResponse)
async def deactivate_profile(
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    deactivate_profile_use_case: FromDishka[DeactivateProfileUseCase],
    authorization: AuthorizationHeader = None,
) -> ProfileResponse:
    """Deactivate the caller's advisor profile. The profile is kept."""
    caller = await authenticate(authorization, authenticate_use_case)
    return await deactivate_profile_use_case.execute(caller.identity_id)


@router.get("/{identity_id}/profile", response_model=ProfileResponse)
async def get_profile(
    identity_id: UUID, get_profile_use_case: FromDishka[GetProfileUseCase]
) -> ProfileResponse:
    """Get any identity's advisor profile."""
    return await get_profile_use_case.execute(IdentityId(identity_id))
