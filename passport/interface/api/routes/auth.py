"""Authentication routes."""

import secrets

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status
from pydantic import BaseModel

from passport.application.usecase.account import GetMeUseCase
from passport.application.usecase.account.common import IdentityResponse
from passport.application.usecase.account.get_me import GetMeRequest
from passport.application.usecase.session import (
    AuthenticateUseCase,
    LoginUseCase,
    LogoutUseCase,
    RefreshUseCase,
    SignupUseCase,
    SocialLoginUseCase,
)
from passport.application.usecase.session.common import SessionResponse
from passport.application.usecase.session.login import LoginRequest
from passport.application.usecase.session.logout import LogoutRequest
from passport.application.usecase.session.refresh import RefreshRequest
from passport.application.usecase.session.signup import SignupRequest, SignupResponse
from passport.application.usecase.session.social_login import SocialLoginRequest
from passport.domain.error import InvalidTokenError
from passport.domain.service import AuthService
from passport.interface.api.security import (
    AuthorizationHeader,
    RefreshTokenHeader,
    authenticate,
    strip_bearer,
    strip_optional_bearer,
)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class AuthorizationUrlResponse(BaseModel):
    authorization_url: str
    state: str


class LogoutResponse(BaseModel):
    success: bool
    message: str


@router.post(
    "/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED
)
async def signup(
    request: SignupRequest, signup_use_case: FromDishka[SignupUseCase]
) -> SignupResponse:
    """Create an identity with a local password.

    Errors:
        409 DUPLICATE_HANDLE: handle already taken
    """
    return await signup_use_case.execute(request)


@router.post("/login", response_model=SessionResponse)
async def login(
    request: LoginRequest, login_use_case: FromDishka[LoginUseCase]
) -> SessionResponse:
    """Log in with handle and password.

    Errors:
        401 INVALID_CREDENTIALS: unknown handle or wrong password
        403 USER_STATUS_NOT_ACTIVE: account blocked or inactive
    """
    return await login_use_case.execute(request)


@router.post("/refresh", response_model=SessionResponse)
async def refresh(
    refresh_use_case: FromDishka[RefreshUseCase],
    authorization: AuthorizationHeader = None,
) -> SessionResponse:
    """Exchange a refresh token for a new pair.

    The refresh token is presented as ``Authorization: Bearer <refresh token>``
    and can be used once.

    Errors:
        401 INVALID_TOKEN: token missing, invalid, expired, wrong kind, or used
    """
    token = strip_bearer(authorization)
    if token is None:
        raise InvalidTokenError()
    return await refresh_use_case.execute(RefreshRequest(refresh_token=token))


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    logout_use_case: FromDishka[LogoutUseCase],
    authorization: AuthorizationHeader = None,
    x_refresh_token: RefreshTokenHeader = None,
) -> LogoutResponse:
    """Revoke the session's tokens.

    Takes ``Authorization: Bearer <access token>`` and an optional
    ``X-Refresh-Token`` header. Always succeeds.
    """
    await logout_use_case.execute(
        LogoutRequest(
            access_token=strip_bearer(authorization),
            refresh_token=strip_optional_bearer(x_refresh_token),
        )
    )
    return LogoutResponse(success=True, message="Successfully logged out")


@router.get("/oauth/{provider}/authorize", response_model=AuthorizationUrlResponse)
async def initiate_social_login(
    provider: str, auth_service: FromDishka[AuthService]
) -> AuthorizationUrlResponse:
    """Start a social login by getting the provider's authorization URL.

    Errors:
        400 UNSUPPORTED_PROVIDER: provider key not kakao, google or naver
    """
    state = secrets.token_urlsafe(32)
    url = await auth_service.initiate_login(provider, state)
    return AuthorizationUrlResponse(authorization_url=url, state=state)


@router.get("/oauth/{provider}/callback", response_model=SessionResponse)
async def social_login_callback(
    provider: str,
    code: str,
    state: str,
    social_login_use_case: FromDishka[SocialLoginUseCase],
) -> SessionResponse:
    """Complete a social login and issue a token pair.

    The first login from a social account creates its identity.

    Errors:
        400 UNSUPPORTED_PROVIDER: unknown provider key
        502 PROVIDER_ERROR: the provider handshake failed
    """
    return await social_login_use_case.execute(
        SocialLoginRequest(provider=provider, code=code, state=state)
    )


@router.get("/me", response_model=IdentityResponse)
async def get_current_identity(
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    get_me_use_case: FromDishka[GetMeUseCase],
    authorization: AuthorizationHeader = None,
) -> IdentityResponse:
    """Get the identity behind the bearer access token."""
    caller = await authenticate(authorization, authenticate_use_case)
    return await get_me_use_case.execute(GetMeRequest(identity_id=caller.identity_id))
