"""Bearer token extraction for routes."""

from typing import Annotated

from fastapi import Header

from passport.application.usecase.session import AuthenticateUseCase
from passport.application.usecase.session.authenticate import (
    AuthenticateRequest,
    AuthenticatedCaller,
)
from passport.domain.error import InvalidTokenError

BEARER_PREFIX = "Bearer "

AuthorizationHeader = Annotated[str | None, Header(alias="Authorization")]
RefreshTokenHeader = Annotated[str | None, Header(alias="X-Refresh-Token")]


def strip_bearer(value: str | None) -> str | None:
    """Return the token from ``Bearer <token>``, or None if absent or not bearer."""
    if not value or not value.startswith(BEARER_PREFIX):
        return None
    token = value[len(BEARER_PREFIX) :].strip()
    return token or None


def strip_optional_bearer(value: str | None) -> str | None:
    """Like ``strip_bearer`` but also accepts a bare token."""
    if not value:
        return None
    if value.startswith(BEARER_PREFIX):
        return strip_bearer(value)
    return value.strip() or None


async def authenticate(
    authorization: str | None, authenticate_use_case: AuthenticateUseCase
) -> AuthenticatedCaller:
    """Resolve the caller from an ``Authorization`` header.

    Raises:
        InvalidTokenError: If the header is missing or the token is unusable
    """
    token = strip_bearer(authorization)
    if token is None:
        raise InvalidTokenError()
    return await authenticate_use_case.execute(AuthenticateRequest(access_token=token))
