"""Translation of domain and adapter errors to HTTP responses."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
import logfire

from passport.adapter.error import AdapterError
from passport.domain.error import (
    AccountNotActiveError,
    ConflictError,
    DomainError,
    ForbiddenError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
)

# Most specific first
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (AccountNotActiveError, status.HTTP_403_FORBIDDEN),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (InvalidStateError, status.HTTP_400_BAD_REQUEST),
    (InvalidArgumentError, status.HTTP_400_BAD_REQUEST),
]


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    """Build the error body: ``{"code": ..., "message": ...}``."""
    headers = (
        {"WWW-Authenticate": "Bearer"}
        if status_code == status.HTTP_401_UNAUTHORIZED
        else None
    )
    return JSONResponse(
        status_code=status_code,
        content={"code": code, "message": message},
        headers=headers,
    )


def status_for(error: DomainError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def code_for(error: DomainError) -> str:
    if isinstance(error, NotFoundError):
        return error.resource_code
    return error.code


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)
    logfire.info(
        "Request failed with domain error",
        path=request.url.path,
        code=code_for(exc),
        status_code=status_code,
    )
    return error_response(status_code, code_for(exc), str(exc))


async def handle_adapter_error(request: Request, exc: AdapterError) -> JSONResponse:
    logfire.error(
        "Request failed with adapter error",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return error_response(
        status.HTTP_502_BAD_GATEWAY, "PROVIDER_ERROR", "Upstream provider request failed"
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers translating typed errors to responses."""
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(AdapterError, handle_adapter_error)
