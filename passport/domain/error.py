"""Domain layer errors.

Each family maps to one status class at the HTTP boundary: NotFound to 404,
Conflict to 409, Unauthorized to 401/403, InvalidState and InvalidArgument
to 400.
"""

from pydantic import ValidationError


class DomainError(Exception):
    """Base domain error."""

    code = "DOMAIN_ERROR"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    code = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")

    @property
    def resource_code(self) -> str:
        return f"{self.resource.upper().replace(' ', '_')}_NOT_FOUND"


class ConflictError(DomainError):
    """Raised when a write collides with existing state."""

    code = "CONFLICT"


class DuplicateHandleError(ConflictError):
    """Login handle is already taken."""

    code = "DUPLICATE_HANDLE"

    def __init__(self, login_handle: str):
        self.login_handle = login_handle
        super().__init__(f"Login handle already in use: {login_handle}")


class DuplicateSocialLinkError(ConflictError):
    """(provider, provider_user_id) is already linked to an identity."""

    code = "DUPLICATE_SOCIAL_LINK"

    def __init__(self, provider: str, provider_user_id: str):
        self.provider = provider
        self.provider_user_id = provider_user_id
        super().__init__(f"Social account already linked: {provider}/{provider_user_id}")


class StaleIdentityError(ConflictError):
    """Identity was modified by someone else since it was loaded."""

    code = "CONCURRENT_MODIFICATION"

    def __init__(self, identity_id: str, expected_version: int):
        self.identity_id = identity_id
        self.expected_version = expected_version
        super().__init__(
            f"Identity {identity_id} changed concurrently (expected version {expected_version})"
        )


class UnauthorizedError(DomainError):
    """Base for authentication and authorization failures."""

    code = "UNAUTHORIZED"


class InvalidCredentialsError(UnauthorizedError):
    """Login handle unknown or password wrong.

    The two cases are intentionally indistinguishable to the caller.
    """

    code = "INVALID_CREDENTIALS"

    def __init__(self):
        super().__init__("Invalid login handle or password")


class InvalidTokenError(UnauthorizedError):
    """Token is forged, expired, revoked, or of the wrong kind."""

    code = "INVALID_TOKEN"

    def __init__(self):
        super().__init__("Invalid token")


class ForbiddenError(UnauthorizedError):
    """Caller is authenticated but lacks the required role."""

    code = "FORBIDDEN"

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Not permitted to {action}")


class AccountNotActiveError(UnauthorizedError):
    """Identity exists but its account status does not allow login."""

    code = "USER_STATUS_NOT_ACTIVE"

    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Account is not active: {status}")


class InvalidStateError(DomainError):
    """Operation is not legal in the identity's current state."""

    code = "INVALID_STATE"


class PasswordAlreadyInitializedError(InvalidStateError):
    code = "PASSWORD_ALREADY_INITIALIZED"

    def __init__(self):
        super().__init__("Password has already been initialized")


class PasswordNotInitializedError(InvalidStateError):
    code = "PASSWORD_NOT_INITIALIZED"

    def __init__(self):
        super().__init__("Password has not been initialized")


class CurrentPasswordMismatchError(InvalidStateError):
    code = "INVALID_CURRENT_PASSWORD"

    def __init__(self):
        super().__init__("Current password does not match")


class ProfileAlreadyExistsError(InvalidStateError):
    code = "PROFILE_ALREADY_EXISTS"

    def __init__(self):
        super().__init__("Advisor profile already exists")


class InvalidArgumentError(DomainError):
    """Input is well-formed but not acceptable."""

    code = "INVALID_ARGUMENT"


class InvalidFieldError(InvalidArgumentError):
    """A field value was rejected by its value object."""

    code = "INVALID_FIELD"

    @classmethod
    def from_validation(cls, error: ValidationError) -> "InvalidFieldError":
        details = error.errors()
        message = details[0]["msg"] if details else str(error)
        return cls(message.removeprefix("Value error, "))


class InvalidAmountError(InvalidArgumentError):
    code = "INVALID_AMOUNT"

    def __init__(self, amount: int):
        self.amount = amount
        super().__init__(f"Amount must be positive: {amount}")


class UnsupportedProviderError(InvalidArgumentError):
    code = "UNSUPPORTED_PROVIDER"

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Unsupported social login provider: {provider}")
