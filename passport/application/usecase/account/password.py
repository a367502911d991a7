"""Password use cases."""

from pydantic import BaseModel, Field

from passport.domain.service import AccountService
from passport.domain.value import IdentityId


class InitializePasswordRequest(BaseModel):
    identity_id: IdentityId  # From authenticated caller
    new_password: str = Field(min_length=1, max_length=128)


class ChangePasswordRequest(BaseModel):
    identity_id: IdentityId  # From authenticated caller
    current_password: str
    new_password: str = Field(min_length=1, max_length=128)


class InitializePasswordUseCase:
    """Use case for setting the first password of a social-only identity."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: InitializePasswordRequest) -> None:
        """Set the password.

        Raises:
            PasswordAlreadyInitializedError: If a password was already set
        """
        await self.account_service.initialize_password(
            request.identity_id, request.new_password
        )


class ChangePasswordUseCase:
    """Use case for replacing a known password."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: ChangePasswordRequest) -> None:
        """Change the password.

        Raises:
            PasswordNotInitializedError: If no password has been set yet
            CurrentPasswordMismatchError: If the current password is wrong
        """
        await self.account_service.change_password(
            request.identity_id, request.current_password, request.new_password
        )
