"""Local signup use case."""

from pydantic import BaseModel, Field

from passport.domain.service import IdentityResolver


class SignupRequest(BaseModel):
    """Local signup request."""

    login_handle: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=1, max_length=128)
    display_name: str = Field(min_length=1, max_length=50)
    contact_id: str | None = Field(default=None, max_length=100)


class SignupResponse(BaseModel):
    """Signup response."""

    identity_id: str
    login_handle: str


class SignupUseCase:
    """Use case for creating an identity with a local password."""

    def __init__(self, identity_resolver: IdentityResolver) -> None:
        """Initialize signup use case.

        Args:
            identity_resolver: Identity domain service
        """
        self.identity_resolver = identity_resolver

    async def execute(self, request: SignupRequest) -> SignupResponse:
        """Create the identity.

        Raises:
            DuplicateHandleError: If the handle is already taken
        """
        identity = await self.identity_resolver.register_local(
            login_handle=request.login_handle,
            raw_password=request.password,
            display_name=request.display_name,
            contact_id=request.contact_id,
        )
        return SignupResponse(
            identity_id=str(identity.id), login_handle=str(identity.login_handle)
        )
