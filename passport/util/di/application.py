"""Application layer DI providers."""

from dishka import Scope, provide

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
from passport.application.usecase.advisor import (
    ApplyAdvisorUseCase,
    ApproveAdvisorUseCase,
    ListPendingAdvisorsUseCase,
)
from passport.application.usecase.session import (
    AuthenticateUseCase,
    LoginUseCase,
    LogoutUseCase,
    RefreshUseCase,
    SignupUseCase,
    SocialLoginUseCase,
)
from passport.domain.service import (
    AccountService,
    AuthService,
    IdentityResolver,
    TokenService,
)
from passport.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Session use cases
    @provide
    def get_signup_use_case(self, identity_resolver: IdentityResolver) -> SignupUseCase:
        """Provide signup use case."""
        return SignupUseCase(identity_resolver=identity_resolver)

    @provide
    def get_login_use_case(
        self, identity_resolver: IdentityResolver, token_service: TokenService
    ) -> LoginUseCase:
        """Provide local login use case."""
        return LoginUseCase(
            identity_resolver=identity_resolver, token_service=token_service
        )

    @provide
    def get_social_login_use_case(
        self,
        auth_service: AuthService,
        identity_resolver: IdentityResolver,
        token_service: TokenService,
    ) -> SocialLoginUseCase:
        """Provide social login use case."""
        return SocialLoginUseCase(
            auth_service=auth_service,
            identity_resolver=identity_resolver,
            token_service=token_service,
        )

    @provide
    def get_refresh_use_case(self, token_service: TokenService) -> RefreshUseCase:
        return RefreshUseCase(token_service=token_service)

    @provide
    def get_logout_use_case(self, token_service: TokenService) -> LogoutUseCase:
        return LogoutUseCase(token_service=token_service)

    @provide
    def get_authenticate_use_case(
        self, token_service: TokenService
    ) -> AuthenticateUseCase:
        return AuthenticateUseCase(token_service=token_service)

    # Account use cases
    @provide
    def get_get_me_use_case(self, account_service: AccountService) -> GetMeUseCase:
        return GetMeUseCase(account_service=account_service)

    @provide
    def get_update_basic_info_use_case(
        self, account_service: AccountService
    ) -> UpdateBasicInfoUseCase:
        return UpdateBasicInfoUseCase(account_service=account_service)

    @provide
    def get_initialize_password_use_case(
        self, account_service: AccountService
    ) -> InitializePasswordUseCase:
        return InitializePasswordUseCase(account_service=account_service)

    @provide
    def get_change_password_use_case(
        self, account_service: AccountService
    ) -> ChangePasswordUseCase:
        return ChangePasswordUseCase(account_service=account_service)

    @provide
    def get_add_points_use_case(
        self, account_service: AccountService
    ) -> AddPointsUseCase:
        return AddPointsUseCase(account_service=account_service)

    @provide
    def get_list_identities_use_case(
        self, account_service: AccountService
    ) -> ListIdentitiesUseCase:
        return ListIdentitiesUseCase(account_service=account_service)

    # Advisor profile use cases
    @provide
    def get_create_profile_use_case(
        self, account_service: AccountService
    ) -> CreateProfileUseCase:
        return CreateProfileUseCase(account_service=account_service)

    @provide
    def get_get_profile_use_case(
        self, account_service: AccountService
    ) -> GetProfileUseCase:
        return GetProfileUseCase(account_service=account_service)

    @provide
    def get_update_profile_use_case(
        self, account_service: AccountService
    ) -> UpdateProfileUseCase:
        return UpdateProfileUseCase(account_service=account_service)

    @provide
    def get_deactivate_profile_use_case(
        self, account_service: AccountService
    ) -> DeactivateProfileUseCase:
        return DeactivateProfileUseCase(account_service=account_service)

    # Advisor promotion use cases
    @provide
    def get_apply_advisor_use_case(
        self, account_service: AccountService
    ) -> ApplyAdvisorUseCase:
        return ApplyAdvisorUseCase(account_service=account_service)

    @provide
    def get_approve_advisor_use_case(
        self, account_service: AccountService
    ) -> ApproveAdvisorUseCase:
        return ApproveAdvisorUseCase(account_service=account_service)

    @provide
    def get_list_pending_advisors_use_case(
        self, account_service: AccountService
    ) -> ListPendingAdvisorsUseCase:
        return ListPendingAdvisorsUseCase(account_service=account_service)
