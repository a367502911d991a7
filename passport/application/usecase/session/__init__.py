"""Session use cases."""

from .authenticate import AuthenticateUseCase
from .login import LoginUseCase
from .logout import LogoutUseCase
from .refresh import RefreshUseCase
from .signup import SignupUseCase
from .social_login import SocialLoginUseCase

__all__ = [
    "AuthenticateUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "RefreshUseCase",
    "SignupUseCase",
    "SocialLoginUseCase",
]
