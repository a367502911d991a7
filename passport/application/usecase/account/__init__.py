"""Account use cases."""

from .add_points import AddPointsUseCase
from .get_me import GetMeUseCase
from .list_identities import ListIdentitiesUseCase
from .password import ChangePasswordUseCase, InitializePasswordUseCase
from .profile import (
    CreateProfileUseCase,
    DeactivateProfileUseCase,
    GetProfileUseCase,
    UpdateProfileUseCase,
)
from .update_basic_info import UpdateBasicInfoUseCase

__all__ = [
    "AddPointsUseCase",
    "ChangePasswordUseCase",
    "CreateProfileUseCase",
    "DeactivateProfileUseCase",
    "GetMeUseCase",
    "GetProfileUseCase",
    "InitializePasswordUseCase",
    "ListIdentitiesUseCase",
    "UpdateBasicInfoUseCase",
    "UpdateProfileUseCase",
]
