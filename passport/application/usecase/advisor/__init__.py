"""Advisor promotion use cases."""

from .apply import ApplyAdvisorUseCase
from .approve import ApproveAdvisorUseCase
from .list_pending import ListPendingAdvisorsUseCase

__all__ = [
    "ApplyAdvisorUseCase",
    "ApproveAdvisorUseCase",
    "ListPendingAdvisorsUseCase",
]
