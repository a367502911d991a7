"""Domain model entities."""

from passport.domain.model.identity import AdvisorProfile, Identity

__all__ = [
    "AdvisorProfile",
    "Identity",
]
