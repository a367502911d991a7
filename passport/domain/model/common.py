"""Shared pydantic configuration for identity models."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Frozen model; state changes go through ``model_copy``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
