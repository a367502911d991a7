"""Strongly typed identifiers for identity entities."""

from typing import NewType
from uuid import UUID

IdentityId = NewType("IdentityId", UUID)
