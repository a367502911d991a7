"""Shared session response models."""

from pydantic import BaseModel

from passport.domain.service import TokenPair
from passport.domain.value import Role
from passport.util.jwt import SubjectClaims


class SessionResponse(BaseModel):
    """Token pair plus the identity summary it was issued for."""

    identity_id: str
    display_name: str
    email: str | None
    contact_id: str | None
    roles: list[Role]
    access_token: str
    refresh_token: str

    @classmethod
    def from_pair(cls, pair: TokenPair, subject: SubjectClaims) -> "SessionResponse":
        return cls(
            identity_id=str(subject.subject_id),
            display_name=subject.display_name,
            email=subject.email,
            contact_id=subject.contact_id,
            roles=subject.roles,
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
        )
