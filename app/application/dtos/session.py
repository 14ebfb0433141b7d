"""DTOs for credentials, sessions, and principals."""

from dataclasses import dataclass, field
from datetime import datetime

from app.application.dtos.client import ClientResult, ProjectResult
from app.domain.enums import Role


@dataclass(frozen=True)
class IssuedCredentials:
    """Identifiers and one-time password for a newly booked client.

    temporary_password is excluded from repr so it cannot leak through logs.
    """

    client_id: str
    project_id: str
    username: str
    temporary_password: str = field(repr=False)
    issued_at: datetime


@dataclass(frozen=True)
class Principal:
    """Authenticated identity derived from a verified session token."""

    subject: str
    role: Role
    email: str | None
    project_id: str | None
    issued_at: datetime
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def client_id(self) -> str | None:
        """Client identifier for client principals; None for administrators."""
        return self.subject if self.role == Role.CLIENT else None


@dataclass(frozen=True)
class IssuedSession:
    """Signed bearer token plus the principal it encodes."""

    token: str = field(repr=False)
    principal: Principal
    client: ClientResult | None = None
    project: ProjectResult | None = None
