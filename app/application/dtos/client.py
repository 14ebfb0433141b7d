"""DTOs for client, project, and timeline records (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.enums import ClientStatus, Role


@dataclass(frozen=True)
class ClientCreate:
    """Input for creating a client record. Password is already hashed."""

    id: str
    email: str
    contact_name: str
    company_name: str
    phone: str | None
    hashed_password: str
    status: ClientStatus
    role: Role = Role.CLIENT
    deposit_received: bool = False
    activated_at: datetime | None = None
    deliverables_access: dict[str, bool] = field(default_factory=dict)


@dataclass(frozen=True)
class ClientResult:
    """Client read-model. Never carries the password hash."""

    id: str
    email: str
    contact_name: str
    company_name: str
    phone: str | None
    role: Role
    status: ClientStatus
    deposit_received: bool
    deliverables_access: dict[str, bool]
    created_at: datetime | None = None
    activated_at: datetime | None = None
    last_login_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status == ClientStatus.ACTIVE


@dataclass(frozen=True)
class ClientCredentialRecord:
    """Login view of a client: identity, status, and password hash. Used only by the session service."""

    client: ClientResult
    hashed_password: str


@dataclass(frozen=True)
class ProjectCreate:
    """Input for creating a project record."""

    id: str
    client_id: str
    name: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ProjectResult:
    """Project read-model. details is opaque service metadata passed through."""

    id: str
    client_id: str
    name: str
    details: dict[str, Any]
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class TimelineEntryCreate:
    """Input for appending a project timeline entry."""

    project_id: str
    event_type: str
    title: str
    description: str | None = None


@dataclass(frozen=True)
class TimelineEntryResult:
    """Project timeline entry read-model."""

    id: str
    project_id: str
    event_type: str
    title: str
    description: str | None
    event_date: datetime
