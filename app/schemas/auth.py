"""Auth API schemas: client and administrator login."""

from datetime import datetime
from typing import Any, Literal

from pydantic import Field

from app.application.dtos.session import IssuedSession
from app.schemas.common import CamelModel


class LoginRequest(CamelModel):
    """Request body for client or administrator login."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=256)


class SessionUser(CamelModel):
    """Client summary returned with a client session."""

    client_id: str
    project_id: str | None = None
    company_name: str
    contact_name: str
    email: str
    project_details: dict[str, Any] = Field(default_factory=dict)
    deliverables_access: dict[str, bool] = Field(default_factory=dict)


class ClientTokenResponse(CamelModel):
    """Client session token."""

    token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: SessionUser


class AdminTokenResponse(CamelModel):
    """Administrator session token."""

    token: str
    role: Literal["admin"] = "admin"
    expires_at: datetime


def session_user(session: IssuedSession) -> SessionUser:
    """Client summary for a freshly issued client session."""
    client, project = session.client, session.project
    return SessionUser(
        client_id=client.id,
        project_id=project.id if project else None,
        company_name=client.company_name,
        contact_name=client.contact_name,
        email=client.email,
        project_details=dict(project.details) if project else {},
        deliverables_access=dict(client.deliverables_access),
    )
