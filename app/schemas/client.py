"""Client API schemas: dashboard and administrator views of client accounts."""

from datetime import datetime
from typing import Any

from pydantic import Field

from app.application.dtos.client import ClientResult
from app.application.dtos.deliverable import DashboardResult
from app.domain.enums import ClientStatus
from app.schemas.common import CamelModel
from app.schemas.deliverable import DeliverableResponse, deliverable_response


class ClientSummary(CamelModel):
    """Client block of the dashboard."""

    client_id: str
    company_name: str
    contact_name: str
    email: str
    status: str
    project_id: str | None = None
    project_name: str | None = None
    project_details: dict[str, Any] = Field(default_factory=dict)
    deliverables_access: dict[str, bool] = Field(default_factory=dict)


class TimelineEntryResponse(CamelModel):
    """One project timeline entry."""

    id: str
    event_type: str
    title: str
    description: str | None = None
    event_date: datetime


class DashboardStats(CamelModel):
    """Visible deliverable counts: total and one per type."""

    total_files: int = 0
    images_count: int = 0
    maps_count: int = 0
    models_count: int = 0
    videos_count: int = 0
    reports_count: int = 0


class DashboardResponse(CamelModel):
    """Response for GET /api/client/dashboard."""

    client: ClientSummary
    deliverables: list[DeliverableResponse]
    timeline: list[TimelineEntryResponse]
    stats: DashboardStats


class AdminClientResponse(CamelModel):
    """One row of GET /api/admin/clients. Never includes password material."""

    client_id: str
    email: str
    company_name: str
    contact_name: str
    phone: str | None = None
    status: str
    deposit_received: bool
    deliverables_access: dict[str, bool]
    created_at: datetime | None = None
    activated_at: datetime | None = None
    last_login_at: datetime | None = None


class AccessUpdateRequest(CamelModel):
    """Request body for PUT /api/admin/clients/{clientId}/access."""

    deliverables_access: dict[str, bool]


class StatusUpdateRequest(CamelModel):
    """Request body for PUT /api/admin/clients/{clientId}/status."""

    status: ClientStatus
    deposit_received: bool | None = None


class ClientUpdateResponse(CamelModel):
    """Response for access and status updates."""

    success: bool = True
    message: str
    client: AdminClientResponse


def admin_client_response(client: ClientResult) -> AdminClientResponse:
    """Build the administrator view of a client account."""
    return AdminClientResponse(
        client_id=client.id,
        email=client.email,
        company_name=client.company_name,
        contact_name=client.contact_name,
        phone=client.phone,
        status=client.status.value,
        deposit_received=client.deposit_received,
        deliverables_access=dict(client.deliverables_access),
        created_at=client.created_at,
        activated_at=client.activated_at,
        last_login_at=client.last_login_at,
    )


def dashboard_response(result: DashboardResult) -> DashboardResponse:
    """Build the dashboard body from the dashboard read-model."""
    client, project = result.client, result.project
    return DashboardResponse(
        client=ClientSummary(
            client_id=client.id,
            company_name=client.company_name,
            contact_name=client.contact_name,
            email=client.email,
            status=client.status.value,
            project_id=project.id if project else None,
            project_name=project.name if project else None,
            project_details=dict(project.details) if project else {},
            deliverables_access=dict(client.deliverables_access),
        ),
        deliverables=[deliverable_response(v) for v in result.deliverables],
        timeline=[
            TimelineEntryResponse(
                id=t.id,
                event_type=t.event_type,
                title=t.title,
                description=t.description,
                event_date=t.event_date,
            )
            for t in result.timeline
        ],
        stats=DashboardStats(**result.stats),
    )
