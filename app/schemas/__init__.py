"""Pydantic request/response schemas for the API (camelCase on the wire)."""

from app.schemas.auth import (
    AdminTokenResponse,
    ClientTokenResponse,
    LoginRequest,
    SessionUser,
    session_user,
)
from app.schemas.client import (
    AccessUpdateRequest,
    AdminClientResponse,
    ClientSummary,
    ClientUpdateResponse,
    DashboardResponse,
    DashboardStats,
    StatusUpdateRequest,
    TimelineEntryResponse,
    admin_client_response,
    dashboard_response,
)
from app.schemas.common import CamelModel, MessageResponse
from app.schemas.deliverable import (
    DeliverableListResponse,
    DeliverableRegisterRequest,
    DeliverableRegisterResponse,
    DeliverableResponse,
    DeliverableUrlsResponse,
    DownloadResponse,
    deliverable_response,
)
from app.schemas.health import HealthResponse
from app.schemas.webhook import ProvisioningOutcomeResponse, WebhookResponse

__all__ = [
    "AccessUpdateRequest",
    "AdminClientResponse",
    "AdminTokenResponse",
    "CamelModel",
    "ClientSummary",
    "ClientTokenResponse",
    "ClientUpdateResponse",
    "DashboardResponse",
    "DashboardStats",
    "DeliverableListResponse",
    "DeliverableRegisterRequest",
    "DeliverableRegisterResponse",
    "DeliverableResponse",
    "DeliverableUrlsResponse",
    "DownloadResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "ProvisioningOutcomeResponse",
    "SessionUser",
    "StatusUpdateRequest",
    "TimelineEntryResponse",
    "WebhookResponse",
    "admin_client_response",
    "dashboard_response",
    "deliverable_response",
    "session_user",
]
