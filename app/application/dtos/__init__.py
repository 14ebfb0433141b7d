"""Application DTOs: plain dataclasses exchanged between layers (no ORM, no pydantic)."""

from app.application.dtos.client import (
    ClientCreate,
    ClientCredentialRecord,
    ClientResult,
    ProjectCreate,
    ProjectResult,
    TimelineEntryCreate,
    TimelineEntryResult,
)
from app.application.dtos.deliverable import (
    AccessGrant,
    AccessLogCreate,
    CallerMetadata,
    DashboardResult,
    DeliverableCreate,
    DeliverableResult,
    DeliverableUrls,
    DeliverableView,
)
from app.application.dtos.notification import (
    NotificationFailed,
    NotificationMessage,
    NotificationResult,
    NotificationSent,
)
from app.application.dtos.provisioning import (
    BookingClient,
    BookingEvent,
    BookingProject,
    ProvisioningOutcome,
)
from app.application.dtos.session import IssuedCredentials, IssuedSession, Principal

__all__ = [
    "AccessGrant",
    "AccessLogCreate",
    "BookingClient",
    "BookingEvent",
    "BookingProject",
    "CallerMetadata",
    "ClientCreate",
    "ClientCredentialRecord",
    "ClientResult",
    "DashboardResult",
    "DeliverableCreate",
    "DeliverableResult",
    "DeliverableUrls",
    "DeliverableView",
    "IssuedCredentials",
    "IssuedSession",
    "NotificationFailed",
    "NotificationMessage",
    "NotificationResult",
    "NotificationSent",
    "Principal",
    "ProjectCreate",
    "ProjectResult",
    "ProvisioningOutcome",
    "TimelineEntryCreate",
    "TimelineEntryResult",
]
