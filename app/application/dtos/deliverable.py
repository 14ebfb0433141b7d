"""DTOs for deliverables, access logging, and the client dashboard."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.application.dtos.client import ClientResult, ProjectResult, TimelineEntryResult
from app.domain.enums import AccessType, DeliverableType


@dataclass(frozen=True)
class DeliverableCreate:
    """Input for recording a deliverable stored by the upload collaborator."""

    id: str
    project_id: str
    type: DeliverableType
    category: str
    filename: str
    original_filename: str
    storage_ref: str
    file_size: int
    mime_type: str
    description: str | None = None


@dataclass(frozen=True)
class DeliverableResult:
    """Deliverable read-model."""

    id: str
    project_id: str
    type: DeliverableType
    category: str
    filename: str
    original_filename: str
    storage_ref: str
    file_size: int
    mime_type: str
    description: str | None
    uploaded_at: datetime
    download_count: int


@dataclass(frozen=True)
class CallerMetadata:
    """Request facts recorded with an access (never used for authorization)."""

    ip_address: str | None = None
    user_agent: str | None = None
    request_id: str | None = None


@dataclass(frozen=True)
class AccessLogCreate:
    """Append-only access record. Written together with the download counter increment."""

    client_id: str
    project_id: str
    deliverable_id: str
    access_type: AccessType
    caller: CallerMetadata


@dataclass(frozen=True)
class AccessGrant:
    """Result of a successful access request: time-boxed URL and download name."""

    url: str
    filename: str
    expires_in_seconds: int


@dataclass(frozen=True)
class DeliverableUrls:
    """URL triplet for one deliverable. preview/optimized may be None (e.g. reports)."""

    preview: str | None
    optimized: str | None
    original: str


@dataclass(frozen=True)
class DeliverableView:
    """Deliverable plus its type-appropriate URLs (dashboard and listing)."""

    deliverable: DeliverableResult
    urls: DeliverableUrls


@dataclass(frozen=True)
class DashboardResult:
    """Everything the client dashboard shows for one principal."""

    client: ClientResult
    project: ProjectResult | None
    deliverables: list[DeliverableView]
    timeline: list[TimelineEntryResult]
    stats: dict[str, Any]
