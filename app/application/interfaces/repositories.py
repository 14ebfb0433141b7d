"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
Write methods commit their own unit of work.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

from app.domain.enums import ClientStatus

if TYPE_CHECKING:
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
        AccessLogCreate,
        DeliverableCreate,
        DeliverableResult,
    )


# Client repository interface
class IClientRepository(Protocol):
    """Protocol for client store (unique email)."""

    async def get_by_id(self, client_id: str) -> ClientResult | None:
        """Return client by ID."""

    async def get_by_email(self, email: str) -> ClientResult | None:
        """Return client by (case-insensitive) email."""

    async def get_credentials_by_email(self, email: str) -> ClientCredentialRecord | None:
        """Return client plus password hash for login. Never exposed outside the session service."""

    async def create_with_project(
        self,
        client: ClientCreate,
        project: ProjectCreate,
        timeline: TimelineEntryCreate,
    ) -> tuple[ClientResult, ProjectResult]:
        """Insert client, project and first timeline entry in one committed unit.

        Raises ClientAlreadyExistsException if the email is already taken
        (including a concurrent insert that won the race).
        """

    async def list_clients(self, skip: int = 0, limit: int = 100) -> list[ClientResult]:
        """Return clients newest first."""

    async def update_access_policy(
        self, client_id: str, policy: dict[str, bool]
    ) -> ClientResult | None:
        """Replace deliverables_access. None if client not found."""

    async def update_status(
        self,
        client_id: str,
        status: ClientStatus,
        *,
        deposit_received: bool | None = None,
        activated_at: datetime | None = None,
    ) -> ClientResult | None:
        """Set status (and optionally deposit/activation time). None if client not found."""

    async def touch_last_login(self, client_id: str, when: datetime) -> None:
        """Record a successful login."""


# Project repository interface
class IProjectRepository(Protocol):
    """Protocol for project store."""

    async def get_by_id(self, project_id: str) -> ProjectResult | None:
        """Return project by ID."""

    async def get_latest_for_client(self, client_id: str) -> ProjectResult | None:
        """Return the client's most recently created project."""

    async def merge_details(
        self, project_id: str, details: dict[str, Any]
    ) -> ProjectResult | None:
        """Merge keys into project details and commit. None if project not found."""


# Deliverable repository interface
class IDeliverableRepository(Protocol):
    """Protocol for deliverable store and access log."""

    async def get_by_id(self, deliverable_id: str) -> DeliverableResult | None:
        """Return deliverable by ID."""

    async def list_for_project(self, project_id: str) -> list[DeliverableResult]:
        """Return deliverables of a project, newest first."""

    async def create(self, data: DeliverableCreate) -> DeliverableResult:
        """Insert a deliverable and commit."""

    async def record_access(self, entry: AccessLogCreate) -> None:
        """Append an access log entry and increment download_count by 1, in one committed unit."""


# Timeline repository interface
class ITimelineRepository(Protocol):
    """Protocol for project timeline store."""

    async def add(self, entry: TimelineEntryCreate) -> TimelineEntryResult:
        """Append a timeline entry and commit."""

    async def list_for_project(
        self, project_id: str, limit: int = 50
    ) -> list[TimelineEntryResult]:
        """Return timeline entries, newest first."""


# Access recorder interface
class IAccessRecorder(Protocol):
    """Records one deliverable access as its own committed unit.

    Implementations must not share the request's session, so the write can
    finish after the request is cancelled.
    """

    async def __call__(self, entry: AccessLogCreate) -> None:
        """Append the access log entry and increment download_count."""
