"""Client repository. Interface methods return application DTOs; the hash only leaves via credentials lookup."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.client import (
    ClientCreate,
    ClientCredentialRecord,
    ClientResult,
    ProjectCreate,
    ProjectResult,
    TimelineEntryCreate,
)
from app.domain.enums import ClientStatus, Role
from app.domain.exceptions import ClientAlreadyExistsException
from app.infrastructure.persistence.models.client import Client
from app.infrastructure.persistence.models.project import Project
from app.infrastructure.persistence.models.timeline import ProjectTimeline
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.project_repo import project_to_result

UNIQUE_EMAIL_CONSTRAINT = "uq_client_email"


def client_to_result(c: Client) -> ClientResult:
    """Map ORM Client to application ClientResult (no password)."""
    return ClientResult(
        id=c.id,
        email=c.email,
        contact_name=c.contact_name,
        company_name=c.company_name,
        phone=c.phone,
        role=Role(c.role),
        status=ClientStatus(c.status),
        deposit_received=c.deposit_received,
        deliverables_access=dict(c.deliverables_access or {}),
        created_at=c.created_at,
        activated_at=c.activated_at,
        last_login_at=c.last_login_at,
    )


def _is_unique_email_violation(error: IntegrityError) -> bool:
    return UNIQUE_EMAIL_CONSTRAINT in str(error.orig)


class ClientRepository(BaseRepository[Client]):
    """Client store. Email uniqueness is enforced by uq_client_email, not by locks."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Client)

    async def get_by_id(self, client_id: str) -> ClientResult | None:
        client = await self._get_model(client_id)
        return client_to_result(client) if client else None

    async def _get_model_by_email(self, email: str) -> Client | None:
        result = await self.db.execute(
            select(Client).where(func.lower(Client.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> ClientResult | None:
        client = await self._get_model_by_email(email)
        return client_to_result(client) if client else None

    async def get_credentials_by_email(self, email: str) -> ClientCredentialRecord | None:
        client = await self._get_model_by_email(email)
        if client is None:
            return None
        return ClientCredentialRecord(
            client=client_to_result(client), hashed_password=client.hashed_password
        )

    async def create_with_project(
        self,
        client: ClientCreate,
        project: ProjectCreate,
        timeline: TimelineEntryCreate,
    ) -> tuple[ClientResult, ProjectResult]:
        """Insert client, project and timeline entry; raise ClientAlreadyExistsException on duplicate email."""
        client_row = Client(
            id=client.id,
            email=client.email.lower(),
            contact_name=client.contact_name,
            company_name=client.company_name,
            phone=client.phone,
            hashed_password=client.hashed_password,
            role=client.role.value,
            status=client.status.value,
            deposit_received=client.deposit_received,
            activated_at=client.activated_at,
            deliverables_access=dict(client.deliverables_access),
        )
        project_row = Project(
            id=project.id,
            client_id=client.id,
            name=project.name,
            details=dict(project.details),
        )
        timeline_row = ProjectTimeline(
            project_id=project.id,
            event_type=timeline.event_type,
            title=timeline.title,
            description=timeline.description,
        )
        self.db.add(client_row)
        self.db.add(project_row)
        self.db.add(timeline_row)
        try:
            await self._commit()
        except IntegrityError as e:
            if _is_unique_email_violation(e):
                raise ClientAlreadyExistsException(client.email) from e
            raise
        await self.db.refresh(client_row)
        await self.db.refresh(project_row)
        return client_to_result(client_row), project_to_result(project_row)

    async def list_clients(self, skip: int = 0, limit: int = 100) -> list[ClientResult]:
        result = await self.db.execute(
            select(Client).order_by(Client.created_at.desc()).offset(skip).limit(limit)
        )
        return [client_to_result(c) for c in result.scalars().all()]

    async def update_access_policy(
        self, client_id: str, policy: dict[str, bool]
    ) -> ClientResult | None:
        client = await self._get_model(client_id)
        if client is None:
            return None
        client.deliverables_access = dict(policy)
        await self._commit()
        await self.db.refresh(client)
        return client_to_result(client)

    async def update_status(
        self,
        client_id: str,
        status: ClientStatus,
        *,
        deposit_received: bool | None = None,
        activated_at: datetime | None = None,
    ) -> ClientResult | None:
        client = await self._get_model(client_id)
        if client is None:
            return None
        client.status = status.value
        if deposit_received is not None:
            client.deposit_received = deposit_received
        if activated_at is not None:
            client.activated_at = activated_at
        await self._commit()
        await self.db.refresh(client)
        return client_to_result(client)

    async def touch_last_login(self, client_id: str, when: datetime) -> None:
        await self.db.execute(
            update(Client).where(Client.id == client_id).values(last_login_at=when)
        )
        await self._commit()
