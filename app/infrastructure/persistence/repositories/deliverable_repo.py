"""Deliverable repository with the append-only access log."""

from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.deliverable import (
    AccessLogCreate,
    DeliverableCreate,
    DeliverableResult,
)
from app.domain.enums import DeliverableType
from app.domain.exceptions import StoreUnavailableException
from app.infrastructure.persistence.models.access_log import AccessLog
from app.infrastructure.persistence.models.deliverable import Deliverable
from app.infrastructure.persistence.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def deliverable_to_result(d: Deliverable) -> DeliverableResult:
    """Map ORM Deliverable to application DeliverableResult."""
    return DeliverableResult(
        id=d.id,
        project_id=d.project_id,
        type=DeliverableType(d.type),
        category=d.category,
        filename=d.filename,
        original_filename=d.original_filename,
        storage_ref=d.storage_ref,
        file_size=d.file_size,
        mime_type=d.mime_type,
        description=d.description,
        uploaded_at=d.uploaded_at,
        download_count=d.download_count,
    )


class DeliverableRepository(BaseRepository[Deliverable]):
    """Deliverable store. download_count changes only through record_access."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Deliverable)

    async def get_by_id(self, deliverable_id: str) -> DeliverableResult | None:
        deliverable = await self._get_model(deliverable_id)
        return deliverable_to_result(deliverable) if deliverable else None

    async def list_for_project(self, project_id: str) -> list[DeliverableResult]:
        result = await self.db.execute(
            select(Deliverable)
            .where(Deliverable.project_id == project_id)
            .order_by(Deliverable.uploaded_at.desc())
        )
        return [deliverable_to_result(d) for d in result.scalars().all()]

    async def create(self, data: DeliverableCreate) -> DeliverableResult:
        row = Deliverable(
            id=data.id,
            project_id=data.project_id,
            type=data.type.value,
            category=data.category,
            filename=data.filename,
            original_filename=data.original_filename,
            description=data.description,
            storage_ref=data.storage_ref,
            file_size=data.file_size,
            mime_type=data.mime_type,
        )
        created = await self._add_and_commit(row)
        return deliverable_to_result(created)

    async def record_access(self, entry: AccessLogCreate) -> None:
        """Append the access log row and bump download_count atomically in SQL."""
        self.db.add(
            AccessLog(
                client_id=entry.client_id,
                project_id=entry.project_id,
                deliverable_id=entry.deliverable_id,
                access_type=entry.access_type.value,
                ip_address=entry.caller.ip_address,
                user_agent=entry.caller.user_agent,
                request_id=entry.caller.request_id,
            )
        )
        await self.db.execute(
            update(Deliverable)
            .where(Deliverable.id == entry.deliverable_id)
            .values(download_count=Deliverable.download_count + 1)
        )
        await self._commit()


class SessionScopedAccessRecorder:
    """IAccessRecorder that opens a fresh session per access.

    The request session is closed when the request unwinds; this unit keeps
    its own connection so the log row and counter commit together regardless.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def __call__(self, entry: AccessLogCreate) -> None:
        async with self.session_factory() as session:
            try:
                await DeliverableRepository(session).record_access(entry)
            except (OperationalError, InterfaceError) as e:
                logger.error("Store unavailable recording access: %s", type(e).__name__)
                raise StoreUnavailableException(type(e).__name__) from e
