"""Repository dependencies: one AsyncSession per request, shared by all repositories.

FastAPI caches get_db within a request, so every repository built here for
the same request sees the same session.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.repositories import (
    IAccessRecorder,
    IClientRepository,
    IDeliverableRepository,
    IProjectRepository,
    ITimelineRepository,
)
from app.infrastructure.persistence.database import get_db, get_session_factory
from app.infrastructure.persistence.repositories import (
    ClientRepository,
    DeliverableRepository,
    ProjectRepository,
    SessionScopedAccessRecorder,
    TimelineRepository,
)

DbSession = Annotated[AsyncSession, Depends(get_db)]


def get_client_repo(db: DbSession) -> IClientRepository:
    return ClientRepository(db)


def get_project_repo(db: DbSession) -> IProjectRepository:
    return ProjectRepository(db)


def get_deliverable_repo(db: DbSession) -> IDeliverableRepository:
    return DeliverableRepository(db)


def get_timeline_repo(db: DbSession) -> ITimelineRepository:
    return TimelineRepository(db)


def get_access_recorder() -> IAccessRecorder:
    """Access logging on its own session, not the request's."""
    return SessionScopedAccessRecorder(get_session_factory())
