"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.client_repo import ClientRepository
from app.infrastructure.persistence.repositories.deliverable_repo import (
    DeliverableRepository,
    SessionScopedAccessRecorder,
)
from app.infrastructure.persistence.repositories.project_repo import ProjectRepository
from app.infrastructure.persistence.repositories.timeline_repo import TimelineRepository

__all__ = [
    "BaseRepository",
    "ClientRepository",
    "DeliverableRepository",
    "ProjectRepository",
    "SessionScopedAccessRecorder",
    "TimelineRepository",
]
