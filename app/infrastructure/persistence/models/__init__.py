"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.access_log import AccessLog
from app.infrastructure.persistence.models.client import Client
from app.infrastructure.persistence.models.deliverable import Deliverable
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from app.infrastructure.persistence.models.project import Project
from app.infrastructure.persistence.models.timeline import ProjectTimeline

__all__ = [
    "AccessLog",
    "Client",
    "CuidMixin",
    "Deliverable",
    "Project",
    "ProjectTimeline",
    "TimestampMixin",
]
