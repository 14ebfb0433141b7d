"""Project repository. Interface methods return application DTOs."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.client import ProjectResult
from app.infrastructure.persistence.models.project import Project
from app.infrastructure.persistence.repositories.base import BaseRepository


def project_to_result(p: Project) -> ProjectResult:
    """Map ORM Project to application ProjectResult."""
    return ProjectResult(
        id=p.id,
        client_id=p.client_id,
        name=p.name,
        details=dict(p.details or {}),
        created_at=p.created_at,
        updated_at=p.updated_at,
    )


class ProjectRepository(BaseRepository[Project]):
    """Project store."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Project)

    async def get_by_id(self, project_id: str) -> ProjectResult | None:
        project = await self._get_model(project_id)
        return project_to_result(project) if project else None

    async def get_latest_for_client(self, client_id: str) -> ProjectResult | None:
        result = await self.db.execute(
            select(Project)
            .where(Project.client_id == client_id)
            .order_by(Project.created_at.desc())
            .limit(1)
        )
        project = result.scalar_one_or_none()
        return project_to_result(project) if project else None

    async def merge_details(
        self, project_id: str, details: dict[str, Any]
    ) -> ProjectResult | None:
        """Merge keys into details (new values win). Reassigns the dict so JSONB change is tracked."""
        project = await self._get_model(project_id)
        if project is None:
            return None
        merged = dict(project.details or {})
        merged.update(details)
        project.details = merged
        name = details.get("project_name")
        if isinstance(name, str) and name:
            project.name = name
        await self._commit()
        await self.db.refresh(project)
        return project_to_result(project)
