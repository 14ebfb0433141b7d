"""Project timeline repository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.client import TimelineEntryCreate, TimelineEntryResult
from app.infrastructure.persistence.models.timeline import ProjectTimeline
from app.infrastructure.persistence.repositories.base import BaseRepository


def timeline_to_result(t: ProjectTimeline) -> TimelineEntryResult:
    return TimelineEntryResult(
        id=t.id,
        project_id=t.project_id,
        event_type=t.event_type,
        title=t.title,
        description=t.description,
        event_date=t.event_date,
    )


class TimelineRepository(BaseRepository[ProjectTimeline]):
    """Project timeline store (append and list)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ProjectTimeline)

    async def add(self, entry: TimelineEntryCreate) -> TimelineEntryResult:
        row = ProjectTimeline(
            project_id=entry.project_id,
            event_type=entry.event_type,
            title=entry.title,
            description=entry.description,
        )
        return timeline_to_result(await self._add_and_commit(row))

    async def list_for_project(
        self, project_id: str, limit: int = 50
    ) -> list[TimelineEntryResult]:
        result = await self.db.execute(
            select(ProjectTimeline)
            .where(ProjectTimeline.project_id == project_id)
            .order_by(ProjectTimeline.event_date.desc())
            .limit(limit)
        )
        return [timeline_to_result(t) for t in result.scalars().all()]
