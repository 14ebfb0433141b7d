"""Client dashboard: account summary, project, visible deliverables, timeline, counts."""

from __future__ import annotations

import logging
from collections import Counter

from app.application.dtos.deliverable import DashboardResult, DeliverableView
from app.application.dtos.session import Principal
from app.application.interfaces.repositories import (
    IClientRepository,
    IProjectRepository,
    ITimelineRepository,
)
from app.application.use_cases.deliverables.access_controller import (
    DeliverableAccessController,
)
from app.domain.enums import DeliverableType
from app.domain.exceptions import ResourceNotFoundException

logger = logging.getLogger(__name__)


def deliverable_stats(views: list[DeliverableView]) -> dict[str, int]:
    """Total plus one count per deliverable type (e.g. imagesCount)."""
    counts = Counter(v.deliverable.type for v in views)
    stats = {"total_files": len(views)}
    for t in DeliverableType:
        stats[f"{t.access_category}_count"] = counts.get(t, 0)
    return stats


class DashboardService:
    """Builds the dashboard for a client principal."""

    def __init__(
        self,
        client_repo: IClientRepository,
        project_repo: IProjectRepository,
        timeline_repo: ITimelineRepository,
        access_controller: DeliverableAccessController,
    ) -> None:
        self.client_repo = client_repo
        self.project_repo = project_repo
        self.timeline_repo = timeline_repo
        self.access_controller = access_controller

    async def get_dashboard(self, principal: Principal) -> DashboardResult:
        """Return dashboard data. Raises ResourceNotFoundException if the client is gone."""
        client_id = principal.client_id
        client = await self.client_repo.get_by_id(client_id) if client_id else None
        if client is None:
            raise ResourceNotFoundException("client", principal.subject)
        project = (
            await self.project_repo.get_by_id(principal.project_id)
            if principal.project_id
            else await self.project_repo.get_latest_for_client(client.id)
        )
        deliverables = await self.access_controller.list_deliverables(principal)
        timeline = (
            await self.timeline_repo.list_for_project(project.id) if project else []
        )
        return DashboardResult(
            client=client,
            project=project,
            deliverables=deliverables,
            timeline=timeline,
            stats=deliverable_stats(deliverables),
        )
