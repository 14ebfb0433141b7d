"""Client API: dashboard, deliverable listing, and download grants."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.dependencies.auth import Caller, ClientPrincipal, CurrentPrincipal
from app.api.dependencies.use_cases import get_access_controller, get_dashboard_service
from app.application.use_cases.deliverables import (
    DashboardService,
    DeliverableAccessController,
)
from app.schemas.client import DashboardResponse, dashboard_response
from app.schemas.deliverable import (
    DeliverableListResponse,
    DownloadResponse,
    deliverable_response,
)

router = APIRouter()

AccessController = Annotated[
    DeliverableAccessController, Depends(get_access_controller)
]


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    principal: ClientPrincipal,
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> DashboardResponse:
    """Client summary, project details, visible deliverables, timeline and counts."""
    return dashboard_response(await service.get_dashboard(principal))


@router.get("/deliverables", response_model=DeliverableListResponse)
async def list_deliverables(
    principal: ClientPrincipal,
    controller: AccessController,
) -> DeliverableListResponse:
    """Deliverables of the caller's project that the access policy allows."""
    views = await controller.list_deliverables(principal)
    return DeliverableListResponse(
        deliverables=[deliverable_response(v) for v in views],
        total=len(views),
    )


@router.get("/deliverables/{deliverable_id}/download", response_model=DownloadResponse)
async def download_deliverable(
    deliverable_id: str,
    principal: CurrentPrincipal,
    caller: Caller,
    controller: AccessController,
) -> DownloadResponse:
    """Time-boxed download URL. Owners and administrators only; others get 404."""
    grant = await controller.request_access(principal, deliverable_id, caller)
    return DownloadResponse(
        download_url=grant.url,
        filename=grant.filename,
        expires_in=grant.expires_in_seconds,
    )
