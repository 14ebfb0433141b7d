"""Administrator API: client accounts and deliverable registration.

All routes require an admin bearer token (403 for client tokens).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.dependencies.auth import AdminPrincipal
from app.api.dependencies.use_cases import get_client_admin_service
from app.application.services.client_admin_service import ClientAdminService
from app.core.limiter import limit_writes
from app.schemas.client import (
    AccessUpdateRequest,
    AdminClientResponse,
    ClientUpdateResponse,
    StatusUpdateRequest,
    admin_client_response,
)
from app.schemas.deliverable import (
    DeliverableRegisterRequest,
    DeliverableRegisterResponse,
)

router = APIRouter()

AdminService = Annotated[ClientAdminService, Depends(get_client_admin_service)]


@router.get("/clients", response_model=list[AdminClientResponse])
async def list_clients(
    principal: AdminPrincipal,
    service: AdminService,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
) -> list[AdminClientResponse]:
    """All clients, newest first."""
    clients = await service.list_clients(skip=skip, limit=limit)
    return [admin_client_response(c) for c in clients]


@router.put("/clients/{client_id}/access", response_model=ClientUpdateResponse)
@limit_writes
async def update_client_access(
    request: Request,
    client_id: str,
    body: AccessUpdateRequest,
    principal: AdminPrincipal,
    service: AdminService,
) -> ClientUpdateResponse:
    """Replace the client's per-category deliverable access policy."""
    client = await service.update_access(client_id, body.deliverables_access)
    return ClientUpdateResponse(
        message="Access updated", client=admin_client_response(client)
    )


@router.put("/clients/{client_id}/status", response_model=ClientUpdateResponse)
@limit_writes
async def update_client_status(
    request: Request,
    client_id: str,
    body: StatusUpdateRequest,
    principal: AdminPrincipal,
    service: AdminService,
) -> ClientUpdateResponse:
    """Activate, suspend or reinstate a client; optionally record the deposit."""
    client = await service.update_status(
        client_id, body.status, deposit_received=body.deposit_received
    )
    return ClientUpdateResponse(
        message=f"Status set to {client.status.value}",
        client=admin_client_response(client),
    )


@router.post("/deliverables", response_model=DeliverableRegisterResponse, status_code=201)
@limit_writes
async def register_deliverable(
    request: Request,
    body: DeliverableRegisterRequest,
    principal: AdminPrincipal,
    service: AdminService,
) -> DeliverableRegisterResponse:
    """Record a file already uploaded to media storage and notify the client."""
    deliverable = await service.register_deliverable(
        body.project_id,
        body.type,
        body.filename,
        body.storage_ref,
        category=body.category,
        original_filename=body.original_filename,
        file_size=body.file_size,
        mime_type=body.mime_type,
        description=body.description,
    )
    return DeliverableRegisterResponse(deliverable_id=deliverable.id)
