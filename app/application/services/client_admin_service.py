"""Client administration: listing, access policy, account status, deliverable registration."""

from __future__ import annotations

import logging

from app.application.dtos.client import ClientResult, TimelineEntryCreate
from app.application.dtos.deliverable import DeliverableCreate, DeliverableResult
from app.application.dtos.notification import NotificationMessage
from app.application.interfaces.repositories import (
    IClientRepository,
    IDeliverableRepository,
    IProjectRepository,
    ITimelineRepository,
)
from app.application.interfaces.services import IMessageRenderer, INotificationDispatcher
from app.domain.constants import TIMELINE_DELIVERABLE_UPLOADED
from app.domain.enums import (
    ACCESS_CATEGORIES,
    ActivationPolicy,
    ClientStatus,
    DeliverableType,
)
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)


class ClientAdminService:
    """Administrator operations on client accounts and their deliverables."""

    def __init__(
        self,
        client_repo: IClientRepository,
        project_repo: IProjectRepository,
        deliverable_repo: IDeliverableRepository,
        timeline_repo: ITimelineRepository,
        dispatcher: INotificationDispatcher | None = None,
        renderer: IMessageRenderer | None = None,
        *,
        activation_policy: ActivationPolicy = ActivationPolicy.IMMEDIATE,
        portal_url: str = "",
    ) -> None:
        self.client_repo = client_repo
        self.project_repo = project_repo
        self.deliverable_repo = deliverable_repo
        self.timeline_repo = timeline_repo
        self.dispatcher = dispatcher
        self.renderer = renderer
        self.activation_policy = activation_policy
        self.portal_url = portal_url

    async def list_clients(self, skip: int = 0, limit: int = 100) -> list[ClientResult]:
        return await self.client_repo.list_clients(skip=skip, limit=limit)

    async def update_access(
        self, client_id: str, policy: dict[str, bool]
    ) -> ClientResult:
        """Replace the client's deliverables_access. Categories not given are disabled.

        Raises:
            ValidationException: Unknown category name.
            ResourceNotFoundException: Client does not exist.
        """
        unknown = sorted(set(policy) - set(ACCESS_CATEGORIES))
        if unknown:
            raise ValidationException(
                f"Unknown access categories: {', '.join(unknown)}",
                field="deliverablesAccess",
            )
        normalized = {c: bool(policy.get(c, False)) for c in ACCESS_CATEGORIES}
        updated = await self.client_repo.update_access_policy(client_id, normalized)
        if updated is None:
            raise ResourceNotFoundException("client", client_id)
        logger.info("Access policy updated for client %s", client_id)
        return updated

    async def update_status(
        self,
        client_id: str,
        status: ClientStatus,
        deposit_received: bool | None = None,
    ) -> ClientResult:
        """Move a client to status. Under on_deposit, activation needs a recorded deposit.

        Raises:
            ResourceNotFoundException: Client does not exist.
            ValidationException: Transition not allowed or deposit missing.
        """
        client = await self.client_repo.get_by_id(client_id)
        if client is None:
            raise ResourceNotFoundException("client", client_id)
        if not client.status.can_transition_to(status):
            raise ValidationException(
                f"Cannot change status from {client.status.value} to {status.value}",
                field="status",
            )
        deposit = client.deposit_received if deposit_received is None else deposit_received
        if (
            status == ClientStatus.ACTIVE
            and self.activation_policy == ActivationPolicy.ON_DEPOSIT
            and not deposit
        ):
            raise ValidationException(
                "Deposit must be received before activation", field="depositReceived"
            )
        activated_at = (
            utc_now()
            if status == ClientStatus.ACTIVE and client.activated_at is None
            else None
        )
        updated = await self.client_repo.update_status(
            client_id,
            status,
            deposit_received=deposit_received,
            activated_at=activated_at,
        )
        if updated is None:
            raise ResourceNotFoundException("client", client_id)
        logger.info(
            "Client %s status %s -> %s", client_id, client.status.value, status.value
        )
        return updated

    async def register_deliverable(
        self,
        project_id: str,
        deliverable_type: DeliverableType,
        filename: str,
        storage_ref: str,
        *,
        category: str | None = None,
        original_filename: str | None = None,
        file_size: int = 0,
        mime_type: str = "application/octet-stream",
        description: str | None = None,
    ) -> DeliverableResult:
        """Record a file already placed in media storage and tell the client (best-effort)."""
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise ResourceNotFoundException("project", project_id)
        deliverable = await self.deliverable_repo.create(
            DeliverableCreate(
                id=generate_cuid(),
                project_id=project.id,
                type=deliverable_type,
                category=category or deliverable_type.access_category,
                filename=filename,
                original_filename=original_filename or filename,
                storage_ref=storage_ref,
                file_size=file_size,
                mime_type=mime_type,
                description=description,
            )
        )
        await self.timeline_repo.add(
            TimelineEntryCreate(
                project_id=project.id,
                event_type=TIMELINE_DELIVERABLE_UPLOADED,
                title=f"New {deliverable_type.value} delivered",
                description=deliverable.original_filename,
            )
        )
        logger.info("Deliverable %s registered for project %s", deliverable.id, project.id)
        client = await self.client_repo.get_by_id(project.client_id)
        if client is not None:
            self._notify_delivered(client, project.id, deliverable)
        return deliverable

    def _notify_delivered(
        self, client: ClientResult, project_id: str, deliverable: DeliverableResult
    ) -> None:
        if self.dispatcher is None or self.renderer is None:
            return
        subject, html_body, text_body = self.renderer.render(
            "deliverables_ready",
            {
                "contact_name": client.contact_name,
                "project_id": project_id,
                "filename": deliverable.original_filename,
                "deliverable_type": deliverable.type.value,
                "portal_url": self.portal_url,
            },
        )
        self.dispatcher.dispatch(
            NotificationMessage(
                kind="deliverables_ready",
                to=(client.email,),
                subject=subject,
                html_body=html_body,
                text_body=text_body,
                idempotency_key=f"deliverables_ready/{deliverable.id}",
            )
        )
