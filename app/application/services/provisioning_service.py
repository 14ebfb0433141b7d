"""Provisioning: verified CRM webhook -> client, project, credentials, notifications.

Idempotent per client email. Duplicate detection relies on the store's
unique email constraint, so concurrent redeliveries of the same booking
produce exactly one client without any in-process locking.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from app.application.dtos.client import (
    ClientCreate,
    ClientResult,
    ProjectCreate,
    ProjectResult,
    TimelineEntryCreate,
)
from app.application.dtos.notification import NotificationMessage
from app.application.dtos.provisioning import BookingEvent, ProvisioningOutcome
from app.application.dtos.session import IssuedCredentials
from app.application.interfaces.repositories import (
    IClientRepository,
    IProjectRepository,
    ITimelineRepository,
)
from app.application.interfaces.services import (
    IMessageRenderer,
    INotificationDispatcher,
    IPasswordHasher,
)
from app.application.services.credential_issuer import CredentialIssuer
from app.application.services.signature_verifier import verify_signature
from app.domain.constants import (
    BOOKING_EVENT_TYPES,
    DEFAULT_DELIVERABLES_ACCESS,
    PROJECT_UPDATED_EVENT_TYPE,
    TIMELINE_PROJECT_BOOKED,
    TIMELINE_PROJECT_UPDATED,
)
from app.domain.enums import ActivationPolicy, ClientStatus, ProvisioningResult
from app.domain.exceptions import (
    ClientAlreadyExistsException,
    InvalidSignatureException,
    ValidationException,
    WebhookNotConfiguredException,
)

logger = logging.getLogger(__name__)


class ProvisioningService:
    """Handles CRM webhooks: verify, classify, provision or update, notify."""

    def __init__(
        self,
        client_repo: IClientRepository,
        project_repo: IProjectRepository,
        timeline_repo: ITimelineRepository,
        password_hasher: IPasswordHasher,
        dispatcher: INotificationDispatcher,
        renderer: IMessageRenderer,
        *,
        webhook_secret: str | None,
        credential_issuer: CredentialIssuer | None = None,
        activation_policy: ActivationPolicy = ActivationPolicy.IMMEDIATE,
        admin_email: str | None = None,
        portal_url: str = "",
        admin_url: str = "",
        support_email: str = "",
    ) -> None:
        self.client_repo = client_repo
        self.project_repo = project_repo
        self.timeline_repo = timeline_repo
        self.password_hasher = password_hasher
        self.dispatcher = dispatcher
        self.renderer = renderer
        self.webhook_secret = webhook_secret
        self.credential_issuer = credential_issuer or CredentialIssuer()
        self.activation_policy = activation_policy
        self.admin_email = admin_email
        self.portal_url = portal_url
        self.admin_url = admin_url
        self.support_email = support_email

    async def handle_webhook(
        self, raw_body: bytes, signature: str | None
    ) -> ProvisioningOutcome:
        """Verify and handle one raw webhook delivery.

        Raises:
            WebhookNotConfiguredException: No shared secret configured.
            InvalidSignatureException: Signature missing or wrong (nothing is written).
            ValidationException: Body is not a valid event envelope.
        """
        if not self.webhook_secret:
            raise WebhookNotConfiguredException()
        if not verify_signature(raw_body, signature, self.webhook_secret):
            logger.warning("Rejected webhook: invalid signature (%d bytes)", len(raw_body))
            raise InvalidSignatureException()
        try:
            payload = json.loads(raw_body)
        except ValueError as e:
            raise ValidationException("Malformed JSON body") from e
        return await self.handle_event(BookingEvent.from_payload(payload))

    async def handle_event(self, event: BookingEvent) -> ProvisioningOutcome:
        """Route a verified event by type."""
        if event.event_type in BOOKING_EVENT_TYPES:
            return await self.provision_client(event)
        if event.event_type == PROJECT_UPDATED_EVENT_TYPE:
            return await self.update_project(event)
        logger.info("Unhandled webhook event type: %s", event.event_type)
        return ProvisioningOutcome(
            result=ProvisioningResult.IGNORED, event_type=event.event_type
        )

    async def provision_client(self, event: BookingEvent) -> ProvisioningOutcome:
        """Create client + project for a new booking; no-op if the email already exists."""
        existing = await self.client_repo.get_by_email(event.idempotency_key)
        if existing is not None:
            logger.info("Client already provisioned: %s (%s)", existing.id, event.event_type)
            return self._duplicate(event, existing)

        credentials = self.credential_issuer.issue(event.client.email)
        hashed = await asyncio.to_thread(
            self.password_hasher.hash, credentials.temporary_password
        )
        active = self.activation_policy == ActivationPolicy.IMMEDIATE
        client_data = ClientCreate(
            id=credentials.client_id,
            email=credentials.username,
            contact_name=event.client.contact_name,
            company_name=event.client.company_name,
            phone=event.client.phone,
            hashed_password=hashed,
            status=ClientStatus.ACTIVE if active else ClientStatus.PENDING,
            activated_at=credentials.issued_at if active else None,
            deliverables_access=dict(DEFAULT_DELIVERABLES_ACCESS),
        )
        project_data = ProjectCreate(
            id=credentials.project_id,
            client_id=credentials.client_id,
            name=event.project.name or f"{client_data.company_name} project",
            details=event.project.to_details(),
        )
        timeline = TimelineEntryCreate(
            project_id=credentials.project_id,
            event_type=TIMELINE_PROJECT_BOOKED,
            title="Project booked",
            description=_booking_description(event),
        )
        try:
            client, project = await self.client_repo.create_with_project(
                client_data, project_data, timeline
            )
        except ClientAlreadyExistsException:
            logger.info("Concurrent booking for existing client; treating as duplicate")
            winner = await self.client_repo.get_by_email(event.idempotency_key)
            return self._duplicate(event, winner)

        logger.info(
            "Provisioned client %s project %s (status=%s)",
            client.id,
            project.id,
            client.status.value,
        )
        sent = self._notify_provisioned(client, project, credentials)
        return ProvisioningOutcome(
            result=ProvisioningResult.PROVISIONED,
            event_type=event.event_type,
            client_id=client.id,
            project_id=project.id,
            notifications=sent,
        )

    async def update_project(self, event: BookingEvent) -> ProvisioningOutcome:
        """Merge new project metadata into the client's latest project."""
        client = await self.client_repo.get_by_email(event.idempotency_key)
        project = (
            await self.project_repo.get_latest_for_client(client.id) if client else None
        )
        if client is None or project is None:
            logger.info("project.updated for unknown client; ignoring")
            return ProvisioningOutcome(
                result=ProvisioningResult.IGNORED, event_type=event.event_type
            )
        updated = await self.project_repo.merge_details(
            project.id, event.project.to_details()
        )
        await self.timeline_repo.add(
            TimelineEntryCreate(
                project_id=project.id,
                event_type=TIMELINE_PROJECT_UPDATED,
                title="Project updated",
                description=_booking_description(event),
            )
        )
        logger.info("Updated project %s for client %s", project.id, client.id)
        return ProvisioningOutcome(
            result=ProvisioningResult.UPDATED,
            event_type=event.event_type,
            client_id=client.id,
            project_id=updated.id if updated else project.id,
        )

    def _duplicate(
        self, event: BookingEvent, client: ClientResult | None
    ) -> ProvisioningOutcome:
        return ProvisioningOutcome(
            result=ProvisioningResult.DUPLICATE,
            event_type=event.event_type,
            client_id=client.id if client else None,
        )

    def _notify_provisioned(
        self,
        client: ClientResult,
        project: ProjectResult,
        credentials: IssuedCredentials,
    ) -> list[str]:
        """Queue welcome and operator messages. Returns the kinds queued."""
        context: dict[str, Any] = {
            "contact_name": client.contact_name,
            "company_name": client.company_name,
            "email": client.email,
            "phone": client.phone,
            "client_id": client.id,
            "project_id": project.id,
            "status": client.status.value,
            "pending": client.status == ClientStatus.PENDING,
            "username": credentials.username,
            "temporary_password": credentials.temporary_password,
            "portal_url": self.portal_url,
            "admin_url": self.admin_url,
            "support_email": self.support_email,
        }
        queued: list[str] = []
        welcome = self._compose("client_welcome", (client.email,), context, client.id)
        self.dispatcher.dispatch(welcome)
        queued.append(welcome.kind)
        if self.admin_email:
            operator_context = {k: v for k, v in context.items() if k != "temporary_password"}
            operator = self._compose(
                "admin_new_client", (self.admin_email,), operator_context, client.id
            )
            self.dispatcher.dispatch(operator)
            queued.append(operator.kind)
        else:
            logger.info("ADMIN_EMAIL not set; skipping operator notification")
        return queued

    def _compose(
        self,
        kind: str,
        to: tuple[str, ...],
        context: dict[str, Any],
        client_id: str,
    ) -> NotificationMessage:
        subject, html_body, text_body = self.renderer.render(kind, context)
        return NotificationMessage(
            kind=kind,
            to=to,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
            idempotency_key=f"{kind}/{client_id}",
        )


def _booking_description(event: BookingEvent) -> str | None:
    parts = [event.project.service_type, event.project.package]
    text = " - ".join(p for p in parts if p)
    return text or None
