"""Application service dependencies (composition root).

Services are built per request from the request's repositories and the
process-wide collaborators in app.api.dependencies.services. Settings are
read here and handed to services as plain values.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Annotated

from fastapi import Depends

from app.api.dependencies.db import (
    get_access_recorder,
    get_client_repo,
    get_deliverable_repo,
    get_project_repo,
    get_timeline_repo,
)
from app.api.dependencies.services import (
    get_credential_issuer,
    get_media_storage,
    get_message_renderer,
    get_notification_dispatcher,
    get_password_hasher,
    get_token_codec,
)
from app.application.interfaces.repositories import (
    IAccessRecorder,
    IClientRepository,
    IDeliverableRepository,
    IProjectRepository,
    ITimelineRepository,
)
from app.application.interfaces.services import (
    IMediaStorage,
    IMessageRenderer,
    IPasswordHasher,
    ITokenCodec,
)
from app.application.services.client_admin_service import ClientAdminService
from app.application.services.credential_issuer import CredentialIssuer
from app.application.services.notification_dispatcher import NotificationDispatcher
from app.application.services.provisioning_service import ProvisioningService
from app.application.services.session_service import SessionService
from app.application.use_cases.deliverables import (
    DashboardService,
    DeliverableAccessController,
)
from app.core.config import get_settings

ClientRepo = Annotated[IClientRepository, Depends(get_client_repo)]
ProjectRepo = Annotated[IProjectRepository, Depends(get_project_repo)]
DeliverableRepo = Annotated[IDeliverableRepository, Depends(get_deliverable_repo)]
TimelineRepo = Annotated[ITimelineRepository, Depends(get_timeline_repo)]


def get_session_service(
    client_repo: ClientRepo,
    project_repo: ProjectRepo,
    hasher: Annotated[IPasswordHasher, Depends(get_password_hasher)],
    codec: Annotated[ITokenCodec, Depends(get_token_codec)],
) -> SessionService:
    settings = get_settings()
    admin_hash = settings.admin_password_hash
    return SessionService(
        client_repo,
        project_repo,
        hasher,
        codec,
        admin_username=settings.admin_username,
        admin_password_hash=admin_hash.get_secret_value() if admin_hash else None,
        client_session_ttl=timedelta(hours=settings.client_session_hours),
        admin_session_ttl=timedelta(hours=settings.admin_session_hours),
    )


def get_provisioning_service(
    client_repo: ClientRepo,
    project_repo: ProjectRepo,
    timeline_repo: TimelineRepo,
    hasher: Annotated[IPasswordHasher, Depends(get_password_hasher)],
    dispatcher: Annotated[NotificationDispatcher, Depends(get_notification_dispatcher)],
    renderer: Annotated[IMessageRenderer, Depends(get_message_renderer)],
    issuer: Annotated[CredentialIssuer, Depends(get_credential_issuer)],
) -> ProvisioningService:
    settings = get_settings()
    return ProvisioningService(
        client_repo,
        project_repo,
        timeline_repo,
        hasher,
        dispatcher,
        renderer,
        webhook_secret=settings.webhook_secret,
        credential_issuer=issuer,
        activation_policy=settings.activation_policy,
        admin_email=settings.admin_email,
        portal_url=settings.portal_url,
        admin_url=settings.admin_url,
        support_email=settings.support_email,
    )


def get_access_controller(
    deliverable_repo: DeliverableRepo,
    project_repo: ProjectRepo,
    client_repo: ClientRepo,
    storage: Annotated[IMediaStorage, Depends(get_media_storage)],
    access_recorder: Annotated[IAccessRecorder, Depends(get_access_recorder)],
) -> DeliverableAccessController:
    return DeliverableAccessController(
        deliverable_repo,
        project_repo,
        client_repo,
        storage,
        access_recorder=access_recorder,
        storage_timeout_seconds=get_settings().storage_timeout_seconds,
    )


def get_dashboard_service(
    client_repo: ClientRepo,
    project_repo: ProjectRepo,
    timeline_repo: TimelineRepo,
    access_controller: Annotated[
        DeliverableAccessController, Depends(get_access_controller)
    ],
) -> DashboardService:
    return DashboardService(client_repo, project_repo, timeline_repo, access_controller)


def get_client_admin_service(
    client_repo: ClientRepo,
    project_repo: ProjectRepo,
    deliverable_repo: DeliverableRepo,
    timeline_repo: TimelineRepo,
    dispatcher: Annotated[NotificationDispatcher, Depends(get_notification_dispatcher)],
    renderer: Annotated[IMessageRenderer, Depends(get_message_renderer)],
) -> ClientAdminService:
    settings = get_settings()
    return ClientAdminService(
        client_repo,
        project_repo,
        deliverable_repo,
        timeline_repo,
        dispatcher,
        renderer,
        activation_policy=settings.activation_policy,
        portal_url=settings.portal_url,
    )
