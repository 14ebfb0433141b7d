"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, storage, transports).
"""

from app.application.interfaces import (
    IClientRepository,
    IDeliverableRepository,
    IMediaStorage,
    IMessageRenderer,
    INotificationDispatcher,
    INotificationTransport,
    IPasswordHasher,
    IProjectRepository,
    ITimelineRepository,
    ITokenCodec,
)
from app.application.services import (
    ClientAdminService,
    CredentialIssuer,
    NotificationDispatcher,
    ProvisioningService,
    SessionService,
)
from app.application.use_cases import DashboardService, DeliverableAccessController

__all__ = [
    "ClientAdminService",
    "CredentialIssuer",
    "DashboardService",
    "DeliverableAccessController",
    "IClientRepository",
    "IDeliverableRepository",
    "IMediaStorage",
    "IMessageRenderer",
    "INotificationDispatcher",
    "INotificationTransport",
    "IPasswordHasher",
    "IProjectRepository",
    "ITimelineRepository",
    "ITokenCodec",
    "NotificationDispatcher",
    "ProvisioningService",
    "SessionService",
]
