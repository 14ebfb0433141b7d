"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IClientRepository,
    IDeliverableRepository,
    IProjectRepository,
    ITimelineRepository,
)
from app.application.interfaces.services import (
    IMediaStorage,
    IMessageRenderer,
    INotificationDispatcher,
    INotificationTransport,
    IPasswordHasher,
    ITokenCodec,
)

__all__ = [
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
]
