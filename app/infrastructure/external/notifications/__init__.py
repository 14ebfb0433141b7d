"""Notifications: transports (log-only, Resend) and Jinja message templates."""

from app.infrastructure.external.notifications.factory import (
    create_notification_transport,
)
from app.infrastructure.external.notifications.log_transport import (
    LogOnlyNotificationTransport,
)
from app.infrastructure.external.notifications.resend_transport import (
    ResendNotificationTransport,
)
from app.infrastructure.external.notifications.templates import (
    NotificationTemplateRenderer,
)

__all__ = [
    "LogOnlyNotificationTransport",
    "NotificationTemplateRenderer",
    "ResendNotificationTransport",
    "create_notification_transport",
]
