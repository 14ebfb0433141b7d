"""Notification transport factory: log-only or Resend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.application.interfaces.services import INotificationTransport
from app.infrastructure.external.notifications.log_transport import (
    LogOnlyNotificationTransport,
)
from app.infrastructure.external.notifications.resend_transport import (
    ResendNotificationTransport,
)

if TYPE_CHECKING:
    from app.core.config import Settings


def create_notification_transport(settings: Settings) -> INotificationTransport:
    """Create the configured transport.

    Raises:
        ValueError: Unknown backend or missing API key.
    """
    backend = settings.notification_backend.lower()
    if backend == "log":
        return LogOnlyNotificationTransport()
    if backend == "resend":
        if settings.resend_api_key is None:
            raise ValueError("RESEND_API_KEY required for resend backend")
        return ResendNotificationTransport(
            api_key=settings.resend_api_key.get_secret_value(),
            from_address=settings.email_from,
            send_url=settings.resend_api_url,
            timeout_seconds=settings.notification_timeout_seconds,
            reply_to=settings.support_email,
        )
    raise ValueError(
        f"Unknown notification backend: {backend}. Supported: 'log', 'resend'"
    )
