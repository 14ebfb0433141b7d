"""Log-only notification transport (no delivery)."""

from __future__ import annotations

import logging

from app.application.dtos.notification import NotificationMessage
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class LogOnlyNotificationTransport:
    """INotificationTransport implementation that logs instead of sending email.

    Use when no email provider is configured. Bodies are never logged since
    welcome messages carry one-time credentials.
    """

    name = "log"

    async def send(self, message: NotificationMessage) -> str | None:
        """Log the notification; no actual email sent."""
        recipients = list(message.to)
        subject_preview = (message.subject or "")[:80]
        if not recipients:
            logger.info(
                "Notify %s: no recipients, skipping send (subject=%r)",
                message.kind,
                subject_preview,
            )
            return None
        logger.info(
            "Notify %s: would send to %d recipients (subject=%r)",
            message.kind,
            len(recipients),
            subject_preview,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Notify %s recipients: %s", message.kind, recipients)
        return None
