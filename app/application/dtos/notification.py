"""DTOs for outbound notifications and their delivery results."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NotificationMessage:
    """One templated message for a notification transport.

    Bodies may contain one-time credentials; they are excluded from repr
    and must never be logged.
    """

    kind: str
    to: tuple[str, ...]
    subject: str
    html_body: str = field(repr=False)
    text_body: str | None = field(default=None, repr=False)
    idempotency_key: str | None = None


@dataclass(frozen=True)
class NotificationSent:
    """Transport accepted the message."""

    kind: str
    provider_message_id: str | None = None


@dataclass(frozen=True)
class NotificationFailed:
    """Transport rejected the message, failed, or timed out."""

    kind: str
    reason: str


NotificationResult = NotificationSent | NotificationFailed
