"""Service interfaces (ports) for the application layer.

Protocols define contracts for collaborators the application uses (DIP).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.notification import NotificationMessage, NotificationResult
    from app.domain.enums import SizeClass


# Media storage interface
class IMediaStorage(Protocol):
    """Protocol for media storage: time-boxed URLs for stored files and renditions."""

    async def generate_download_url(
        self, storage_ref: str, expiration: timedelta = timedelta(hours=1)
    ) -> str:
        """Return a time-boxed URL for the original object."""

    async def transform_url(
        self,
        storage_ref: str,
        size_class: SizeClass,
        expiration: timedelta = timedelta(hours=1),
    ) -> str:
        """Return a time-boxed URL for a named rendition."""

    def download(self, storage_ref: str) -> AsyncIterator[bytes]:
        """Stream object content."""


# Notification transport interface
class INotificationTransport(Protocol):
    """Protocol for a single-message notification transport (log, Resend, ...)."""

    name: str

    async def send(self, message: NotificationMessage) -> str | None:
        """Deliver one message; return provider message id if any.

        Raises TransportUnavailableException (or any exception) on failure;
        the dispatcher converts failures into NotificationFailed.
        """


# Notification dispatcher interface
class INotificationDispatcher(Protocol):
    """Protocol for best-effort notification delivery."""

    async def send(self, message: NotificationMessage) -> NotificationResult:
        """Send and wait for the outcome. Never raises."""

    def dispatch(self, message: NotificationMessage) -> None:
        """Schedule send in the background."""


# Message renderer interface
class IMessageRenderer(Protocol):
    """Protocol for rendering a notification template to subject and bodies."""

    def render(self, template_key: str, context: dict[str, Any]) -> tuple[str, str, str]:
        """Return (subject, html_body, text_body)."""


# Password hasher interface
class IPasswordHasher(Protocol):
    """Protocol for password hashing (CPU-bound; call via asyncio.to_thread)."""

    def hash(self, password: str) -> str:
        """Return a salted hash of password."""

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Return True if password matches hash."""


# Session token codec interface
class ITokenCodec(Protocol):
    """Protocol for signing and verifying session tokens."""

    def encode(
        self, claims: dict[str, Any], issued_at: datetime, expires_at: datetime
    ) -> str:
        """Return a signed token carrying claims plus iat/exp."""

    def decode(self, token: str) -> dict[str, Any]:
        """Return verified claims.

        Raises TokenExpiredException past exp and UnauthenticatedException
        for any other defect.
        """
