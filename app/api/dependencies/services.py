"""Process-wide collaborators (composition root).

Each getter builds its object once from Settings and caches it; routes
reach them only through Depends() so tests can swap any of them with
app.dependency_overrides.
"""

from __future__ import annotations

from functools import lru_cache

from app.application.interfaces.services import (
    IMediaStorage,
    IMessageRenderer,
    IPasswordHasher,
    ITokenCodec,
)
from app.application.services.credential_issuer import CredentialIssuer
from app.application.services.notification_dispatcher import NotificationDispatcher
from app.core.config import get_settings
from app.infrastructure.external.notifications import (
    NotificationTemplateRenderer,
    create_notification_transport,
)
from app.infrastructure.external.storage import create_media_storage
from app.infrastructure.security import JwtTokenCodec, PasswordHasher


@lru_cache
def get_password_hasher() -> IPasswordHasher:
    """bcrypt hasher shared by login, admin login and provisioning."""
    return PasswordHasher()


@lru_cache
def get_token_codec() -> ITokenCodec:
    """HS256 session token codec keyed by SECRET_KEY."""
    settings = get_settings()
    return JwtTokenCodec(settings.secret_key.get_secret_value(), settings.algorithm)


@lru_cache
def get_media_storage() -> IMediaStorage:
    """Configured media storage backend (local or S3)."""
    return create_media_storage(get_settings())


@lru_cache
def get_message_renderer() -> IMessageRenderer:
    """Jinja renderer for notification templates."""
    return NotificationTemplateRenderer()


@lru_cache
def get_notification_dispatcher() -> NotificationDispatcher:
    """Single dispatcher per process; lifespan drains it at shutdown."""
    settings = get_settings()
    return NotificationDispatcher(
        create_notification_transport(settings),
        timeout_seconds=settings.notification_timeout_seconds,
    )


def get_credential_issuer() -> CredentialIssuer:
    """Generator for client identifiers and temporary passwords."""
    return CredentialIssuer()
