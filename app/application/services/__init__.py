"""Application services: webhook verification, credentials, provisioning, sessions, notifications, administration."""

from app.application.services.client_admin_service import ClientAdminService
from app.application.services.credential_issuer import CredentialIssuer
from app.application.services.notification_dispatcher import NotificationDispatcher
from app.application.services.provisioning_service import ProvisioningService
from app.application.services.session_service import SessionService
from app.application.services.signature_verifier import (
    compute_signature,
    verify_signature,
)

__all__ = [
    "ClientAdminService",
    "CredentialIssuer",
    "NotificationDispatcher",
    "ProvisioningService",
    "SessionService",
    "compute_signature",
    "verify_signature",
]
