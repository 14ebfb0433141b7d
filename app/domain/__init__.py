"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import (
    ACCESS_CATEGORIES,
    AccessType,
    ActivationPolicy,
    ClientStatus,
    DeliverableType,
    ProvisioningResult,
    Role,
    SizeClass,
)
from app.domain.exceptions import (
    ClientAlreadyExistsException,
    ForbiddenException,
    InvalidCredentialsException,
    InvalidSignatureException,
    MediaStorageUnavailableException,
    PortalException,
    ResourceNotFoundException,
    StoreUnavailableException,
    TokenExpiredException,
    TransportUnavailableException,
    UnauthenticatedException,
    ValidationException,
    WebhookNotConfiguredException,
)

__all__ = [
    # Enums
    "ACCESS_CATEGORIES",
    "AccessType",
    "ActivationPolicy",
    "ClientStatus",
    "DeliverableType",
    "ProvisioningResult",
    "Role",
    "SizeClass",
    # Exceptions
    "ClientAlreadyExistsException",
    "ForbiddenException",
    "InvalidCredentialsException",
    "InvalidSignatureException",
    "MediaStorageUnavailableException",
    "PortalException",
    "ResourceNotFoundException",
    "StoreUnavailableException",
    "TokenExpiredException",
    "TransportUnavailableException",
    "UnauthenticatedException",
    "ValidationException",
    "WebhookNotConfiguredException",
]
