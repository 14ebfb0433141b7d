"""Domain exceptions for the client portal.

Defines domain-level exceptions that represent business rule violations and
authentication/authorization failures. These exceptions are independent of
infrastructure concerns. Presentation layer maps them to HTTP responses in
exception handlers.

Authentication and authorization messages are deliberately generic so that
responses never reveal whether an account or a resource exists.
"""

from typing import Any


class PortalException(Exception):
    """Base exception for all portal application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description (safe to return to callers).
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body: error message, code, and details when present."""
        body: dict[str, Any] = {"error": self.message, "code": self.error_code}
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(PortalException):
    """Raised when input validation fails (e.g. malformed webhook payload)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidSignatureException(PortalException):
    """Raised when a webhook signature does not match the raw request body."""

    def __init__(self) -> None:
        super().__init__("Invalid signature", "INVALID_SIGNATURE")


class WebhookNotConfiguredException(PortalException):
    """Raised when a webhook arrives but no shared secret is configured."""

    def __init__(self) -> None:
        super().__init__(
            "Webhook is not configured",
            "WEBHOOK_NOT_CONFIGURED",
        )


class ClientAlreadyExistsException(PortalException):
    """Raised by the store when a client with the same email already exists.

    Provisioning treats this as an idempotent no-op, never as a failure.
    """

    def __init__(self, email: str) -> None:
        super().__init__(
            "Client already provisioned",
            "CLIENT_ALREADY_EXISTS",
            {"email": email},
        )


class InvalidCredentialsException(PortalException):
    """Raised when login fails for any reason (unknown user, inactive, wrong password)."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials", "INVALID_CREDENTIALS")


class UnauthenticatedException(PortalException):
    """Raised when a bearer token is missing, malformed, or has a bad signature."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, "UNAUTHENTICATED")


class TokenExpiredException(PortalException):
    """Raised when a well-formed session token is past its expiry."""

    def __init__(self) -> None:
        super().__init__("Session expired", "TOKEN_EXPIRED")


class ForbiddenException(PortalException):
    """Raised when an authenticated principal lacks the required role."""

    def __init__(self, required_role: str | None = None) -> None:
        """Initialize with the role that was required.

        Args:
            required_role: Role the operation needs (e.g. 'admin').
        """
        message = "Access denied"
        if required_role == "admin":
            message = "Admin access required"
        super().__init__(message, "FORBIDDEN")


class ResourceNotFoundException(PortalException):
    """Raised when a resource is absent or not owned by the caller (same response for both)."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'deliverable', 'client').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type.capitalize()} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class StoreUnavailableException(PortalException):
    """Raised when the persistent store cannot be reached or times out."""

    def __init__(self, reason: str = "store unavailable") -> None:
        super().__init__("Internal server error", "STORE_UNAVAILABLE", {"reason": reason})


class TransportUnavailableException(PortalException):
    """Raised by notification transports when a message cannot be delivered."""

    def __init__(self, transport: str, reason: str) -> None:
        super().__init__(
            f"Notification transport {transport} failed",
            "TRANSPORT_UNAVAILABLE",
            {"transport": transport, "reason": reason},
        )


class MediaStorageUnavailableException(PortalException):
    """Raised when media storage fails or does not answer within its time bound."""

    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(
            "Internal server error",
            "MEDIA_STORAGE_UNAVAILABLE",
            {"storage_ref": storage_ref, "reason": reason},
        )


class RequestTimeoutException(PortalException):
    """Raised when a request does not finish within REQUEST_TIMEOUT_SECONDS."""

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(
            f"Request timed out after {timeout_seconds:g} seconds",
            "REQUEST_TIMEOUT",
            {"timeout_seconds": timeout_seconds},
        )


class PayloadTooLargeException(PortalException):
    """Raised when a request body exceeds the bound for its route."""

    def __init__(self, max_bytes: int, received: int | None = None) -> None:
        details: dict[str, Any] = {"max_bytes": max_bytes}
        if received is not None:
            details["received_bytes"] = received
        super().__init__(
            f"Request body must be at most {max_bytes} bytes",
            "PAYLOAD_TOO_LARGE",
            details,
        )
