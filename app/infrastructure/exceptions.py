"""Infrastructure exceptions for media storage and external operations.

Storage errors extend PortalException so presentation can map them
to HTTP responses consistently.
"""

from app.domain.exceptions import PortalException


class StorageException(PortalException):
    """Base exception for media storage operations."""


class StorageNotFoundError(StorageException):
    """Object not found in storage."""

    def __init__(self, storage_ref: str) -> None:
        super().__init__(
            f"File not found: {storage_ref}",
            "STORAGE_NOT_FOUND",
            {"storage_ref": storage_ref},
        )


class StorageNotSupportedError(StorageException):
    """Operation not supported by this storage backend."""

    def __init__(self, operation: str, backend: str) -> None:
        super().__init__(
            f"Operation '{operation}' not supported by {backend} backend",
            "STORAGE_NOT_SUPPORTED",
            {"operation": operation, "backend": backend},
        )
