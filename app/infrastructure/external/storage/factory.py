"""Media storage factory: local filesystem or S3-compatible bucket from settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.application.interfaces.services import IMediaStorage
from app.infrastructure.external.storage.local_storage import (
    MEDIA_DOWNLOAD_PATH,
    LocalStorageService,
)

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


def create_media_storage(settings: Settings) -> IMediaStorage:
    """Create the configured media backend.

    Local storage hands out its own download tokens under MEDIA_DOWNLOAD_PATH;
    without STORAGE_BASE_URL those links are relative to the API host. The S3
    backend imports boto3 only here, so it needs the "storage" extra.

    Raises:
        ValueError: Unknown backend or missing bucket.
    """
    backend = settings.storage_backend.lower()
    if backend == "local":
        if not settings.storage_base_url:
            logger.warning(
                "STORAGE_BASE_URL not set; local media links will be relative (%s/...)",
                MEDIA_DOWNLOAD_PATH,
            )
        return LocalStorageService(
            storage_root=settings.storage_root,
            base_url=settings.storage_base_url,
        )
    if backend == "s3":
        if not settings.s3_bucket:
            raise ValueError("S3_BUCKET required for s3 backend")
        from app.infrastructure.external.storage.s3_storage import S3StorageService

        secret = settings.s3_secret_key
        return S3StorageService(
            bucket=settings.s3_bucket,
            region=settings.s3_region,
            endpoint_url=settings.s3_endpoint_url,
            access_key=settings.s3_access_key,
            secret_key=secret.get_secret_value() if secret else None,
        )
    raise ValueError(f"Unknown storage backend: {backend}. Supported: 'local', 's3'")
