"""Media storage: local filesystem and S3-compatible backends.

create_media_storage() picks the backend from settings. Both implement
IMediaStorage (generate_download_url, transform_url, download); the S3
backend is imported only when selected.
"""

from app.infrastructure.external.storage.factory import create_media_storage

__all__ = ["create_media_storage"]
