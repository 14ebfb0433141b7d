"""S3-compatible media storage (AWS S3, MinIO, etc.) with presigned URLs."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from datetime import timedelta
from io import BytesIO

import boto3
from botocore.exceptions import ClientError

from app.domain.enums import SizeClass
from app.infrastructure.exceptions import StorageNotFoundError


def rendition_key(storage_ref: str, size_class: SizeClass) -> str:
    """Object key of a rendition. Renditions live under a per-size-class prefix."""
    if size_class == SizeClass.ORIGINAL:
        return storage_ref
    return f"{size_class.value}/{storage_ref}"


class S3StorageService:
    """S3-compatible storage with presigned URLs.

    Uses boto3 (sync) via asyncio.to_thread for async API. Compatible with
    AWS S3, MinIO, DigitalOcean Spaces. Renditions are written by the media
    pipeline under rendition_key(); this service only signs URLs.
    """

    CHUNK_SIZE = 64 * 1024  # 64KB

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
    ) -> None:
        """Initialize S3 client.

        Args:
            bucket: Bucket name.
            region: AWS region.
            endpoint_url: Custom endpoint (MinIO/Spaces).
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
        """
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            **extra,
        )

    def _presign(self, key: str, expiration: timedelta) -> str:
        return self._client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self.bucket, "Key": key},
            ExpiresIn=int(expiration.total_seconds()),
        )

    async def exists(self, storage_ref: str) -> bool:
        """Return True if object exists."""
        def _exists() -> bool:
            try:
                self._client.head_object(Bucket=self.bucket, Key=storage_ref)
                return True
            except ClientError:
                return False

        return await asyncio.to_thread(_exists)

    async def download(self, storage_ref: str) -> AsyncIterator[bytes]:
        """Stream object content."""
        def _get() -> bytes:
            try:
                resp = self._client.get_object(Bucket=self.bucket, Key=storage_ref)
                return resp["Body"].read()
            except ClientError as e:
                if e.response["Error"]["Code"] == "NoSuchKey":
                    raise StorageNotFoundError(storage_ref) from e
                raise

        buf = BytesIO(await asyncio.to_thread(_get))
        while True:
            chunk = buf.read(self.CHUNK_SIZE)
            if not chunk:
                break
            yield chunk

    async def generate_download_url(
        self,
        storage_ref: str,
        expiration: timedelta = timedelta(hours=1),
    ) -> str:
        """Return presigned GET URL for the original object."""
        def _presign_original() -> str:
            try:
                self._client.head_object(Bucket=self.bucket, Key=storage_ref)
            except ClientError as e:
                if e.response["Error"]["Code"] == "404":
                    raise StorageNotFoundError(storage_ref) from e
                raise
            return self._presign(storage_ref, expiration)

        return await asyncio.to_thread(_presign_original)

    async def transform_url(
        self,
        storage_ref: str,
        size_class: SizeClass,
        expiration: timedelta = timedelta(hours=1),
    ) -> str:
        """Return presigned GET URL for a rendition. Signing is local; no request is made."""
        key = rendition_key(storage_ref, size_class)
        return await asyncio.to_thread(self._presign, key, expiration)
