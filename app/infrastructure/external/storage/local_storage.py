"""Local filesystem media storage with path validation and token download URLs."""

from __future__ import annotations

import secrets
from collections.abc import AsyncIterator
from datetime import datetime, timedelta
from pathlib import Path

import aiofiles

from app.domain.enums import SizeClass
from app.infrastructure.exceptions import StorageNotFoundError, StorageNotSupportedError
from app.shared.utils.datetime import utc_now

MEDIA_DOWNLOAD_PATH = "/api/media"


class LocalStorageService:
    """Local filesystem media storage with path traversal protection.

    Paths are validated against storage_root. Time-boxed download URLs use
    in-memory tokens served by the /api/media route. Renditions are not
    produced locally; transform_url hands out the original with a size hint.
    """

    CHUNK_SIZE = 64 * 1024  # 64KB

    _download_tokens: dict[str, tuple[str, datetime]] = {}  # token -> (storage_ref, expires_at)

    def __init__(self, storage_root: str, base_url: str | None = None) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory for all media files.
            base_url: Public base URL of this API (e.g. https://portal.example.com).
        """
        self.storage_root = Path(storage_root).resolve()
        self.base_url = base_url.rstrip("/") if base_url else None

    def _get_full_path(self, storage_ref: str) -> Path:
        """Resolve and validate path under storage_root. Raises StorageNotSupportedError on traversal."""
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StorageNotSupportedError("path_traversal", "local") from e
        return full_path

    def _issue_token(self, storage_ref: str, expiration: timedelta) -> str:
        token = secrets.token_urlsafe(32)
        self._download_tokens[token] = (storage_ref, utc_now() + expiration)
        self._cleanup_expired_tokens()
        return token

    def _url_for(self, token: str, size_class: SizeClass | None = None) -> str:
        path = f"{MEDIA_DOWNLOAD_PATH}/{token}"
        if size_class is not None and size_class != SizeClass.ORIGINAL:
            path = f"{path}?size={size_class.value}"
        return f"{self.base_url}{path}" if self.base_url else path

    async def exists(self, storage_ref: str) -> bool:
        """Return True if file exists."""
        try:
            return self._get_full_path(storage_ref).is_file()
        except StorageNotSupportedError:
            return False

    async def download(self, storage_ref: str) -> AsyncIterator[bytes]:
        """Stream file content."""
        file_path = self._get_full_path(storage_ref)
        if not file_path.is_file():
            raise StorageNotFoundError(storage_ref)
        async with aiofiles.open(file_path, "rb") as f:
            while True:
                chunk = await f.read(self.CHUNK_SIZE)
                if not chunk:
                    break
                yield chunk

    async def generate_download_url(
        self,
        storage_ref: str,
        expiration: timedelta = timedelta(hours=1),
    ) -> str:
        """Return temporary download URL (token-based for local)."""
        if not await self.exists(storage_ref):
            raise StorageNotFoundError(storage_ref)
        return self._url_for(self._issue_token(storage_ref, expiration))

    async def transform_url(
        self,
        storage_ref: str,
        size_class: SizeClass,
        expiration: timedelta = timedelta(hours=1),
    ) -> str:
        """Return a token URL for storage_ref; the size class is passed as a hint only."""
        self._get_full_path(storage_ref)
        return self._url_for(self._issue_token(storage_ref, expiration), size_class)

    def _cleanup_expired_tokens(self) -> None:
        """Remove expired download tokens."""
        now = utc_now()
        for token in [t for t, (_, exp) in self._download_tokens.items() if exp <= now]:
            del self._download_tokens[token]

    def validate_download_token(self, token: str) -> str | None:
        """Return storage_ref if token valid and not expired."""
        if token not in self._download_tokens:
            return None
        storage_ref, expires_at = self._download_tokens[token]
        if utc_now() > expires_at:
            del self._download_tokens[token]
            return None
        return storage_ref
