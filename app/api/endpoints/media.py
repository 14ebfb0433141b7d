"""Token download route for the local media backend.

Local storage hands out /api/media/{token} URLs; the token is the only
credential (it expires after the grant's TTL). Other backends serve their
own signed URLs, so this route answers 404 for them.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from app.api.dependencies.services import get_media_storage
from app.application.interfaces.services import IMediaStorage
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.external.storage.local_storage import LocalStorageService

router = APIRouter()


@router.get("/{token}")
async def download_media(
    token: str,
    storage: Annotated[IMediaStorage, Depends(get_media_storage)],
) -> StreamingResponse:
    """Stream the file a valid download token points to."""
    if not isinstance(storage, LocalStorageService):
        raise ResourceNotFoundException("media", token)
    storage_ref = storage.validate_download_token(token)
    if storage_ref is None or not await storage.exists(storage_ref):
        raise ResourceNotFoundException("media", token)
    filename = storage_ref.rsplit("/", 1)[-1]
    return StreamingResponse(
        storage.download(storage_ref),
        media_type="application/octet-stream",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
