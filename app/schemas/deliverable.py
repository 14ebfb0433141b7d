"""Deliverable API schemas: listings, URL triplets, download grants, registration."""

from datetime import datetime

from pydantic import Field, field_validator

from app.application.dtos.deliverable import DeliverableView
from app.domain.enums import DeliverableType
from app.schemas.common import CamelModel


class DeliverableUrlsResponse(CamelModel):
    """Preview / optimized / original URLs; preview and optimized may be null."""

    preview: str | None = None
    optimized: str | None = None
    original: str


class DeliverableResponse(CamelModel):
    """One deliverable as shown to its owner (never exposes storage_ref)."""

    id: str
    project_id: str
    type: str
    category: str
    filename: str
    original_filename: str
    file_size: int
    mime_type: str
    description: str | None = None
    uploaded_at: datetime
    download_count: int
    urls: DeliverableUrlsResponse


class DeliverableListResponse(CamelModel):
    """Response for GET /api/client/deliverables."""

    success: bool = True
    deliverables: list[DeliverableResponse]
    total: int


class DownloadResponse(CamelModel):
    """Response for GET /api/client/deliverables/{id}/download."""

    success: bool = True
    download_url: str
    filename: str
    expires_in: int


class DeliverableRegisterRequest(CamelModel):
    """Request body for POST /api/admin/deliverables.

    The file is already in media storage; storage_ref is its key there.
    """

    project_id: str = Field(..., min_length=1, max_length=64)
    type: DeliverableType
    filename: str = Field(..., min_length=1, max_length=255)
    storage_ref: str = Field(..., min_length=1, max_length=500)
    category: str | None = Field(default=None, max_length=64)
    original_filename: str | None = Field(default=None, max_length=255)
    file_size: int = Field(default=0, ge=0)
    mime_type: str = Field(default="application/octet-stream", max_length=127)
    description: str | None = Field(default=None, max_length=2000)

    @field_validator("storage_ref")
    @classmethod
    def _no_traversal(cls, v: str) -> str:
        """Reject absolute paths and parent references in storage keys."""
        if v.startswith("/") or ".." in v.split("/"):
            raise ValueError("storage_ref must be a relative key without '..'")
        return v


class DeliverableRegisterResponse(CamelModel):
    """Response for POST /api/admin/deliverables."""

    success: bool = True
    deliverable_id: str


def deliverable_response(view: DeliverableView) -> DeliverableResponse:
    """Build the API view of a deliverable from its application view."""
    d = view.deliverable
    return DeliverableResponse(
        id=d.id,
        project_id=d.project_id,
        type=d.type.value,
        category=d.category,
        filename=d.filename,
        original_filename=d.original_filename,
        file_size=d.file_size,
        mime_type=d.mime_type,
        description=d.description,
        uploaded_at=d.uploaded_at,
        download_count=d.download_count,
        urls=DeliverableUrlsResponse(
            preview=view.urls.preview,
            optimized=view.urls.optimized,
            original=view.urls.original,
        ),
    )
