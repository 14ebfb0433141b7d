"""Deliverable access: ownership and policy checks, time-boxed URLs, access logging.

A deliverable the caller may not see is reported exactly like one that does
not exist (ResourceNotFoundException), so responses never confirm existence.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from datetime import timedelta

from app.application.dtos.client import ProjectResult
from app.application.dtos.deliverable import (
    AccessGrant,
    AccessLogCreate,
    CallerMetadata,
    DeliverableResult,
    DeliverableUrls,
    DeliverableView,
)
from app.application.dtos.session import Principal
from app.application.interfaces.repositories import (
    IAccessRecorder,
    IClientRepository,
    IDeliverableRepository,
    IProjectRepository,
)
from app.application.interfaces.services import IMediaStorage
from app.domain.constants import DOWNLOAD_URL_TTL_SECONDS
from app.domain.enums import AccessType, DeliverableType, SizeClass
from app.domain.exceptions import (
    MediaStorageUnavailableException,
    ResourceNotFoundException,
)

logger = logging.getLogger(__name__)

DOWNLOAD_URL_TTL = timedelta(seconds=DOWNLOAD_URL_TTL_SECONDS)

# Access recordings still running after their request was cancelled.
_recording_tasks: set[asyncio.Task[None]] = set()

# Per-type (preview, optimized) size classes; None means the type has no such rendition.
URL_POLICY: dict[DeliverableType, tuple[SizeClass | None, SizeClass | None]] = {
    DeliverableType.IMAGE: (SizeClass.THUMBNAIL, SizeClass.LARGE),
    DeliverableType.MAP: (SizeClass.THUMBNAIL, SizeClass.FULL_RESOLUTION),
    DeliverableType.MODEL: (SizeClass.MODEL_PREVIEW, SizeClass.MEDIUM),
    DeliverableType.VIDEO: (SizeClass.VIDEO_POSTER, SizeClass.VIDEO_STREAM),
    DeliverableType.REPORT: (None, None),
}


def is_category_allowed(policy: dict[str, bool], deliverable_type: DeliverableType) -> bool:
    """Return True if the access policy enables this type's category. Missing means disabled."""
    return bool(policy.get(deliverable_type.access_category, False))


class DeliverableAccessController:
    """Issues download grants and URL listings for deliverables a principal may see."""

    def __init__(
        self,
        deliverable_repo: IDeliverableRepository,
        project_repo: IProjectRepository,
        client_repo: IClientRepository,
        storage: IMediaStorage,
        *,
        access_recorder: IAccessRecorder | None = None,
        storage_timeout_seconds: float = 10.0,
    ) -> None:
        self.deliverable_repo = deliverable_repo
        self.project_repo = project_repo
        self.client_repo = client_repo
        self.storage = storage
        self.access_recorder = access_recorder or deliverable_repo.record_access
        self.storage_timeout_seconds = storage_timeout_seconds

    async def _load_visible(
        self, principal: Principal, deliverable_id: str
    ) -> tuple[DeliverableResult, ProjectResult]:
        """Return deliverable and its project, or raise ResourceNotFoundException."""
        not_found = ResourceNotFoundException("deliverable", deliverable_id)
        deliverable = await self.deliverable_repo.get_by_id(deliverable_id)
        if deliverable is None:
            raise not_found
        project = await self.project_repo.get_by_id(deliverable.project_id)
        if project is None:
            raise not_found
        if principal.is_admin:
            return deliverable, project
        if project.client_id != principal.client_id:
            logger.info("Deliverable %s requested by non-owner", deliverable_id)
            raise not_found
        client = await self.client_repo.get_by_id(project.client_id)
        if client is None or not is_category_allowed(
            client.deliverables_access, deliverable.type
        ):
            raise not_found
        return deliverable, project

    async def _bounded(self, storage_ref: str, call: Awaitable[str]) -> str:
        """Await a storage call within storage_timeout_seconds."""
        try:
            return await asyncio.wait_for(call, timeout=self.storage_timeout_seconds)
        except TimeoutError as e:
            logger.error("Media storage timed out for %s", storage_ref)
            raise MediaStorageUnavailableException(storage_ref, "timeout") from e
        except Exception as e:
            logger.error("Media storage failed for %s: %s", storage_ref, type(e).__name__)
            raise MediaStorageUnavailableException(storage_ref, type(e).__name__) from e

    async def request_access(
        self,
        principal: Principal,
        deliverable_id: str,
        caller: CallerMetadata,
        access_type: AccessType = AccessType.DOWNLOAD,
    ) -> AccessGrant:
        """Grant a time-boxed download URL and record the access.

        The URL is obtained first; only then is the access log entry written
        and the download counter incremented, as one shielded unit on the
        access recorder's own session that completes even if the caller goes
        away.
        """
        deliverable, project = await self._load_visible(principal, deliverable_id)
        url = await self._bounded(
            deliverable.storage_ref,
            self.storage.generate_download_url(deliverable.storage_ref, DOWNLOAD_URL_TTL),
        )
        entry = AccessLogCreate(
            client_id=project.client_id,
            project_id=project.id,
            deliverable_id=deliverable.id,
            access_type=access_type,
            caller=caller,
        )
        task = asyncio.ensure_future(self.access_recorder(entry))
        _recording_tasks.add(task)
        task.add_done_callback(_recording_tasks.discard)
        await asyncio.shield(task)
        logger.info(
            "Access granted to deliverable %s for %s", deliverable.id, principal.role.value
        )
        return AccessGrant(
            url=url,
            filename=deliverable.original_filename,
            expires_in_seconds=DOWNLOAD_URL_TTL_SECONDS,
        )

    async def build_urls(self, deliverable: DeliverableResult) -> DeliverableUrls:
        """Preview/optimized/original URLs from the per-type policy table."""
        preview_class, optimized_class = URL_POLICY[deliverable.type]
        ref = deliverable.storage_ref

        async def _url(size_class: SizeClass | None) -> str | None:
            if size_class is None:
                return None
            return await self._bounded(
                ref, self.storage.transform_url(ref, size_class, DOWNLOAD_URL_TTL)
            )

        preview, optimized, original = await asyncio.gather(
            _url(preview_class), _url(optimized_class), _url(SizeClass.ORIGINAL)
        )
        return DeliverableUrls(preview=preview, optimized=optimized, original=original or "")

    async def list_deliverables(self, principal: Principal) -> list[DeliverableView]:
        """Deliverables of the principal's project that its policy allows, with URLs."""
        project_id = principal.project_id
        if project_id is None:
            if principal.client_id is None:
                return []
            project = await self.project_repo.get_latest_for_client(principal.client_id)
            if project is None:
                return []
            project_id = project.id
        client = (
            await self.client_repo.get_by_id(principal.client_id)
            if principal.client_id
            else None
        )
        if client is None:
            return []
        deliverables = [
            d
            for d in await self.deliverable_repo.list_for_project(project_id)
            if is_category_allowed(client.deliverables_access, d.type)
        ]
        urls = await asyncio.gather(*(self.build_urls(d) for d in deliverables))
        return [
            DeliverableView(deliverable=d, urls=u) for d, u in zip(deliverables, urls)
        ]
