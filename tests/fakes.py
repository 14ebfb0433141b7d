"""In-memory collaborators for unit and API tests.

Repositories share one InMemoryStore and enforce the same email uniqueness
the database does, so provisioning idempotency can be exercised without
Postgres. Storage and notification transport record their calls.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any

from app.application.dtos.client import (
    ClientCreate,
    ClientCredentialRecord,
    ClientResult,
    ProjectCreate,
    ProjectResult,
    TimelineEntryCreate,
    TimelineEntryResult,
)
from app.application.dtos.deliverable import (
    AccessLogCreate,
    DeliverableCreate,
    DeliverableResult,
)
from app.application.dtos.notification import NotificationMessage
from app.domain.constants import DEFAULT_DELIVERABLES_ACCESS
from app.domain.enums import ClientStatus, SizeClass
from app.domain.exceptions import ClientAlreadyExistsException
from app.infrastructure.security.password import PasswordHasher
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_cuid


@dataclass
class InMemoryStore:
    clients: dict[str, ClientResult] = field(default_factory=dict)
    password_hashes: dict[str, str] = field(default_factory=dict)
    projects: dict[str, ProjectResult] = field(default_factory=dict)
    deliverables: dict[str, DeliverableResult] = field(default_factory=dict)
    timeline: list[TimelineEntryResult] = field(default_factory=list)
    access_logs: list[AccessLogCreate] = field(default_factory=list)
    # Ticks so "newest first" ordering is deterministic within one test.
    _clock: datetime = field(default_factory=utc_now)

    def now(self) -> datetime:
        self._clock = self._clock + timedelta(milliseconds=1)
        return self._clock


class FakeClientRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.create_calls = 0

    async def get_by_id(self, client_id: str) -> ClientResult | None:
        return self.store.clients.get(client_id)

    async def get_by_email(self, email: str) -> ClientResult | None:
        wanted = email.strip().lower()
        for c in self.store.clients.values():
            if c.email == wanted:
                return c
        return None

    async def get_credentials_by_email(self, email: str) -> ClientCredentialRecord | None:
        client = await self.get_by_email(email)
        if client is None:
            return None
        return ClientCredentialRecord(
            client=client, hashed_password=self.store.password_hashes[client.id]
        )

    async def create_with_project(
        self,
        client: ClientCreate,
        project: ProjectCreate,
        timeline: TimelineEntryCreate,
    ) -> tuple[ClientResult, ProjectResult]:
        self.create_calls += 1
        # Yield so concurrent provisioning calls interleave like real I/O.
        await asyncio.sleep(0)
        if await self.get_by_email(client.email) is not None:
            raise ClientAlreadyExistsException(client.email)
        now = self.store.now()
        client_result = ClientResult(
            id=client.id,
            email=client.email.lower(),
            contact_name=client.contact_name,
            company_name=client.company_name,
            phone=client.phone,
            role=client.role,
            status=client.status,
            deposit_received=client.deposit_received,
            deliverables_access=dict(client.deliverables_access),
            created_at=now,
            activated_at=client.activated_at,
        )
        project_result = ProjectResult(
            id=project.id,
            client_id=client.id,
            name=project.name,
            details=dict(project.details),
            created_at=now,
            updated_at=now,
        )
        self.store.clients[client.id] = client_result
        self.store.password_hashes[client.id] = client.hashed_password
        self.store.projects[project.id] = project_result
        await FakeTimelineRepository(self.store).add(timeline)
        return client_result, project_result

    async def list_clients(self, skip: int = 0, limit: int = 100) -> list[ClientResult]:
        ordered = sorted(
            self.store.clients.values(), key=lambda c: c.created_at, reverse=True
        )
        return ordered[skip : skip + limit]

    async def update_access_policy(
        self, client_id: str, policy: dict[str, bool]
    ) -> ClientResult | None:
        client = self.store.clients.get(client_id)
        if client is None:
            return None
        updated = replace(client, deliverables_access=dict(policy))
        self.store.clients[client_id] = updated
        return updated

    async def update_status(
        self,
        client_id: str,
        status: ClientStatus,
        *,
        deposit_received: bool | None = None,
        activated_at: datetime | None = None,
    ) -> ClientResult | None:
        client = self.store.clients.get(client_id)
        if client is None:
            return None
        changes: dict[str, Any] = {"status": status}
        if deposit_received is not None:
            changes["deposit_received"] = deposit_received
        if activated_at is not None:
            changes["activated_at"] = activated_at
        updated = replace(client, **changes)
        self.store.clients[client_id] = updated
        return updated

    async def touch_last_login(self, client_id: str, when: datetime) -> None:
        client = self.store.clients.get(client_id)
        if client is not None:
            self.store.clients[client_id] = replace(client, last_login_at=when)


class FakeProjectRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def get_by_id(self, project_id: str) -> ProjectResult | None:
        return self.store.projects.get(project_id)

    async def get_latest_for_client(self, client_id: str) -> ProjectResult | None:
        mine = [p for p in self.store.projects.values() if p.client_id == client_id]
        return max(mine, key=lambda p: p.created_at) if mine else None

    async def merge_details(
        self, project_id: str, details: dict[str, Any]
    ) -> ProjectResult | None:
        project = self.store.projects.get(project_id)
        if project is None:
            return None
        merged = {**project.details, **details}
        name = details.get("project_name") or project.name
        updated = replace(project, details=merged, name=name, updated_at=self.store.now())
        self.store.projects[project_id] = updated
        return updated


class FakeDeliverableRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def get_by_id(self, deliverable_id: str) -> DeliverableResult | None:
        return self.store.deliverables.get(deliverable_id)

    async def list_for_project(self, project_id: str) -> list[DeliverableResult]:
        mine = [d for d in self.store.deliverables.values() if d.project_id == project_id]
        return sorted(mine, key=lambda d: d.uploaded_at, reverse=True)

    async def create(self, data: DeliverableCreate) -> DeliverableResult:
        result = DeliverableResult(
            id=data.id,
            project_id=data.project_id,
            type=data.type,
            category=data.category,
            filename=data.filename,
            original_filename=data.original_filename,
            storage_ref=data.storage_ref,
            file_size=data.file_size,
            mime_type=data.mime_type,
            description=data.description,
            uploaded_at=self.store.now(),
            download_count=0,
        )
        self.store.deliverables[result.id] = result
        return result

    async def record_access(self, entry: AccessLogCreate) -> None:
        self.store.access_logs.append(entry)
        d = self.store.deliverables[entry.deliverable_id]
        self.store.deliverables[d.id] = replace(d, download_count=d.download_count + 1)


class FakeTimelineRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def add(self, entry: TimelineEntryCreate) -> TimelineEntryResult:
        result = TimelineEntryResult(
            id=generate_cuid(),
            project_id=entry.project_id,
            event_type=entry.event_type,
            title=entry.title,
            description=entry.description,
            event_date=self.store.now(),
        )
        self.store.timeline.append(result)
        return result

    async def list_for_project(
        self, project_id: str, limit: int = 50
    ) -> list[TimelineEntryResult]:
        mine = [t for t in self.store.timeline if t.project_id == project_id]
        return sorted(mine, key=lambda t: t.event_date, reverse=True)[:limit]


class FakeMediaStorage:
    """Deterministic URLs; optionally slow or failing."""

    def __init__(self, *, delay: float = 0.0, fail: bool = False) -> None:
        self.delay = delay
        self.fail = fail
        self.download_url_calls: list[str] = []

    async def _maybe_stall(self) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise ConnectionError("media storage down")

    async def generate_download_url(
        self, storage_ref: str, expiration: timedelta = timedelta(hours=1)
    ) -> str:
        await self._maybe_stall()
        self.download_url_calls.append(storage_ref)
        return f"https://media.test/dl/{storage_ref}?ttl={int(expiration.total_seconds())}"

    async def transform_url(
        self,
        storage_ref: str,
        size_class: SizeClass,
        expiration: timedelta = timedelta(hours=1),
    ) -> str:
        await self._maybe_stall()
        return f"https://media.test/{size_class.value}/{storage_ref}"

    async def download(self, storage_ref: str):
        yield b""


class RecordingTransport:
    """INotificationTransport that records messages; can stall or fail."""

    name = "recording"

    def __init__(self, *, delay: float = 0.0, fail: bool = False) -> None:
        self.delay = delay
        self.fail = fail
        self.sent: list[NotificationMessage] = []

    async def send(self, message: NotificationMessage) -> str | None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise RuntimeError("provider rejected message")
        self.sent.append(message)
        return f"msg-{len(self.sent)}"


class StubRenderer:
    """IMessageRenderer that echoes the context so tests can inspect it."""

    def __init__(self) -> None:
        self.contexts: dict[str, dict[str, Any]] = {}

    def render(self, template_key: str, context: dict[str, Any]) -> tuple[str, str, str]:
        self.contexts[template_key] = dict(context)
        return (
            f"subject:{template_key}",
            f"<p>{template_key}</p>",
            " ".join(f"{k}={v}" for k, v in sorted(context.items())),
        )


# Low bcrypt cost keeps login tests fast; hashes stay real bcrypt.
TEST_HASHER = PasswordHasher(rounds=4)
TEST_WEBHOOK_SECRET = "test-webhook-secret"
TEST_ADMIN_USERNAME = "portal-admin"
TEST_ADMIN_PASSWORD = "correct horse battery staple"


async def seed_client(
    store: InMemoryStore,
    *,
    email: str = "jane@acme.test",
    password: str = "Temp0rary-Pass",
    status: ClientStatus = ClientStatus.ACTIVE,
    client_id: str = "EDIS_SEED0001",
    project_id: str = "PRJ_SEED0001",
    access: dict[str, bool] | None = None,
) -> tuple[ClientResult, ProjectResult]:
    """Insert a client with one project directly into the in-memory store."""
    return await FakeClientRepository(store).create_with_project(
        ClientCreate(
            id=client_id,
            email=email,
            contact_name="Jane Doe",
            company_name="Acme Roofing",
            phone="555-0100",
            hashed_password=TEST_HASHER.hash(password),
            status=status,
            deliverables_access=dict(
                DEFAULT_DELIVERABLES_ACCESS if access is None else access
            ),
        ),
        ProjectCreate(
            id=project_id,
            client_id=client_id,
            name="Roof survey",
            details={"service_type": "Drone Photography", "package": "Premium"},
        ),
        TimelineEntryCreate(
            project_id=project_id, event_type="project_booked", title="Project booked"
        ),
    )
