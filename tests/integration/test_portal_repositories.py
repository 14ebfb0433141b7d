"""Repository integration tests against Postgres (TEST_DATABASE_URL)."""

import asyncio

import pytest
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.client import ClientCreate, ProjectCreate, TimelineEntryCreate
from app.application.dtos.deliverable import (
    AccessLogCreate,
    CallerMetadata,
    DeliverableCreate,
)
from app.domain.constants import DEFAULT_DELIVERABLES_ACCESS
from app.domain.enums import AccessType, ClientStatus, DeliverableType
from app.domain.exceptions import ClientAlreadyExistsException
from app.infrastructure.persistence.models.access_log import AccessLog
from app.infrastructure.persistence.models.deliverable import Deliverable
from app.infrastructure.persistence.repositories import (
    ClientRepository,
    DeliverableRepository,
    ProjectRepository,
    SessionScopedAccessRecorder,
    TimelineRepository,
)


def _records(client_id: str, email: str) -> tuple:
    project_id = f"PRJ_{client_id}"
    return (
        ClientCreate(
            id=client_id,
            email=email,
            contact_name="Jane Doe",
            company_name="Acme",
            phone=None,
            hashed_password="$2b$04$notarealhashnotarealhashnotarealhashnotarealhashnot",
            status=ClientStatus.ACTIVE,
            deliverables_access=dict(DEFAULT_DELIVERABLES_ACCESS),
        ),
        ProjectCreate(id=project_id, client_id=client_id, name="Roof", details={"a": 1}),
        TimelineEntryCreate(project_id=project_id, event_type="project_booked", title="Booked"),
    )


@pytest.mark.requires_db
async def test_create_client_with_project(db_session) -> None:
    repo = ClientRepository(db_session)
    client, project = await repo.create_with_project(*_records("EDIS_A", "Jane@Acme.test"))

    assert client.email == "jane@acme.test"
    assert (await repo.get_by_email("JANE@acme.test")).id == "EDIS_A"
    record = await repo.get_credentials_by_email("jane@acme.test")
    assert record.hashed_password.startswith("$2b$")
    latest = await ProjectRepository(db_session).get_latest_for_client(client.id)
    assert latest.id == project.id
    timeline = await TimelineRepository(db_session).list_for_project(project.id)
    assert [t.event_type for t in timeline] == ["project_booked"]


@pytest.mark.requires_db
async def test_duplicate_email_raises_already_exists(db_session) -> None:
    repo = ClientRepository(db_session)
    await repo.create_with_project(*_records("EDIS_A", "jane@acme.test"))
    with pytest.raises(ClientAlreadyExistsException):
        await repo.create_with_project(*_records("EDIS_B", "JANE@acme.test"))
    assert [c.id for c in await repo.list_clients()] == ["EDIS_A"]


@pytest.mark.requires_db
async def test_merge_details_and_policy_updates(db_session) -> None:
    clients = ClientRepository(db_session)
    client, project = await clients.create_with_project(*_records("EDIS_A", "a@a.test"))

    merged = await ProjectRepository(db_session).merge_details(project.id, {"b": 2})
    assert merged.details == {"a": 1, "b": 2}

    updated = await clients.update_access_policy(client.id, {"images": False})
    assert updated.deliverables_access == {"images": False}
    suspended = await clients.update_status(client.id, ClientStatus.SUSPENDED)
    assert suspended.status == ClientStatus.SUSPENDED
    assert await clients.update_status("EDIS_NOPE", ClientStatus.ACTIVE) is None


@pytest.mark.requires_db
async def test_record_access_increments_counter(db_session) -> None:
    _, project = await ClientRepository(db_session).create_with_project(
        *_records("EDIS_A", "a@a.test")
    )
    deliverables = DeliverableRepository(db_session)
    created = await deliverables.create(
        DeliverableCreate(
            id="dlv_1",
            project_id=project.id,
            type=DeliverableType.IMAGE,
            category="images",
            filename="roof.jpg",
            original_filename="roof.jpg",
            storage_ref=f"{project.id}/roof.jpg",
            file_size=10,
            mime_type="image/jpeg",
        )
    )
    entry = AccessLogCreate(
        client_id="EDIS_A",
        project_id=project.id,
        deliverable_id=created.id,
        access_type=AccessType.DOWNLOAD,
        caller=CallerMetadata(ip_address="203.0.113.9"),
    )
    for _ in range(3):
        await deliverables.record_access(entry)

    assert (await deliverables.get_by_id("dlv_1")).download_count == 3
    assert [d.id for d in await deliverables.list_for_project(project.id)] == ["dlv_1"]


@pytest.mark.requires_db
async def test_concurrent_inserts_produce_one_client(db_session) -> None:
    engine = db_session.bind

    async def attempt(client_id: str) -> str:
        async with AsyncSession(engine, expire_on_commit=False) as session:
            try:
                await ClientRepository(session).create_with_project(
                    *_records(client_id, "race@acme.test")
                )
            except ClientAlreadyExistsException:
                return "duplicate"
            return "created"

    outcomes = await asyncio.gather(*(attempt(f"EDIS_{i}") for i in range(5)))
    assert sorted(outcomes) == ["created"] + ["duplicate"] * 4


@pytest.mark.requires_db
async def test_recorder_commits_while_request_session_closes(db_session) -> None:
    engine = db_session.bind
    _, project = await ClientRepository(db_session).create_with_project(
        *_records("EDIS_R", "r@r.test")
    )
    await DeliverableRepository(db_session).create(
        DeliverableCreate(
            id="dlv_r",
            project_id=project.id,
            type=DeliverableType.MAP,
            category="maps",
            filename="ortho.tif",
            original_filename="ortho.tif",
            storage_ref=f"{project.id}/ortho.tif",
            file_size=10,
            mime_type="image/tiff",
        )
    )
    recorder = SessionScopedAccessRecorder(
        async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    )
    request_session = AsyncSession(engine, expire_on_commit=False)
    assert await DeliverableRepository(request_session).get_by_id("dlv_r") is not None
    entry = AccessLogCreate(
        client_id="EDIS_R",
        project_id=project.id,
        deliverable_id="dlv_r",
        access_type=AccessType.DOWNLOAD,
        caller=CallerMetadata(ip_address="203.0.113.9"),
    )

    await asyncio.gather(recorder(entry), request_session.close())

    async with AsyncSession(engine) as fresh:
        assert (await DeliverableRepository(fresh).get_by_id("dlv_r")).download_count == 1
        logged = await fresh.scalar(
            select(func.count()).select_from(AccessLog).where(AccessLog.deliverable_id == "dlv_r")
        )
    assert logged == 1


def test_access_log_foreign_key_restricts_deletes() -> None:
    [fk] = AccessLog.__table__.c.deliverable_id.foreign_keys
    assert fk.ondelete == "RESTRICT"


@pytest.mark.requires_db
async def test_deliverable_with_access_log_cannot_be_deleted(db_session) -> None:
    _, project = await ClientRepository(db_session).create_with_project(
        *_records("EDIS_D", "d@d.test")
    )
    deliverables = DeliverableRepository(db_session)
    await deliverables.create(
        DeliverableCreate(
            id="dlv_d",
            project_id=project.id,
            type=DeliverableType.REPORT,
            category="reports",
            filename="inspection.pdf",
            original_filename="inspection.pdf",
            storage_ref=f"{project.id}/inspection.pdf",
            file_size=10,
            mime_type="application/pdf",
        )
    )
    await deliverables.record_access(
        AccessLogCreate(
            client_id="EDIS_D",
            project_id=project.id,
            deliverable_id="dlv_d",
            access_type=AccessType.DOWNLOAD,
            caller=CallerMetadata(ip_address="203.0.113.9"),
        )
    )

    with pytest.raises(IntegrityError):
        await db_session.execute(delete(Deliverable).where(Deliverable.id == "dlv_d"))
    await db_session.rollback()
