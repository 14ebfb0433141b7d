"""ClientAdminService: access policy, status transitions, deliverable registration."""

import pytest

from app.application.services.client_admin_service import ClientAdminService
from app.application.services.notification_dispatcher import NotificationDispatcher
from app.domain.constants import TIMELINE_DELIVERABLE_UPLOADED
from app.domain.enums import ActivationPolicy, ClientStatus, DeliverableType
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from tests.fakes import (
    FakeClientRepository,
    FakeDeliverableRepository,
    FakeProjectRepository,
    FakeTimelineRepository,
    InMemoryStore,
    RecordingTransport,
    StubRenderer,
    seed_client,
)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


def make_service(
    store: InMemoryStore,
    transport: RecordingTransport | None = None,
    policy: ActivationPolicy = ActivationPolicy.IMMEDIATE,
) -> ClientAdminService:
    dispatcher = NotificationDispatcher(transport, timeout_seconds=1.0) if transport else None
    return ClientAdminService(
        FakeClientRepository(store),
        FakeProjectRepository(store),
        FakeDeliverableRepository(store),
        FakeTimelineRepository(store),
        dispatcher,
        StubRenderer() if transport else None,
        activation_policy=policy,
        portal_url="https://portal.test",
    )


async def test_list_clients_newest_first(store: InMemoryStore) -> None:
    await seed_client(store)
    await seed_client(store, email="b@b.test", client_id="EDIS_B", project_id="PRJ_B")
    clients = await make_service(store).list_clients()
    assert [c.id for c in clients] == ["EDIS_B", "EDIS_SEED0001"]
    assert [c.id for c in await make_service(store).list_clients(skip=1, limit=1)] == [
        "EDIS_SEED0001"
    ]


async def test_update_access_normalizes_to_every_category(store: InMemoryStore) -> None:
    client, _ = await seed_client(store)
    updated = await make_service(store).update_access(client.id, {"images": True})
    assert updated.deliverables_access == {
        "images": True,
        "maps": False,
        "models": False,
        "videos": False,
        "reports": False,
    }


async def test_update_access_rejects_unknown_category(store: InMemoryStore) -> None:
    client, _ = await seed_client(store)
    with pytest.raises(ValidationException) as exc_info:
        await make_service(store).update_access(client.id, {"photos": True})
    assert "photos" in exc_info.value.message
    assert store.clients[client.id].deliverables_access["images"] is True


async def test_update_access_unknown_client(store: InMemoryStore) -> None:
    with pytest.raises(ResourceNotFoundException):
        await make_service(store).update_access("EDIS_NOPE", {"images": True})


async def test_activate_pending_sets_activated_at(store: InMemoryStore) -> None:
    client, _ = await seed_client(store, status=ClientStatus.PENDING)
    assert client.activated_at is None
    updated = await make_service(store).update_status(client.id, ClientStatus.ACTIVE)
    assert updated.status == ClientStatus.ACTIVE
    assert updated.activated_at is not None


async def test_on_deposit_policy_requires_deposit(store: InMemoryStore) -> None:
    client, _ = await seed_client(store, status=ClientStatus.PENDING)
    service = make_service(store, policy=ActivationPolicy.ON_DEPOSIT)
    with pytest.raises(ValidationException) as exc_info:
        await service.update_status(client.id, ClientStatus.ACTIVE)
    assert exc_info.value.details == {"field": "depositReceived"}

    updated = await service.update_status(
        client.id, ClientStatus.ACTIVE, deposit_received=True
    )
    assert updated.status == ClientStatus.ACTIVE
    assert updated.deposit_received is True


async def test_cannot_return_to_pending(store: InMemoryStore) -> None:
    client, _ = await seed_client(store)
    with pytest.raises(ValidationException):
        await make_service(store).update_status(client.id, ClientStatus.PENDING)
    assert store.clients[client.id].status == ClientStatus.ACTIVE


async def test_suspend_then_reactivate(store: InMemoryStore) -> None:
    client, _ = await seed_client(store)
    service = make_service(store)
    suspended = await service.update_status(client.id, ClientStatus.SUSPENDED)
    assert suspended.status == ClientStatus.SUSPENDED
    active = await service.update_status(client.id, ClientStatus.ACTIVE)
    assert active.status == ClientStatus.ACTIVE


async def test_update_status_unknown_client(store: InMemoryStore) -> None:
    with pytest.raises(ResourceNotFoundException):
        await make_service(store).update_status("EDIS_NOPE", ClientStatus.ACTIVE)


async def test_register_deliverable_records_timeline_and_notifies(
    store: InMemoryStore, transport: RecordingTransport
) -> None:
    _, project = await seed_client(store)
    service = make_service(store, transport)
    deliverable = await service.register_deliverable(
        project.id,
        DeliverableType.VIDEO,
        "flyover.mp4",
        f"{project.id}/flyover.mp4",
        file_size=5_000_000,
        mime_type="video/mp4",
    )
    await service.dispatcher.drain(timeout=1.0)

    assert store.deliverables[deliverable.id].category == "videos"
    assert deliverable.original_filename == "flyover.mp4"
    assert store.timeline[-1].event_type == TIMELINE_DELIVERABLE_UPLOADED
    [message] = transport.sent
    assert message.kind == "deliverables_ready"
    assert message.to == ("jane@acme.test",)
    assert message.idempotency_key == f"deliverables_ready/{deliverable.id}"


async def test_register_deliverable_without_dispatcher(store: InMemoryStore) -> None:
    _, project = await seed_client(store)
    deliverable = await make_service(store).register_deliverable(
        project.id, DeliverableType.REPORT, "report.pdf", f"{project.id}/report.pdf"
    )
    assert deliverable.type == DeliverableType.REPORT


async def test_register_deliverable_unknown_project(store: InMemoryStore) -> None:
    with pytest.raises(ResourceNotFoundException):
        await make_service(store).register_deliverable(
            "PRJ_NOPE", DeliverableType.IMAGE, "a.jpg", "PRJ_NOPE/a.jpg"
        )
    assert store.deliverables == {}
