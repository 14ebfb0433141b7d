"""Administrator routes: client listing, access policy, status, deliverable registration."""

from httpx import AsyncClient

from app.application.services.notification_dispatcher import NotificationDispatcher
from app.domain.enums import ClientStatus
from tests.fakes import InMemoryStore, RecordingTransport, seed_client


async def test_list_clients_hides_password_material(
    client: AsyncClient, store: InMemoryStore, admin_headers: dict[str, str]
) -> None:
    await seed_client(store)
    response = await client.get("/api/admin/clients", headers=admin_headers)
    assert response.status_code == 200
    [row] = response.json()
    assert row["clientId"] == "EDIS_SEED0001"
    assert row["status"] == "active"
    assert "password" not in response.text.lower()


async def test_list_clients_rejects_bad_paging(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.get("/api/admin/clients?limit=0", headers=admin_headers)
    assert response.status_code == 400


async def test_update_access(
    client: AsyncClient, store: InMemoryStore, admin_headers: dict[str, str]
) -> None:
    await seed_client(store)
    response = await client.put(
        "/api/admin/clients/EDIS_SEED0001/access",
        json={"deliverablesAccess": {"images": True, "videos": True}},
        headers=admin_headers,
    )
    assert response.status_code == 200, response.text
    assert response.json()["client"]["deliverablesAccess"] == {
        "images": True,
        "maps": False,
        "models": False,
        "videos": True,
        "reports": False,
    }


async def test_update_access_unknown_category_is_400(
    client: AsyncClient, store: InMemoryStore, admin_headers: dict[str, str]
) -> None:
    await seed_client(store)
    response = await client.put(
        "/api/admin/clients/EDIS_SEED0001/access",
        json={"deliverablesAccess": {"photos": True}},
        headers=admin_headers,
    )
    assert response.status_code == 400


async def test_activate_pending_client(
    client: AsyncClient, store: InMemoryStore, admin_headers: dict[str, str]
) -> None:
    await seed_client(store, status=ClientStatus.PENDING)
    response = await client.put(
        "/api/admin/clients/EDIS_SEED0001/status",
        json={"status": "active", "depositReceived": True},
        headers=admin_headers,
    )
    assert response.status_code == 200, response.text
    assert response.json()["client"]["status"] == "active"
    assert response.json()["client"]["depositReceived"] is True
    assert response.json()["client"]["activatedAt"] is not None


async def test_status_for_unknown_client_is_404(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.put(
        "/api/admin/clients/EDIS_NOPE/status",
        json={"status": "suspended"},
        headers=admin_headers,
    )
    assert response.status_code == 404


async def test_invalid_status_value_is_400(
    client: AsyncClient, store: InMemoryStore, admin_headers: dict[str, str]
) -> None:
    await seed_client(store)
    response = await client.put(
        "/api/admin/clients/EDIS_SEED0001/status",
        json={"status": "deleted"},
        headers=admin_headers,
    )
    assert response.status_code == 400


async def test_register_deliverable(
    client: AsyncClient,
    store: InMemoryStore,
    admin_headers: dict[str, str],
    dispatcher: NotificationDispatcher,
    transport: RecordingTransport,
) -> None:
    await seed_client(store)
    response = await client.post(
        "/api/admin/deliverables",
        json={
            "projectId": "PRJ_SEED0001",
            "type": "model",
            "filename": "site.glb",
            "storageRef": "PRJ_SEED0001/site.glb",
            "fileSize": 2048,
            "mimeType": "model/gltf-binary",
        },
        headers=admin_headers,
    )
    await dispatcher.drain(timeout=2.0)

    assert response.status_code == 201, response.text
    deliverable_id = response.json()["deliverableId"]
    assert store.deliverables[deliverable_id].category == "models"
    assert [m.kind for m in transport.sent] == ["deliverables_ready"]


async def test_register_deliverable_rejects_traversal(
    client: AsyncClient, store: InMemoryStore, admin_headers: dict[str, str]
) -> None:
    await seed_client(store)
    response = await client.post(
        "/api/admin/deliverables",
        json={
            "projectId": "PRJ_SEED0001",
            "type": "image",
            "filename": "x.jpg",
            "storageRef": "../secrets/x.jpg",
        },
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert store.deliverables == {}
