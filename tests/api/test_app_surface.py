"""Cross-cutting HTTP behavior: health, unknown routes, request ids, headers, media route."""

from httpx import AsyncClient


async def test_health(client: AsyncClient) -> None:
    response = await client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["version"]
    assert body["timestamp"]


async def test_unknown_route_is_endpoint_not_found(client: AsyncClient) -> None:
    response = await client.get("/api/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Endpoint not found", "code": "HTTP_ERROR"}


async def test_request_id_is_echoed(client: AsyncClient) -> None:
    response = await client.get("/api/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


async def test_unsafe_request_id_is_replaced(client: AsyncClient) -> None:
    response = await client.get("/api/health", headers={"X-Request-ID": "bad id;drop"})
    echoed = response.headers["X-Request-ID"]
    assert echoed != "bad id;drop"
    assert len(echoed) == 32


async def test_security_headers(client: AsyncClient) -> None:
    response = await client.get("/api/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["Cache-Control"] == "no-store"


async def test_media_route_unknown_for_non_local_storage(client: AsyncClient) -> None:
    response = await client.get("/api/media/some-token")
    assert response.status_code == 404


async def test_oversized_webhook_body_is_413_with_request_headers(
    client: AsyncClient, settings
) -> None:
    body = b"x" * (settings.webhook_max_request_size + 1)
    response = await client.post(
        "/api/webhooks/honeybook", content=body, headers={"X-Request-ID": "big-1"}
    )
    assert response.status_code == 413
    assert response.json()["code"] == "PAYLOAD_TOO_LARGE"
    assert response.headers["X-Request-ID"] == "big-1"
    assert response.headers["Cache-Control"] == "no-store"
