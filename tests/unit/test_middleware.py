"""Raw ASGI middleware: per-route body bounds and request timeouts."""

import asyncio
import json

from app.middleware import RequestSizeLimitMiddleware, TimeoutMiddleware


def _scope(path: str = "/api/admin/clients", method: str = "POST", headers=()) -> dict:
    return {"type": "http", "method": method, "path": path, "headers": list(headers)}


def _receiver(*chunks: bytes):
    messages = [
        {"type": "http.request", "body": c, "more_body": i < len(chunks) - 1}
        for i, c in enumerate(chunks)
    ]

    async def receive() -> dict:
        if messages:
            return messages.pop(0)
        return {"type": "http.disconnect"}

    return receive


async def _call(asgi, scope: dict, receive) -> tuple[list[dict], dict]:
    sent: list[dict] = []

    async def send(message: dict) -> None:
        sent.append(message)

    await asgi(scope, receive, send)
    start = next(m for m in sent if m["type"] == "http.response.start")
    body = b"".join(m.get("body", b"") for m in sent if m["type"] == "http.response.body")
    return sent, {"status": start["status"], "json": json.loads(body) if body else None}


async def echo_app(scope: dict, receive, send) -> None:
    body = b""
    while True:
        message = await receive()
        body += message.get("body", b"")
        if not message.get("more_body"):
            break
    await send({"type": "http.response.start", "status": 200, "headers": []})
    await send({"type": "http.response.body", "body": json.dumps({"received": len(body)}).encode()})


def _size_limited():
    return RequestSizeLimitMiddleware(
        echo_app, max_bytes=100, path_limits={"/api/webhooks/": 10}
    )


async def test_declared_length_over_route_bound_is_413() -> None:
    _, response = await _call(
        _size_limited(),
        _scope("/api/webhooks/honeybook", headers=[(b"content-length", b"11")]),
        _receiver(b"x" * 11),
    )
    assert response["status"] == 413
    assert response["json"] == {
        "error": "Request body must be at most 10 bytes",
        "code": "PAYLOAD_TOO_LARGE",
        "details": {"max_bytes": 10, "received_bytes": 11},
    }


async def test_other_routes_use_default_bound() -> None:
    _, response = await _call(
        _size_limited(),
        _scope(headers=[(b"content-length", b"50")]),
        _receiver(b"x" * 50),
    )
    assert response == {"status": 200, "json": {"received": 50}}


async def test_chunked_body_counted_against_bound() -> None:
    _, too_big = await _call(
        _size_limited(), _scope("/api/webhooks/honeybook"), _receiver(b"x" * 6, b"x" * 6)
    )
    _, fits = await _call(
        _size_limited(), _scope("/api/webhooks/honeybook"), _receiver(b"x" * 4, b"x" * 5)
    )
    assert too_big["status"] == 413
    assert too_big["json"]["details"]["received_bytes"] == 12
    assert fits == {"status": 200, "json": {"received": 9}}


async def test_disconnect_while_buffering_sends_nothing() -> None:
    async def receive() -> dict:
        return {"type": "http.disconnect"}

    sent: list[dict] = []

    async def send(message: dict) -> None:
        sent.append(message)

    await _size_limited()(_scope(), receive, send)
    assert sent == []


async def test_timeout_before_response_is_504() -> None:
    async def slow_app(scope, receive, send) -> None:
        await asyncio.sleep(5)

    _, response = await _call(
        TimeoutMiddleware(slow_app, timeout_seconds=0.01), _scope(method="GET"), _receiver()
    )
    assert response["status"] == 504
    assert response["json"]["code"] == "REQUEST_TIMEOUT"


async def test_timeout_after_response_sends_no_second_reply() -> None:
    async def app_with_background_work(scope, receive, send) -> None:
        await send({"type": "http.response.start", "status": 200, "headers": []})
        await send({"type": "http.response.body", "body": b"{}", "more_body": False})
        await asyncio.sleep(5)

    sent, response = await _call(
        TimeoutMiddleware(app_with_background_work, timeout_seconds=0.01),
        _scope(method="GET"),
        _receiver(),
    )
    assert response["status"] == 200
    assert [m["type"] for m in sent] == ["http.response.start", "http.response.body"]


async def test_timeout_mid_stream_closes_body() -> None:
    async def streaming_app(scope, receive, send) -> None:
        await send({"type": "http.response.start", "status": 200, "headers": []})
        await send({"type": "http.response.body", "body": b"part", "more_body": True})
        await asyncio.sleep(5)

    sent: list[dict] = []

    async def send(message: dict) -> None:
        sent.append(message)

    await TimeoutMiddleware(streaming_app, timeout_seconds=0.01)(
        _scope(method="GET"), _receiver(), send
    )
    assert sent[-1] == {"type": "http.response.body", "body": b"", "more_body": False}
    assert sum(m["type"] == "http.response.start" for m in sent) == 1
