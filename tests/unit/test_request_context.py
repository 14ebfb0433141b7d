"""Request id sanitizing, context propagation into logs, and security headers."""

import logging

from app.middleware.request_id import sanitize_request_id
from app.middleware.security_headers import SecurityHeadersMiddleware
from app.shared.context import (
    RequestIdLogFilter,
    get_request_id,
    reset_request_id,
    set_request_id,
)


def test_valid_request_id_is_kept() -> None:
    assert sanitize_request_id("  abc-123_XYZ ") == "abc-123_XYZ"


def test_invalid_request_ids_are_replaced() -> None:
    for raw in (None, "", "has space", "x" * 65, "inject\nnewline", "semi;colon"):
        value = sanitize_request_id(raw)
        assert len(value) == 32
        assert value != raw


def test_context_set_and_reset() -> None:
    assert get_request_id() is None
    token = set_request_id("req-1")
    assert get_request_id() == "req-1"
    reset_request_id(token)
    assert get_request_id() is None


def test_log_filter_adds_request_id() -> None:
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
    RequestIdLogFilter().filter(record)
    assert record.request_id == "-"
    token = set_request_id("req-2")
    try:
        RequestIdLogFilter().filter(record)
    finally:
        reset_request_id(token)
    assert record.request_id == "req-2"


async def test_security_headers_do_not_override_route_headers() -> None:
    sent: list[dict] = []

    async def inner(scope, receive, send):
        await send(
            {
                "type": "http.response.start",
                "status": 200,
                "headers": [(b"cache-control", b"private, max-age=60")],
            }
        )

    async def send(message: dict) -> None:
        sent.append(message)

    await SecurityHeadersMiddleware(inner)({"type": "http"}, None, send)

    headers = dict(sent[0]["headers"])
    assert headers[b"cache-control"] == b"private, max-age=60"
    assert headers[b"x-content-type-options"] == b"nosniff"
    assert headers[b"referrer-policy"] == b"no-referrer"
