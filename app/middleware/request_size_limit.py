"""Request body size limit middleware.

Each route prefix may carry its own bound (the CRM webhook gets a smaller
one than admin JSON); everything else uses MAX_REQUEST_SIZE. A declared
Content-Length over the bound is refused before the body is read. Bodies
without one (chunked) are buffered up to the bound and refused as soon as
they pass it. Oversized requests get the PayloadTooLargeException body.
Raw ASGI.
"""

from typing import Callable

from app.core.exception_handlers import send_portal_error
from app.domain.exceptions import PayloadTooLargeException

_BODYLESS_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "DELETE"})


def _get_header(scope: dict, name: bytes) -> str | None:
    for k, v in scope.get("headers", []):
        if k.lower() == name:
            return v.decode("latin-1")
    return None


def RequestSizeLimitMiddleware(
    app: Callable, max_bytes: int, path_limits: dict[str, int] | None = None
) -> Callable:
    """Bound request bodies by max_bytes, or by the longest matching path_limits prefix."""
    limits = sorted((path_limits or {}).items(), key=lambda item: len(item[0]), reverse=True)

    def bound_for(path: str) -> int:
        for prefix, limit in limits:
            if path.startswith(prefix):
                return limit
        return max_bytes

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or scope.get("method") in _BODYLESS_METHODS:
            await app(scope, receive, send)
            return
        bound = bound_for(scope.get("path", ""))

        declared = _get_header(scope, b"content-length")
        if declared is not None:
            try:
                length = int(declared)
            except ValueError:
                length = None
            if length is not None and length > bound:
                await send_portal_error(send, PayloadTooLargeException(bound, length), scope)
                return
            await app(scope, receive, send)
            return

        # No Content-Length: read the body up front so the bound holds for chunked uploads.
        messages: list[dict] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            total += len(message.get("body", b""))
            if total > bound:
                await send_portal_error(send, PayloadTooLargeException(bound, total), scope)
                return
            messages.append(message)
            if not message.get("more_body", False):
                break

        async def replay() -> dict:
            if messages:
                return messages.pop(0)
            return await receive()

        await app(scope, replay, send)

    return asgi_app
