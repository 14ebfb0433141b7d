"""Request timeout middleware.

Bounds every HTTP request by REQUEST_TIMEOUT_SECONDS. Cancelling the route
unwinds its request-scoped session; access logging runs on its own session
and is shielded, so it still lands. A request that times out before its
response starts gets the RequestTimeoutException body (504). One that times
out mid-response is ended with an empty final chunk. Work that outlives a
completed response (background tasks) is cancelled without a second reply.
Raw ASGI.
"""

import asyncio
import logging
from typing import Callable

from app.core.exception_handlers import send_portal_error
from app.domain.exceptions import RequestTimeoutException

logger = logging.getLogger(__name__)


def TimeoutMiddleware(app: Callable, timeout_seconds: float) -> Callable:
    """Cancel requests running longer than timeout_seconds. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        started = False
        finished = False

        async def tracking_send(message: dict) -> None:
            nonlocal started, finished
            if message["type"] == "http.response.start":
                started = True
            elif message["type"] == "http.response.body" and not message.get("more_body"):
                finished = True
            await send(message)

        try:
            await asyncio.wait_for(app(scope, receive, tracking_send), timeout=timeout_seconds)
        except TimeoutError:
            logger.warning(
                "Request timed out after %ss: %s %s (response %s)",
                timeout_seconds,
                scope.get("method", ""),
                scope.get("path", ""),
                "complete" if finished else "started" if started else "not started",
            )
            if not started:
                await send_portal_error(send, RequestTimeoutException(timeout_seconds), scope)
            elif not finished:
                await send({"type": "http.response.body", "body": b"", "more_body": False})

    return asgi_app
