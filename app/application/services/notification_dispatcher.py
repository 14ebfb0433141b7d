"""Best-effort notification delivery with bounded send time and tracked background tasks."""

from __future__ import annotations

import asyncio
import logging

from app.application.dtos.notification import (
    NotificationFailed,
    NotificationMessage,
    NotificationResult,
    NotificationSent,
)
from app.application.interfaces.services import INotificationTransport

logger = logging.getLogger(__name__)

DEFAULT_SEND_TIMEOUT_SECONDS = 10.0


class NotificationDispatcher:
    """Sends messages through one transport. Failures become NotificationFailed, never exceptions.

    dispatch() schedules a send on the running loop and keeps a strong
    reference to the task until it finishes; drain() waits for whatever is
    still pending (lifespan shutdown, tests).
    """

    def __init__(
        self,
        transport: INotificationTransport,
        timeout_seconds: float = DEFAULT_SEND_TIMEOUT_SECONDS,
    ) -> None:
        self.transport = transport
        self.timeout_seconds = timeout_seconds
        self._pending: set[asyncio.Task[NotificationResult]] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def send(self, message: NotificationMessage) -> NotificationResult:
        """Send one message within timeout_seconds. Never raises (except cancellation)."""
        try:
            message_id = await asyncio.wait_for(
                self.transport.send(message), timeout=self.timeout_seconds
            )
        except TimeoutError:
            logger.warning(
                "Notification %s timed out after %.1fs via %s",
                message.kind,
                self.timeout_seconds,
                self.transport.name,
            )
            return NotificationFailed(kind=message.kind, reason="timeout")
        except Exception as e:
            logger.warning(
                "Notification %s failed via %s: %s",
                message.kind,
                self.transport.name,
                type(e).__name__,
            )
            return NotificationFailed(kind=message.kind, reason=type(e).__name__)
        logger.info("Notification %s sent via %s", message.kind, self.transport.name)
        return NotificationSent(kind=message.kind, provider_message_id=message_id)

    def dispatch(self, message: NotificationMessage) -> None:
        """Schedule send(message) in the background; the caller does not wait."""
        task = asyncio.create_task(self.send(message), name=f"notify:{message.kind}")
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self, timeout: float | None = None) -> list[NotificationResult]:
        """Wait for pending sends. Returns results of tasks that finished."""
        if not self._pending:
            return []
        tasks = list(self._pending)
        done, not_done = await asyncio.wait(tasks, timeout=timeout)
        if not_done:
            logger.warning("%d notifications still pending after drain", len(not_done))
        return [t.result() for t in done if not t.cancelled()]
