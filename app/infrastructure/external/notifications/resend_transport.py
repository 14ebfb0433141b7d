"""Resend email transport (HTTPS API via httpx) with idempotency keys."""

from __future__ import annotations

import logging

import httpx

from app.application.dtos.notification import NotificationMessage
from app.domain.exceptions import TransportUnavailableException

logger = logging.getLogger(__name__)

RESEND_SEND_URL = "https://api.resend.com/emails"
RESEND_TIMEOUT_SECONDS = 10.0


class ResendNotificationTransport:
    """INotificationTransport that posts messages to the Resend API.

    Raises TransportUnavailableException on timeouts, connection errors and
    non-2xx responses. A 409 means the idempotency key was already used, so
    the message counts as sent.
    """

    name = "resend"

    def __init__(
        self,
        api_key: str,
        from_address: str,
        *,
        send_url: str = RESEND_SEND_URL,
        timeout_seconds: float = RESEND_TIMEOUT_SECONDS,
        reply_to: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self.from_address = from_address
        self.send_url = send_url
        self.timeout_seconds = timeout_seconds
        self.reply_to = reply_to
        self._transport = transport

    def _payload(self, message: NotificationMessage) -> dict[str, object]:
        payload: dict[str, object] = {
            "from": self.from_address,
            "to": list(message.to),
            "subject": message.subject,
            "html": message.html_body,
        }
        if message.text_body:
            payload["text"] = message.text_body
        if self.reply_to:
            payload["reply_to"] = self.reply_to
        return payload

    async def send(self, message: NotificationMessage) -> str | None:
        """Send one message. Returns the provider message id when Resend returns one."""
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        if message.idempotency_key:
            headers["Idempotency-Key"] = message.idempotency_key

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport
            ) as client:
                response = await client.post(
                    self.send_url, headers=headers, json=self._payload(message)
                )
        except httpx.TimeoutException as e:
            raise TransportUnavailableException(self.name, "Connection timeout") from e
        except httpx.HTTPError as e:
            raise TransportUnavailableException(
                self.name, f"Connection error: {e.__class__.__name__}"
            ) from e

        if 200 <= response.status_code < 300 or response.status_code == 409:
            message_id = None
            try:
                data = response.json()
                if isinstance(data, dict) and isinstance(data.get("id"), str):
                    message_id = data["id"]
            except ValueError:
                pass
            if response.status_code == 409:
                logger.info("Notify %s already sent (409)", message.kind)
            return message_id

        error_detail = None
        try:
            data = response.json()
            if isinstance(data, dict):
                error_detail = data.get("message") or data.get("error")
        except ValueError:
            pass
        error_msg = f"Resend API error: {response.status_code}"
        if error_detail:
            error_msg = f"{error_msg} ({error_detail})"
        raise TransportUnavailableException(self.name, error_msg)
