"""CRM webhook API schemas.

The request body is read raw (signature covers the exact bytes), so only
the response is modelled here.
"""

from app.schemas.common import CamelModel


class ProvisioningOutcomeResponse(CamelModel):
    """What the webhook did: provisioned, duplicate, updated or ignored."""

    result: str
    event_type: str
    client_id: str | None = None
    project_id: str | None = None
    notifications: list[str] = []


class WebhookResponse(CamelModel):
    """Response for POST /api/webhooks/honeybook."""

    success: bool = True
    message: str = "Webhook processed"
    outcome: ProvisioningOutcomeResponse
