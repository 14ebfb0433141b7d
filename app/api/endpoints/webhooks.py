"""CRM webhook receiver.

The body is read raw: the signature is computed over the exact bytes sent,
so it must be verified before any JSON parsing.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.dependencies.use_cases import get_provisioning_service
from app.application.services.provisioning_service import ProvisioningService
from app.core.config import get_settings
from app.core.limiter import limit_webhook
from app.schemas.webhook import ProvisioningOutcomeResponse, WebhookResponse

router = APIRouter()


@router.post("/honeybook", response_model=WebhookResponse)
@limit_webhook
async def honeybook_webhook(
    request: Request,
    service: Annotated[ProvisioningService, Depends(get_provisioning_service)],
) -> WebhookResponse:
    """Verify the signature, then provision, update or ignore by event type.

    Redelivery of the same booking is answered 200 with result "duplicate".
    """
    raw_body = await request.body()
    signature = request.headers.get(get_settings().webhook_signature_header)
    outcome = await service.handle_webhook(raw_body, signature)
    return WebhookResponse(
        outcome=ProvisioningOutcomeResponse(
            result=outcome.result.value,
            event_type=outcome.event_type,
            client_id=outcome.client_id,
            project_id=outcome.project_id,
            notifications=list(outcome.notifications),
        )
    )
