"""DTOs for CRM webhook events and provisioning outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.domain.enums import ProvisioningResult
from app.domain.exceptions import ValidationException


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    return str(value).strip() or None


@dataclass(frozen=True)
class BookingClient:
    """Client block of a CRM event."""

    email: str
    name: str | None = None
    phone: str | None = None
    business_name: str | None = None

    @property
    def contact_name(self) -> str:
        return self.name or self.email

    @property
    def company_name(self) -> str:
        return self.business_name or self.contact_name


@dataclass(frozen=True)
class BookingProject:
    """Project block of a CRM event. Every field is optional service metadata."""

    name: str | None = None
    service_type: str | None = None
    scheduled_date: str | None = None
    package: str | None = None
    total_amount: Any = None

    def to_details(self) -> dict[str, Any]:
        """Service metadata stored on the project; None values are dropped."""
        details = {
            "service_type": self.service_type,
            "project_name": self.name,
            "scheduled_date": self.scheduled_date,
            "package": self.package,
            "total_amount": self.total_amount,
        }
        return {k: v for k, v in details.items() if v is not None}


@dataclass(frozen=True)
class BookingEvent:
    """Verified CRM event envelope: eventType, client, project."""

    event_type: str
    client: BookingClient
    project: BookingProject

    @property
    def idempotency_key(self) -> str:
        """Lower-cased client email; deduplicates redelivered booking events."""
        return self.client.email

    @classmethod
    def from_payload(cls, payload: Any) -> BookingEvent:
        """Build from a decoded JSON envelope. Raises ValidationException on bad shape."""
        if not isinstance(payload, dict):
            raise ValidationException("Webhook body must be a JSON object")
        event_type = _optional_str(payload, "eventType")
        if not event_type:
            raise ValidationException("eventType is required", field="eventType")
        client_data = payload.get("client") or {}
        project_data = payload.get("project") or {}
        if not isinstance(client_data, dict) or not isinstance(project_data, dict):
            raise ValidationException("client and project must be objects")
        email = _optional_str(client_data, "email")
        if not email or "@" not in email:
            raise ValidationException("client.email is required", field="client.email")
        return cls(
            event_type=event_type,
            client=BookingClient(
                email=email.lower(),
                name=_optional_str(client_data, "name"),
                phone=_optional_str(client_data, "phone"),
                business_name=_optional_str(client_data, "businessName"),
            ),
            project=BookingProject(
                name=_optional_str(project_data, "name"),
                service_type=_optional_str(project_data, "serviceType"),
                scheduled_date=_optional_str(project_data, "scheduledDate"),
                package=_optional_str(project_data, "package"),
                total_amount=project_data.get("totalAmount"),
            ),
        )


@dataclass(frozen=True)
class ProvisioningOutcome:
    """What handling one event did. Acknowledged with 200 in every case."""

    result: ProvisioningResult
    event_type: str
    client_id: str | None = None
    project_id: str | None = None
    notifications: list[str] = field(default_factory=list)
