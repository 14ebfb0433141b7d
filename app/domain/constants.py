"""Domain constants: webhook event classes, URL lifetimes, and default policies.

Single source of truth for literal values shared by services and endpoints.
"""

from app.domain.enums import ACCESS_CATEGORIES

# CRM event types that confirm a booking and trigger provisioning.
BOOKING_EVENT_TYPES: frozenset[str] = frozenset(
    {"project.booked", "invoice.paid", "contract.signed"}
)
# CRM event type that merges new project metadata into an existing project.
PROJECT_UPDATED_EVENT_TYPE = "project.updated"

# Lifetime of deliverable download URLs, seconds. Fixed, not configurable.
DOWNLOAD_URL_TTL_SECONDS = 3600

# Access policy granted to newly provisioned clients.
DEFAULT_DELIVERABLES_ACCESS: dict[str, bool] = {
    category: True for category in ACCESS_CATEGORIES
}

# Timeline event types written by the portal.
TIMELINE_PROJECT_BOOKED = "project_booked"
TIMELINE_PROJECT_UPDATED = "project_updated"
TIMELINE_DELIVERABLE_UPLOADED = "deliverables_uploaded"
