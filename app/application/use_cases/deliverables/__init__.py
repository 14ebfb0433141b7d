"""Deliverable use cases: access control with URL grants, and the client dashboard."""

from app.application.use_cases.deliverables.access_controller import (
    URL_POLICY,
    DeliverableAccessController,
)
from app.application.use_cases.deliverables.dashboard import DashboardService

__all__ = [
    "URL_POLICY",
    "DashboardService",
    "DeliverableAccessController",
]
