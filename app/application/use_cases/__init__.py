"""Application use cases: one entry point per portal operation."""

from app.application.use_cases.deliverables import (
    DashboardService,
    DeliverableAccessController,
)

__all__ = [
    "DashboardService",
    "DeliverableAccessController",
]
