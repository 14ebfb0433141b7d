"""Shared utilities: telemetry and cross-cutting helpers.

Used by application and infrastructure. No business logic.
"""

from app.shared.utils import (
    ensure_utc,
    from_timestamp_utc,
    generate_cuid,
    utc_now,
)

__all__ = [
    "ensure_utc",
    "from_timestamp_utc",
    "generate_cuid",
    "utc_now",
]
