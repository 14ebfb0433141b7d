"""Shared utilities: UTC datetimes and ID generation."""

from app.shared.utils.datetime import ensure_utc, from_timestamp_utc, utc_now
from app.shared.utils.generators import generate_cuid, generate_prefixed_id

__all__ = [
    "ensure_utc",
    "from_timestamp_utc",
    "generate_cuid",
    "generate_prefixed_id",
    "utc_now",
]
