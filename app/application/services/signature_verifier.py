"""HMAC-SHA256 signature check for inbound CRM webhooks."""

from __future__ import annotations

import hashlib
import hmac

SIGNATURE_PREFIX = "sha256="


def compute_signature(raw_payload: bytes, shared_secret: str) -> str:
    """Hex HMAC-SHA256 of raw_payload under shared_secret (what the sender puts in the header)."""
    return hmac.new(shared_secret.encode("utf-8"), raw_payload, hashlib.sha256).hexdigest()


def verify_signature(
    raw_payload: bytes,
    provided_signature_hex: str | None,
    shared_secret: str,
) -> bool:
    """Return True only if provided_signature_hex is the HMAC of the exact raw body.

    Comparison is constant-time. Missing or non-ASCII signatures and an empty
    secret all return False. Never raises.
    """
    if not shared_secret or not provided_signature_hex:
        return False
    provided = provided_signature_hex.strip()
    if provided.lower().startswith(SIGNATURE_PREFIX):
        provided = provided[len(SIGNATURE_PREFIX):]
    if not provided.isascii():
        return False
    expected = compute_signature(raw_payload, shared_secret)
    return hmac.compare_digest(expected, provided.lower())
