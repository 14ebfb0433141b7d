"""Credential issuance for newly booked clients (identifiers + one-time password)."""

from __future__ import annotations

import secrets
import string
from datetime import datetime

from app.application.dtos.session import IssuedCredentials
from app.shared.utils.datetime import ensure_utc, utc_now
from app.shared.utils.generators import generate_prefixed_id

CLIENT_ID_PREFIX = "EDIS"
PROJECT_ID_PREFIX = "PRJ"
CLIENT_ID_BYTES = 10
PROJECT_ID_BYTES = 8
TEMP_PASSWORD_LENGTH = 14
MIN_PASSWORD_LENGTH = 12
_PASSWORD_ALPHABET = string.ascii_letters + string.digits
_REQUIRED_CLASSES = (string.ascii_lowercase, string.ascii_uppercase, string.digits)


class CredentialIssuer:
    """Issues client/project identifiers and a temporary password. Pure; no I/O."""

    def __init__(self, password_length: int = TEMP_PASSWORD_LENGTH) -> None:
        if password_length < MIN_PASSWORD_LENGTH:
            raise ValueError(f"password_length must be at least {MIN_PASSWORD_LENGTH}")
        self.password_length = password_length
        self._random = secrets.SystemRandom()

    def generate_password(self) -> str:
        """Random password over letters and digits with at least one lower, upper and digit."""
        chars = [self._random.choice(cls) for cls in _REQUIRED_CLASSES]
        chars.extend(
            self._random.choice(_PASSWORD_ALPHABET)
            for _ in range(self.password_length - len(chars))
        )
        self._random.shuffle(chars)
        return "".join(chars)

    def issue(
        self, client_email: str, booking_timestamp: datetime | None = None
    ) -> IssuedCredentials:
        """Issue credentials for client_email. The username is the lower-cased email."""
        issued_at = ensure_utc(booking_timestamp) if booking_timestamp else utc_now()
        return IssuedCredentials(
            client_id=generate_prefixed_id(CLIENT_ID_PREFIX, CLIENT_ID_BYTES),
            project_id=generate_prefixed_id(PROJECT_ID_PREFIX, PROJECT_ID_BYTES),
            username=client_email.strip().lower(),
            temporary_password=self.generate_password(),
            issued_at=issued_at or utc_now(),
        )
