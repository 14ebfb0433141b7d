"""Security: JWT session tokens and password hashing."""

from app.infrastructure.security.jwt import (
    JwtTokenCodec,
    TokenError,
    TokenExpiredError,
    create_access_token,
    verify_token,
)
from app.infrastructure.security.password import PasswordHasher

__all__ = [
    "JwtTokenCodec",
    "PasswordHasher",
    "TokenError",
    "TokenExpiredError",
    "create_access_token",
    "verify_token",
]
