"""JWT session token encoding and verification (python-jose).

Secret and algorithm are passed in explicitly (JwtTokenCodec holds them),
so tokens can be minted and checked with any Settings instance.
"""

from datetime import datetime
from typing import Any, cast

from jose import ExpiredSignatureError, JWTError, jwt

from app.domain.exceptions import TokenExpiredException, UnauthenticatedException


class TokenError(ValueError):
    """Token is malformed, has a bad signature, or lacks required claims."""


class TokenExpiredError(TokenError):
    """Token is well-formed and correctly signed but past its exp claim."""


def create_access_token(
    claims: dict[str, Any],
    *,
    secret: str,
    algorithm: str,
    issued_at: datetime,
    expires_at: datetime,
) -> str:
    """Encode claims plus iat/exp into a signed JWT.

    Args:
        claims: Custom claims (sub, role, email, project_id).
        secret: HMAC signing key.
        algorithm: JWS algorithm (e.g. HS256).
        issued_at: Value for the iat claim (UTC).
        expires_at: Value for the exp claim (UTC).

    Returns:
        Encoded JWT string.
    """
    to_encode = dict(claims)
    to_encode["iat"] = int(issued_at.timestamp())
    to_encode["exp"] = int(expires_at.timestamp())
    return cast(str, jwt.encode(to_encode, secret, algorithm=algorithm))


def verify_token(token: str, *, secret: str, algorithm: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp and sub.

    Raises:
        TokenExpiredError: If the signature is valid but exp has passed.
        TokenError: If the token is invalid or missing required claims.
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require_exp": True, "require_sub": True, "require_iat": True},
        )
    except ExpiredSignatureError as e:
        raise TokenExpiredError("Token expired") from e
    except JWTError as e:
        raise TokenError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise TokenError("Token missing required claim: sub")
    return payload


class JwtTokenCodec:
    """ITokenCodec over python-jose. Maps token errors to domain exceptions."""

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm

    def encode(
        self, claims: dict[str, Any], issued_at: datetime, expires_at: datetime
    ) -> str:
        return create_access_token(
            claims,
            secret=self._secret,
            algorithm=self.algorithm,
            issued_at=issued_at,
            expires_at=expires_at,
        )

    def decode(self, token: str) -> dict[str, Any]:
        try:
            return verify_token(token, secret=self._secret, algorithm=self.algorithm)
        except TokenExpiredError as e:
            raise TokenExpiredException() from e
        except TokenError as e:
            raise UnauthenticatedException("Invalid token") from e
