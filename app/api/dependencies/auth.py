"""Authentication dependencies: bearer token -> Principal, role guard, caller metadata."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.dependencies.services import get_token_codec
from app.application.dtos.deliverable import CallerMetadata
from app.application.dtos.session import Principal
from app.application.interfaces.services import ITokenCodec
from app.application.services.session_service import SessionService
from app.domain.enums import Role

# auto_error=False: a missing header is reported by SessionService in the
# portal error shape instead of FastAPI's default 403.
security = HTTPBearer(auto_error=False)


def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    codec: Annotated[ITokenCodec, Depends(get_token_codec)],
) -> Principal:
    """Verify the bearer token. No store access: the token alone identifies the caller.

    Raises:
        UnauthenticatedException: Missing or invalid token (401).
        TokenExpiredException: Expired token (401).
    """
    token = credentials.credentials if credentials else None
    return SessionService.authenticate_with(codec, token)


def require_admin(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> Principal:
    """Principal if administrator, else ForbiddenException (403)."""
    return SessionService.require_role(principal, Role.ADMIN)


def require_client(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> Principal:
    """Principal if client, else ForbiddenException (403)."""
    return SessionService.require_role(principal, Role.CLIENT)


def get_caller_metadata(request: Request) -> CallerMetadata:
    """IP, user agent and request id recorded with deliverable access."""
    return CallerMetadata(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        request_id=getattr(request.state, "request_id", None),
    )


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
AdminPrincipal = Annotated[Principal, Depends(require_admin)]
ClientPrincipal = Annotated[Principal, Depends(require_client)]
Caller = Annotated[CallerMetadata, Depends(get_caller_metadata)]
