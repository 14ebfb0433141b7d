"""Auth API: client login and administrator login.

Every failure is the same 401 so callers cannot probe which emails exist.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.dependencies.use_cases import get_session_service
from app.application.services.session_service import SessionService
from app.core.limiter import check_login_rate_per_username, limit_auth
from app.schemas.auth import (
    AdminTokenResponse,
    ClientTokenResponse,
    LoginRequest,
    session_user,
)

router = APIRouter()
admin_router = APIRouter()


@router.post("/login", response_model=ClientTokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> ClientTokenResponse:
    """Authenticate a client by email and password; return a bearer token."""
    check_login_rate_per_username(body.username)
    session = await sessions.login(body.username, body.password)
    return ClientTokenResponse(
        token=session.token,
        expires_at=session.principal.expires_at,
        user=session_user(session),
    )


@admin_router.post("/login", response_model=AdminTokenResponse)
@limit_auth
async def admin_login(
    request: Request,
    body: LoginRequest,
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> AdminTokenResponse:
    """Authenticate the administrator; return an admin bearer token."""
    check_login_rate_per_username(body.username)
    session = await sessions.admin_login(body.username, body.password)
    return AdminTokenResponse(token=session.token, expires_at=session.principal.expires_at)
