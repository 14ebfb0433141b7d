"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses. Every error body has the shape
{"error": <message>, "code": <ERROR_CODE>[, "details": ...]}.
"""

import json
import logging
from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.domain.exceptions import PortalException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "INVALID_SIGNATURE": 401,
    "INVALID_CREDENTIALS": 401,
    "UNAUTHENTICATED": 401,
    "TOKEN_EXPIRED": 401,
    "FORBIDDEN": 403,
    "RESOURCE_NOT_FOUND": 404,
    "CLIENT_ALREADY_EXISTS": 409,
    "PAYLOAD_TOO_LARGE": 413,
    "WEBHOOK_NOT_CONFIGURED": 503,
    "REQUEST_TIMEOUT": 504,
    "STORE_UNAVAILABLE": 500,
    "MEDIA_STORAGE_UNAVAILABLE": 500,
    "TRANSPORT_UNAVAILABLE": 500,
    "STORAGE_NOT_FOUND": 500,
    "STORAGE_NOT_SUPPORTED": 500,
}

# Collaborator failures never expose details to callers.
_GENERIC_500 = {"error": "Internal server error", "code": "INTERNAL_ERROR"}
_COLLABORATOR_CODES = frozenset(
    {
        "STORE_UNAVAILABLE",
        "MEDIA_STORAGE_UNAVAILABLE",
        "TRANSPORT_UNAVAILABLE",
        "STORAGE_NOT_FOUND",
        "STORAGE_NOT_SUPPORTED",
    }
)


def portal_error_response(
    exc: PortalException, method: str = "", path: str = ""
) -> tuple[int, dict[str, Any], dict[str, str]]:
    """Return (status, body, headers) for a PortalException.

    Shared by the FastAPI handler and the raw-ASGI middleware that answer
    before a route runs, so every error has the same shape.
    """
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if exc.error_code in _COLLABORATOR_CODES:
        logger.error(
            "Collaborator failure %s on %s %s: %s",
            exc.error_code,
            method,
            path,
            exc.details.get("reason", ""),
        )
        body: dict[str, Any] = dict(_GENERIC_500)
    else:
        body = exc.to_dict()
    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else {}
    return status, body, headers


async def send_portal_error(send: Callable, exc: PortalException, scope: dict) -> None:
    """Send a PortalException as a complete JSON response on a raw ASGI channel."""
    status, body, headers = portal_error_response(
        exc, scope.get("method", ""), scope.get("path", "")
    )
    raw_headers = [(b"content-type", b"application/json")]
    raw_headers.extend((k.lower().encode(), v.encode()) for k, v in headers.items())
    await send({"type": "http.response.start", "status": status, "headers": raw_headers})
    await send(
        {"type": "http.response.body", "body": json.dumps(body).encode(), "more_body": False}
    )


def _portal_exception_handler(request: Request, exc: PortalException) -> JSONResponse:
    """Return JSON from PortalException.to_dict() with appropriate status code."""
    status, content, headers = portal_error_response(exc, request.method, request.url.path)
    return JSONResponse(status_code=status, content=content, headers=headers or None)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with validation error details."""
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "error": "Request validation failed",
            "code": "VALIDATION_ERROR",
            "details": details,
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions; unknown routes get 'Endpoint not found'."""
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = "Endpoint not found"
    else:
        message = str(exc.detail)
    code = "RATE_LIMITED" if exc.status_code == 429 else "HTTP_ERROR"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message, "code": code},
        headers=getattr(exc, "headers", None),
    )


def _rate_limit_exception_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 in the common error shape."""
    return JSONResponse(
        status_code=429,
        content={"error": "Too many requests", "code": "RATE_LIMITED"},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500 with a generic body; the exception is only logged."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=dict(_GENERIC_500))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: PortalException (and
    subclasses), RequestValidationError, StarletteHTTPException,
    RateLimitExceeded, generic Exception.
    """
    app.add_exception_handler(PortalException, _portal_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
