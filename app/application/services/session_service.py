"""Session service: password login, bearer token verification, and role checks.

Login failures are indistinguishable to the caller: unknown user, inactive
account and wrong password all raise the same InvalidCredentialsException,
and unknown users still pay for one bcrypt comparison.
"""

from __future__ import annotations

import asyncio
import hmac
import logging
from datetime import timedelta

from app.application.dtos.session import IssuedSession, Principal
from app.application.interfaces.repositories import IClientRepository, IProjectRepository
from app.application.interfaces.services import IPasswordHasher, ITokenCodec
from app.domain.enums import ClientStatus, Role
from app.domain.exceptions import (
    ForbiddenException,
    InvalidCredentialsException,
    UnauthenticatedException,
)
from app.shared.utils.datetime import from_timestamp_utc, utc_now

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_SESSION = timedelta(hours=24)
DEFAULT_ADMIN_SESSION = timedelta(hours=8)


class SessionService:
    """Issues and verifies session tokens for clients and the administrator."""

    def __init__(
        self,
        client_repo: IClientRepository,
        project_repo: IProjectRepository,
        password_hasher: IPasswordHasher,
        token_codec: ITokenCodec,
        *,
        admin_username: str = "admin",
        admin_password_hash: str | None = None,
        client_session_ttl: timedelta = DEFAULT_CLIENT_SESSION,
        admin_session_ttl: timedelta = DEFAULT_ADMIN_SESSION,
    ) -> None:
        self.client_repo = client_repo
        self.project_repo = project_repo
        self.password_hasher = password_hasher
        self.token_codec = token_codec
        self.admin_username = admin_username
        self._admin_password_hash = admin_password_hash
        self.client_session_ttl = client_session_ttl
        self.admin_session_ttl = admin_session_ttl
        self._dummy_hash: str | None = None

    async def _get_dummy_hash(self) -> str:
        """Return a valid hash for dummy comparison; computed once in thread pool."""
        if self._dummy_hash is None:
            self._dummy_hash = await asyncio.to_thread(
                self.password_hasher.hash, "not-a-real-password"
            )
        return self._dummy_hash

    async def _verify(self, password: str, hashed: str) -> bool:
        return await asyncio.to_thread(self.password_hasher.verify, password, hashed)

    async def login(self, username: str, password: str) -> IssuedSession:
        """Authenticate a client by email and password.

        Raises:
            InvalidCredentialsException: For every kind of failure.
        """
        record = await self.client_repo.get_credentials_by_email(username.strip().lower())
        if record is None:
            await self._verify(password, await self._get_dummy_hash())
            raise InvalidCredentialsException()
        password_ok = await self._verify(password, record.hashed_password)
        if not password_ok or record.client.status != ClientStatus.ACTIVE:
            logger.info("Client login rejected for %s", record.client.id)
            raise InvalidCredentialsException()

        client = record.client
        project = await self.project_repo.get_latest_for_client(client.id)
        issued_at = utc_now()
        principal = Principal(
            subject=client.id,
            role=Role.CLIENT,
            email=client.email,
            project_id=project.id if project else None,
            issued_at=issued_at,
            expires_at=issued_at + self.client_session_ttl,
        )
        token = self._encode(principal)
        await self.client_repo.touch_last_login(client.id, issued_at)
        logger.info("Client login %s", client.id)
        return IssuedSession(token=token, principal=principal, client=client, project=project)

    async def admin_login(self, username: str, password: str) -> IssuedSession:
        """Authenticate the administrator against ADMIN_USERNAME / ADMIN_PASSWORD_HASH."""
        username_ok = hmac.compare_digest(
            username.strip().encode("utf-8"), self.admin_username.encode("utf-8")
        )
        hashed = self._admin_password_hash or await self._get_dummy_hash()
        password_ok = await self._verify(password, hashed)
        if not (username_ok and password_ok and self._admin_password_hash):
            logger.info("Admin login rejected")
            raise InvalidCredentialsException()
        issued_at = utc_now()
        principal = Principal(
            subject=self.admin_username,
            role=Role.ADMIN,
            email=None,
            project_id=None,
            issued_at=issued_at,
            expires_at=issued_at + self.admin_session_ttl,
        )
        logger.info("Admin login")
        return IssuedSession(token=self._encode(principal), principal=principal)

    def authenticate(self, token: str | None) -> Principal:
        """Verify a bearer token with this service's codec."""
        return self.authenticate_with(self.token_codec, token)

    @staticmethod
    def authenticate_with(token_codec: ITokenCodec, token: str | None) -> Principal:
        """Verify a bearer token and return its principal.

        Needs only the codec, so request guards can call it without a store session.

        Raises:
            UnauthenticatedException: Missing, malformed or badly signed token.
            TokenExpiredException: Token past its expiry.
        """
        if not token:
            raise UnauthenticatedException()
        claims = token_codec.decode(token)
        try:
            role = Role(claims.get("role"))
            return Principal(
                subject=str(claims["sub"]),
                role=role,
                email=claims.get("email"),
                project_id=claims.get("project_id"),
                issued_at=from_timestamp_utc(float(claims["iat"])),
                expires_at=from_timestamp_utc(float(claims["exp"])),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise UnauthenticatedException("Invalid token") from e

    @staticmethod
    def require_role(principal: Principal, role: Role) -> Principal:
        """Return principal if it has role, else raise ForbiddenException."""
        if principal.role != role:
            raise ForbiddenException(required_role=role.value)
        return principal

    def _encode(self, principal: Principal) -> str:
        claims = {"sub": principal.subject, "role": principal.role.value}
        if principal.email:
            claims["email"] = principal.email
        if principal.project_id:
            claims["project_id"] = principal.project_id
        return self.token_codec.encode(claims, principal.issued_at, principal.expires_at)
