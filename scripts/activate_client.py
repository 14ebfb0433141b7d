"""Change a client's status and/or deposit flag after a deposit is confirmed.

Usage:
    uv run python -m scripts.activate_client --id <client_id> [--status active] [--deposit true]
Applies the same transition and activation-policy rules as
PUT /api/admin/clients/{clientId}/status. All imports use app.*.
"""

import argparse
import asyncio
import sys

from app.application.services.client_admin_service import ClientAdminService
from app.core.config import get_settings
from app.domain.enums import ClientStatus
from app.domain.exceptions import PortalException
from app.infrastructure.persistence.database import _ensure_engine, dispose_engine
from app.infrastructure.persistence.repositories import (
    ClientRepository,
    DeliverableRepository,
    ProjectRepository,
    TimelineRepository,
)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "y")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="activate_client")
    parser.add_argument("--id", required=True, dest="client_id")
    parser.add_argument("--status", choices=ClientStatus.values(), default=None)
    parser.add_argument("--deposit", type=_parse_bool, default=None)
    return parser.parse_args(argv)


async def main(argv: list[str]) -> int:
    """Apply the change; returns the process exit code."""
    args = _parse_args(argv)
    settings = get_settings()
    session_factory = _ensure_engine()
    try:
        async with session_factory() as session:
            service = ClientAdminService(
                ClientRepository(session),
                ProjectRepository(session),
                DeliverableRepository(session),
                TimelineRepository(session),
                activation_policy=settings.activation_policy,
                portal_url=settings.portal_url,
            )
            client = await service.client_repo.get_by_id(args.client_id)
            if client is None:
                print(f"Client not found: {args.client_id}", file=sys.stderr)
                return 1
            status = ClientStatus(args.status) if args.status else client.status
            try:
                updated = await service.update_status(
                    client.id, status, deposit_received=args.deposit
                )
            except PortalException as e:
                print(f"Not updated: {e.message}", file=sys.stderr)
                return 1
    finally:
        await dispose_engine()
    print(
        f"Updated client {updated.id}: depositReceived={updated.deposit_received}, "
        f"status={updated.status.value}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
