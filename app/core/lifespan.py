"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (logging, notification drain,
DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)

# Upper bound for flushing queued notifications at shutdown, seconds.
NOTIFICATION_DRAIN_TIMEOUT = 15.0


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging. Shutdown order: pending notifications drained,
    SQL engine disposed.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging(settings)
    logger.info(
        "%s %s starting (activation=%s, notifications=%s, storage=%s)",
        settings.app_name,
        settings.app_version,
        settings.activation_policy.value,
        settings.notification_backend,
        settings.storage_backend,
    )

    yield

    # ---- Shutdown ----
    from app.api.dependencies.services import get_notification_dispatcher

    dispatcher = get_notification_dispatcher()
    if dispatcher.pending_count:
        results = await dispatcher.drain(timeout=NOTIFICATION_DRAIN_TIMEOUT)
        logger.info("Drained %d pending notifications", len(results))

    from app.infrastructure.persistence import database

    if database.engine is not None:
        await database.dispose_engine()
        logger.info("Database engine disposed")
