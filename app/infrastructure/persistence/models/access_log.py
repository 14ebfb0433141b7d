"""Access log ORM model. Append-only record of every deliverable access."""

from datetime import datetime
from typing import Any

from sqlalchemy import Connection, DateTime, ForeignKey, String, Text, event, text
from sqlalchemy.orm import Mapped, Mapper, mapped_column

from app.infrastructure.persistence.database import Base
from app.shared.utils.generators import generate_cuid


class AccessLog(Base):
    """Who accessed which deliverable, when, and from where. No update/delete."""

    __tablename__ = "access_log"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    client_id: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    project_id: Mapped[str] = mapped_column(String(32), nullable=False)
    deliverable_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("deliverable.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    access_type: Mapped[str] = mapped_column(String(20), nullable=False)
    ip_address: Mapped[str | None] = mapped_column(String, nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    request_id: Mapped[str | None] = mapped_column(String, nullable=True)
    accessed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=text("now()"), nullable=False
    )


@event.listens_for(AccessLog, "before_update")
def _prevent_access_log_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: AccessLog
) -> None:
    """Access log entries are append-only; updates are forbidden."""
    raise ValueError("Access log entries are immutable and cannot be updated.")


@event.listens_for(AccessLog, "before_delete")
def _prevent_access_log_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: AccessLog
) -> None:
    """Access log entries cannot be deleted."""
    raise ValueError("Access log entries cannot be deleted.")
