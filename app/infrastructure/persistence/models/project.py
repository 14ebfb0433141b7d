"""Project ORM model. Belongs to exactly one client; details is opaque service metadata."""

from typing import TYPE_CHECKING, Any

from sqlalchemy import ForeignKey, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from app.infrastructure.persistence.models.client import Client


class Project(Base, TimestampMixin):
    """Booked project (PRJ_ id)."""

    __tablename__ = "project"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    client_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("client.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    details: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False, default=dict)

    client: Mapped["Client"] = relationship("Client", back_populates="projects")
