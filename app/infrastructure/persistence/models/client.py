"""Client ORM model. One row per booked customer; email is the natural key."""

from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import Boolean, DateTime, String, UniqueConstraint, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.domain.enums import ClientStatus, Role
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from app.infrastructure.persistence.models.project import Project


class Client(Base, TimestampMixin):
    """Portal client account (EDIS_ id). hashed_password is bcrypt, never plaintext."""

    __tablename__ = "client"
    __table_args__ = (UniqueConstraint("email", name="uq_client_email"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    contact_name: Mapped[str] = mapped_column(String(255), nullable=False)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=Role.CLIENT.value
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ClientStatus.PENDING.value, index=True
    )
    deposit_received: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    activated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    deliverables_access: Mapped[dict[str, Any]] = mapped_column(
        JSONB, nullable=False, default=dict
    )

    projects: Mapped[list["Project"]] = relationship(
        "Project", back_populates="client", cascade="all, delete-orphan"
    )
