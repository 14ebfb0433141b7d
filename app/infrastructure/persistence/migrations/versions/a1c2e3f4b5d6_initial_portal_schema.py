"""initial_portal_schema

Revision ID: a1c2e3f4b5d6
Revises:
Create Date: 2026-10-19

Client, project, deliverable, access_log and project_timeline tables.
Client email is unique (uq_client_email); access_log is append-only.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "a1c2e3f4b5d6"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create portal tables and indexes."""
    op.create_table(
        "client",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("contact_name", sa.String(length=255), nullable=False),
        sa.Column("company_name", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("deposit_received", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("activated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "deliverables_access",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_client_email"),
        sa.CheckConstraint(
            "status IN ('pending', 'active', 'suspended')", name="ck_client_status"
        ),
        sa.CheckConstraint("role IN ('client', 'admin')", name="ck_client_role"),
    )
    op.create_index("ix_client_status", "client", ["status"])

    op.create_table(
        "project",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("client_id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("details", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["client_id"], ["client.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_project_client_id", "project", ["client_id"])

    op.create_table(
        "deliverable",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(length=32), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("filename", sa.String(length=500), nullable=False),
        sa.Column("original_filename", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("storage_ref", sa.String(length=1024), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("mime_type", sa.String(length=255), nullable=False),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("download_count", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["project_id"], ["project.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "type IN ('image', 'map', 'model', 'video', 'report')",
            name="ck_deliverable_type",
        ),
        sa.CheckConstraint("download_count >= 0", name="ck_deliverable_download_count"),
    )
    op.create_index("ix_deliverable_project_id", "deliverable", ["project_id"])

    op.create_table(
        "access_log",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("client_id", sa.String(length=32), nullable=False),
        sa.Column("project_id", sa.String(length=32), nullable=False),
        sa.Column("deliverable_id", sa.String(), nullable=False),
        sa.Column("access_type", sa.String(length=20), nullable=False),
        sa.Column("ip_address", sa.String(), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("request_id", sa.String(), nullable=True),
        sa.Column("accessed_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["deliverable_id"], ["deliverable.id"], ondelete="RESTRICT"),
    )
    op.create_index("ix_access_log_client_id", "access_log", ["client_id"])
    op.create_index("ix_access_log_deliverable_id", "access_log", ["deliverable_id"])

    op.create_table(
        "project_timeline",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(length=32), nullable=False),
        sa.Column("event_type", sa.String(length=50), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("event_date", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["project_id"], ["project.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_project_timeline_project_id", "project_timeline", ["project_id"])


def downgrade() -> None:
    """Drop portal tables."""
    op.drop_index("ix_project_timeline_project_id", table_name="project_timeline")
    op.drop_table("project_timeline")
    op.drop_index("ix_access_log_deliverable_id", table_name="access_log")
    op.drop_index("ix_access_log_client_id", table_name="access_log")
    op.drop_table("access_log")
    op.drop_index("ix_deliverable_project_id", table_name="deliverable")
    op.drop_table("deliverable")
    op.drop_index("ix_project_client_id", table_name="project")
    op.drop_table("project")
    op.drop_index("ix_client_status", table_name="client")
    op.drop_table("client")
