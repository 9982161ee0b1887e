"""Initial schema — domains and notification_records.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "domains",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.Text, nullable=False, unique=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="unknown"),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("last_checked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_domains_status", "domains", ["status"])
    op.create_index("ix_domains_active", "domains", ["active"])
    op.create_index("ix_domains_last_checked_at", "domains", ["last_checked_at"])

    op.create_table(
        "notification_records",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "domain_id", UUID(as_uuid=True),
            sa.ForeignKey("domains.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("outcome", sa.String(10), nullable=False),
        sa.Column("provider_message_id", sa.String(255), nullable=True),
        sa.Column("error_detail", sa.Text, nullable=True),
    )
    op.create_index("ix_notification_records_domain_id", "notification_records", ["domain_id"])
    op.create_index("ix_notification_records_sent_at", "notification_records", ["sent_at"])
    op.create_index("ix_notification_records_outcome", "notification_records", ["outcome"])


def downgrade() -> None:
    op.drop_table("notification_records")
    op.drop_table("domains")
