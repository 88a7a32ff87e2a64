"""create customer and dispatch configuration tables

Revision ID: 3f9c2a7d1b40
Revises: 
Create Date: 2026-10-18 10:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f9c2a7d1b40"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "customers",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("plan_type", sa.String(length=20), nullable=False, server_default="free"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "customer_tokens",
        sa.Column("token", sa.String(length=255), primary_key=True),
        sa.Column("customer_id", sa.String(length=36), sa.ForeignKey("customers.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_customer_tokens_customer_id", "customer_tokens", ["customer_id"])

    op.create_table(
        "dispatch_limits",
        sa.Column("script_id", sa.String(length=63), primary_key=True),
        sa.Column("cpu_ms", sa.Integer()),
        sa.Column("memory", sa.Integer()),
    )

    op.create_table(
        "outbound_workers",
        sa.Column("script_id", sa.String(length=63), primary_key=True),
        sa.Column("outbound_script_id", sa.String(length=63), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("outbound_workers")
    op.drop_table("dispatch_limits")
    op.drop_index("ix_customer_tokens_customer_id", table_name="customer_tokens")
    op.drop_table("customer_tokens")
    op.drop_table("customers")
