"""document payments

Revision ID: 8d3f5b1e9c24
Revises: 4a8e2c6f1b37
Create Date: 2026-10-14 16:45:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "8d3f5b1e9c24"
down_revision = "4a8e2c6f1b37"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "document_payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "document_id", sa.String(length=32), sa.ForeignKey("documents.id"), nullable=False
        ),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("paid_at", sa.DateTime(), nullable=False),
        sa.Column("method", sa.String(length=50), nullable=True),
        sa.Column("recorded_at", sa.DateTime(), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("document_payments")
