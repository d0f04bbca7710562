"""document voids

Revision ID: e6a1d9c3b572
Revises: b2e7a4c9f058
Create Date: 2026-10-20 10:05:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "e6a1d9c3b572"
down_revision = "b2e7a4c9f058"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "document_voids",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "document_id",
            sa.String(length=32),
            sa.ForeignKey("documents.id"),
            nullable=False,
            unique=True,
        ),
        sa.Column("reason", sa.String(length=255), nullable=False),
        sa.Column("voided_at", sa.DateTime(), nullable=False),
        sa.Column("voided_by", sa.String(length=150), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("document_voids")
