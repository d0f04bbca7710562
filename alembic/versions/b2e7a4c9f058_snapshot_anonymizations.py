"""snapshot anonymizations

Revision ID: b2e7a4c9f058
Revises: 8d3f5b1e9c24
Create Date: 2026-10-16 11:20:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "b2e7a4c9f058"
down_revision = "8d3f5b1e9c24"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "snapshot_anonymizations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "company_id", sa.String(length=32), sa.ForeignKey("companies.id"), nullable=False
        ),
        sa.Column("customer_id", sa.String(length=32), nullable=False),
        sa.Column("documents_anonymized", sa.Integer(), nullable=False),
        sa.Column("jobs_anonymized", sa.Integer(), nullable=False),
        sa.Column("anonymized_at", sa.DateTime(), nullable=False),
        sa.Column("anonymized_by", sa.String(length=150), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("snapshot_anonymizations")
