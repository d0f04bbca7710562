"""ledger core tables

Revision ID: 4a8e2c6f1b37
Revises:
Create Date: 2026-10-12 09:30:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "4a8e2c6f1b37"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "companies",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )

    op.create_table(
        "document_sequences",
        sa.Column(
            "company_id", sa.String(length=32), sa.ForeignKey("companies.id"), primary_key=True
        ),
        sa.Column("kind", sa.String(length=20), primary_key=True),
        sa.Column("last_number", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )

    op.create_table(
        "customers",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column(
            "company_id", sa.String(length=32), sa.ForeignKey("companies.id"), nullable=False
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("company_name", sa.String(length=255), nullable=True),
        sa.Column("address_line_1", sa.String(length=255), nullable=True),
        sa.Column("address_line_2", sa.String(length=255), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("region", sa.String(length=100), nullable=True),
        sa.Column("postal_code", sa.String(length=20), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_customers_company_id", "customers", ["company_id"])

    op.create_table(
        "jobs",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column(
            "company_id", sa.String(length=32), sa.ForeignKey("companies.id"), nullable=False
        ),
        sa.Column("reference", sa.String(length=50), nullable=False),
        sa.Column(
            "customer_id", sa.String(length=32), sa.ForeignKey("customers.id"), nullable=True
        ),
        sa.Column("customer_snapshot", sa.JSON(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("scheduled_date", sa.Date(), nullable=True),
        sa.Column("site_address_line_1", sa.String(length=255), nullable=True),
        sa.Column("site_address_line_2", sa.String(length=255), nullable=True),
        sa.Column("site_city", sa.String(length=100), nullable=True),
        sa.Column("site_postcode", sa.String(length=20), nullable=True),
        sa.Column("price", sa.Numeric(12, 2), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_jobs_company_id", "jobs", ["company_id"])
    op.create_index("ix_jobs_customer_id", "jobs", ["customer_id"])

    op.create_table(
        "documents",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column(
            "company_id", sa.String(length=32), sa.ForeignKey("companies.id"), nullable=False
        ),
        sa.Column("type", sa.String(length=7), nullable=False),
        sa.Column("number", sa.Integer(), nullable=False),
        sa.Column("reference", sa.String(length=100), nullable=True),
        sa.Column("status", sa.String(length=8), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("expiry_date", sa.Date(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column(
            "customer_id", sa.String(length=32), sa.ForeignKey("customers.id"), nullable=True
        ),
        sa.Column("job_id", sa.String(length=32), sa.ForeignKey("jobs.id"), nullable=True),
        sa.Column("customer_snapshot", sa.JSON(), nullable=False),
        sa.Column("job_address", sa.JSON(), nullable=True),
        sa.Column("subtotal", sa.Numeric(12, 2), nullable=False),
        sa.Column("total_vat", sa.Numeric(12, 2), nullable=False),
        sa.Column("discount_percent", sa.Numeric(5, 2), nullable=False),
        sa.Column("discount_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("partial_payment", sa.Numeric(12, 2), nullable=False),
        sa.Column("total", sa.Numeric(12, 2), nullable=False),
        sa.Column("balance_due", sa.Numeric(12, 2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("payment_info", sa.Text(), nullable=True),
        sa.Column("terms", sa.Text(), nullable=True),
        sa.Column("paid_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("company_id", "type", "number", name="uq_documents_number"),
    )
    op.create_index("ix_documents_company_type", "documents", ["company_id", "type"])
    op.create_index("ix_documents_status", "documents", ["status"])
    op.create_index("ix_documents_customer_id", "documents", ["customer_id"])

    op.create_table(
        "document_lines",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "document_id", sa.String(length=32), sa.ForeignKey("documents.id"), nullable=False
        ),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("unit_price", sa.Numeric(12, 4), nullable=False),
        sa.Column("vat_percent", sa.Numeric(5, 2), nullable=False),
        sa.Column("net", sa.Numeric(12, 2), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("document_lines")
    op.drop_index("ix_documents_customer_id", table_name="documents")
    op.drop_index("ix_documents_status", table_name="documents")
    op.drop_index("ix_documents_company_type", table_name="documents")
    op.drop_table("documents")
    op.drop_index("ix_jobs_customer_id", table_name="jobs")
    op.drop_index("ix_jobs_company_id", table_name="jobs")
    op.drop_table("jobs")
    op.drop_index("ix_customers_company_id", table_name="customers")
    op.drop_table("customers")
    op.drop_table("document_sequences")
    op.drop_table("companies")
