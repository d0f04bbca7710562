from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    JSON,
    Date,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, new_id, utcnow
from .document_void import DocumentVoid


def _enum_values(enum) -> list[str]:
    return [member.value for member in enum]


class DocumentType(str, Enum):
    INVOICE = "invoice"
    QUOTE = "quote"


class DocumentStatus(str, Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    ACCEPTED = "Accepted"
    DECLINED = "Declined"
    UNPAID = "Unpaid"
    PAID = "Paid"
    OVERDUE = "Overdue"
    VOID = "Void"


class Document(Base):
    __tablename__ = "documents"
    __table_args__ = (
        UniqueConstraint("company_id", "type", "number", name="uq_documents_number"),
        Index("ix_documents_company_type", "company_id", "type"),
        Index("ix_documents_status", "status"),
        Index("ix_documents_customer_id", "customer_id"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    company_id: Mapped[str] = mapped_column(ForeignKey("companies.id"), nullable=False)
    type: Mapped[DocumentType] = mapped_column(
        SAEnum(
            DocumentType,
            native_enum=False,
            create_constraint=False,
            values_callable=_enum_values,
        ),
        nullable=False,
    )
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    reference: Mapped[str | None] = mapped_column(String(100))
    status: Mapped[DocumentStatus] = mapped_column(
        SAEnum(
            DocumentStatus,
            native_enum=False,
            create_constraint=False,
            values_callable=_enum_values,
        ),
        nullable=False,
    )
    due_date: Mapped[date | None] = mapped_column(Date)
    expiry_date: Mapped[date | None] = mapped_column(Date)
    # Declared after the other date columns: the attribute shadows `date`.
    date: Mapped[date] = mapped_column(Date, nullable=False)
    customer_id: Mapped[str | None] = mapped_column(ForeignKey("customers.id"))
    job_id: Mapped[str | None] = mapped_column(ForeignKey("jobs.id"))
    customer_snapshot: Mapped[dict] = mapped_column(JSON, nullable=False)
    job_address: Mapped[dict | None] = mapped_column(JSON)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    total_vat: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    discount_percent: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    discount_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    partial_payment: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    balance_due: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    payment_info: Mapped[str | None] = mapped_column(Text)
    terms: Mapped[str | None] = mapped_column(Text)
    paid_at: Mapped[datetime | None] = mapped_column(DateTime)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    items: Mapped[list["DocumentLine"]] = relationship(
        "DocumentLine",
        order_by="DocumentLine.position",
        cascade="all, delete-orphan",
    )
    payments: Mapped[list["DocumentPayment"]] = relationship(
        "DocumentPayment",
        order_by="DocumentPayment.id",
        cascade="all, delete-orphan",
    )
    void: Mapped[DocumentVoid | None] = relationship(
        DocumentVoid, uselist=False, cascade="all, delete-orphan"
    )

    @property
    def overpayment(self) -> Decimal:
        """How far recorded payments exceed the current total. Not stored."""
        excess = (self.partial_payment or Decimal("0")) - (self.total or Decimal("0"))
        return excess if excess > 0 else Decimal("0.00")
