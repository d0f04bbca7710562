import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from ..models import DocumentStatus, DocumentType
from .customer import CustomerCreate
from .snapshot import CustomerSnapshotRead, JobAddressIn, JobAddressRead


class LineItemIn(BaseModel):
    description: str = ""
    quantity: Decimal = Decimal("1")
    unit_price: Decimal = Decimal("0")
    vat_percent: Decimal = Decimal("0")


class LineItemRead(LineItemIn):
    position: int
    net: Decimal

    model_config = {"from_attributes": True}


class DocumentDraft(BaseModel):
    type: DocumentType
    customer_id: str | None = None
    customer: CustomerCreate | None = None
    job_id: str | None = None
    job_address: JobAddressIn | None = None
    reference: str | None = None
    date: dt.date | None = None
    due_date: dt.date | None = None
    expiry_date: dt.date | None = None
    items: list[LineItemIn] = Field(default_factory=list)
    discount_percent: Decimal = Decimal("0")
    partial_payment: Decimal = Decimal("0")
    notes: str | None = None
    payment_info: str | None = None
    terms: str | None = None


class DocumentPatch(BaseModel):
    # type and number are not editable; unknown fields are refused.
    model_config = ConfigDict(extra="forbid")

    reference: str | None = None
    items: list[LineItemIn] | None = None
    discount_percent: Decimal | None = None
    due_date: dt.date | None = None
    expiry_date: dt.date | None = None
    notes: str | None = None
    payment_info: str | None = None
    terms: str | None = None


class StatusChange(BaseModel):
    status: DocumentStatus


class PaymentIn(BaseModel):
    amount: Decimal
    paid_at: dt.datetime | None = None
    method: str | None = None


class VoidRequest(BaseModel):
    reason: str


class DocumentVoidRead(BaseModel):
    reason: str
    voided_at: dt.datetime
    voided_by: str

    model_config = {"from_attributes": True}


class PaymentRead(BaseModel):
    amount: Decimal
    paid_at: dt.datetime
    method: str | None

    model_config = {"from_attributes": True}


class SummaryRequest(BaseModel):
    items: list[LineItemIn] = Field(default_factory=list)
    discount_percent: Decimal = Decimal("0")
    partial_payment: Decimal = Decimal("0")


class FinancialSummaryRead(BaseModel):
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    discounted_net: Decimal
    total_vat: Decimal
    total: Decimal
    partial_payment: Decimal
    balance_due: Decimal
    overpayment: Decimal
    line_nets: list[Decimal]

    model_config = {"from_attributes": True}


class DocumentFilter(BaseModel):
    type: DocumentType | None = None
    status: DocumentStatus | None = None
    unpaid_only: bool = False
    customer_id: str | None = None
    date_from: dt.date | None = None
    date_to: dt.date | None = None
    q: str | None = None


class DocumentSummaryRead(BaseModel):
    id: str
    type: DocumentType
    number: int
    reference: str | None
    status: DocumentStatus
    date: dt.date
    due_date: dt.date | None
    expiry_date: dt.date | None
    customer_id: str | None
    customer_snapshot: CustomerSnapshotRead
    total: Decimal
    balance_due: Decimal
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class DocumentRead(DocumentSummaryRead):
    company_id: str
    job_id: str | None
    job_address: JobAddressRead | None
    items: list[LineItemRead]
    subtotal: Decimal
    total_vat: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    partial_payment: Decimal
    notes: str | None
    payment_info: str | None
    terms: str | None
    overpayment: Decimal
    paid_at: dt.datetime | None
    payments: list[PaymentRead]
    void: DocumentVoidRead | None
    updated_at: dt.datetime
