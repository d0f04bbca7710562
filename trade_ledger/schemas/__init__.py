from .company import CompanyCreate, CompanyRead
from .customer import AnonymizationRead, CustomerCreate, CustomerRead, CustomerUpdate
from .document import (
    DocumentDraft,
    DocumentFilter,
    DocumentPatch,
    DocumentRead,
    DocumentSummaryRead,
    DocumentVoidRead,
    FinancialSummaryRead,
    LineItemIn,
    LineItemRead,
    PaymentIn,
    PaymentRead,
    StatusChange,
    SummaryRequest,
    VoidRequest,
)
from .job import JobCreate, JobRead
from .snapshot import CustomerSnapshotRead, JobAddressIn, JobAddressRead

__all__ = [
    "AnonymizationRead",
    "CompanyCreate",
    "CompanyRead",
    "CustomerCreate",
    "CustomerRead",
    "CustomerSnapshotRead",
    "CustomerUpdate",
    "DocumentDraft",
    "DocumentFilter",
    "DocumentPatch",
    "DocumentRead",
    "DocumentSummaryRead",
    "DocumentVoidRead",
    "FinancialSummaryRead",
    "JobAddressIn",
    "JobAddressRead",
    "JobCreate",
    "JobRead",
    "LineItemIn",
    "LineItemRead",
    "PaymentIn",
    "PaymentRead",
    "StatusChange",
    "SummaryRequest",
    "VoidRequest",
]
