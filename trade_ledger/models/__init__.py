from .base import Base
from .company import Company
from .customer import Customer
from .document import Document, DocumentStatus, DocumentType
from .document_line import DocumentLine
from .document_payment import DocumentPayment
from .document_sequence import DocumentSequence
from .document_void import DocumentVoid
from .job import Job
from .snapshot_anonymization import SnapshotAnonymization

__all__ = [
    "Base",
    "Company",
    "Customer",
    "Document",
    "DocumentStatus",
    "DocumentType",
    "DocumentLine",
    "DocumentPayment",
    "DocumentSequence",
    "DocumentVoid",
    "Job",
    "SnapshotAnonymization",
]
