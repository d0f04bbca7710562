from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import DocumentStatus, DocumentType
from ..schemas import (
    DocumentDraft,
    DocumentFilter,
    DocumentPatch,
    DocumentRead,
    DocumentSummaryRead,
    FinancialSummaryRead,
    PaymentIn,
    StatusChange,
    SummaryRequest,
    VoidRequest,
)
from ..services import ledger
from .deps import get_company_id

router = APIRouter()


@router.post("/documents", response_model=DocumentRead, status_code=201)
def create_document(
    draft: DocumentDraft,
    company_id: str = Depends(get_company_id),
    db: Session = Depends(get_db),
) -> DocumentRead:
    return ledger.create_document(db, company_id, draft)


@router.get("/documents", response_model=list[DocumentSummaryRead])
def list_documents(
    type: DocumentType | None = None,
    status: DocumentStatus | None = None,
    unpaid_only: bool = False,
    customer_id: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    q: str | None = Query(None, max_length=100),
    company_id: str = Depends(get_company_id),
    db: Session = Depends(get_db),
) -> list[DocumentSummaryRead]:
    filters = DocumentFilter(
        type=type,
        status=status,
        unpaid_only=unpaid_only,
        customer_id=customer_id,
        date_from=date_from,
        date_to=date_to,
        q=q,
    )
    return ledger.list_documents(db, company_id, filters)


@router.post("/documents/summary", response_model=FinancialSummaryRead)
def preview_summary(payload: SummaryRequest) -> FinancialSummaryRead:
    return ledger.preview_summary(payload)


@router.post("/documents/overdue", response_model=list[DocumentSummaryRead])
def refresh_overdue(
    company_id: str = Depends(get_company_id),
    db: Session = Depends(get_db),
) -> list[DocumentSummaryRead]:
    return ledger.refresh_overdue(db, company_id)


@router.get("/documents/{document_id}", response_model=DocumentRead)
def get_document(
    document_id: str,
    company_id: str = Depends(get_company_id),
    db: Session = Depends(get_db),
) -> DocumentRead:
    return ledger.get_document(db, company_id, document_id)


@router.patch("/documents/{document_id}", response_model=DocumentRead)
def update_document(
    document_id: str,
    patch: DocumentPatch,
    company_id: str = Depends(get_company_id),
    db: Session = Depends(get_db),
) -> DocumentRead:
    return ledger.update_document(db, company_id, document_id, patch)


@router.post("/documents/{document_id}/status", response_model=DocumentRead)
def transition_status(
    document_id: str,
    payload: StatusChange,
    company_id: str = Depends(get_company_id),
    db: Session = Depends(get_db),
) -> DocumentRead:
    return ledger.transition_status(db, company_id, document_id, payload.status)


@router.post("/documents/{document_id}/unsend", response_model=DocumentRead)
def unsend_quote(
    document_id: str,
    company_id: str = Depends(get_company_id),
    db: Session = Depends(get_db),
) -> DocumentRead:
    return ledger.unsend_quote(db, company_id, document_id)


@router.post("/documents/{document_id}/payments", response_model=DocumentRead)
def record_payment(
    document_id: str,
    payload: PaymentIn,
    company_id: str = Depends(get_company_id),
    db: Session = Depends(get_db),
) -> DocumentRead:
    return ledger.record_payment(db, company_id, document_id, payload)


@router.post("/documents/{document_id}/void", response_model=DocumentRead)
def void_document(
    document_id: str,
    payload: VoidRequest,
    company_id: str = Depends(get_company_id),
    db: Session = Depends(get_db),
) -> DocumentRead:
    return ledger.void_document(db, company_id, document_id, payload.reason)
