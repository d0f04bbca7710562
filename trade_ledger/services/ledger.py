from datetime import date, timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..config import settings
from ..db import atomic
from ..errors import DocumentLockedError, ValidationError
from ..models import (
    Document,
    DocumentLine,
    DocumentPayment,
    DocumentStatus,
    DocumentVoid,
    DocumentType,
)
from ..models.base import utcnow
from ..schemas import (
    DocumentDraft,
    DocumentFilter,
    DocumentPatch,
    PaymentIn,
    SummaryRequest,
)
from . import lifecycle
from .calculator import (
    ZERO,
    FinancialSummary,
    LineItem,
    compute,
    money,
    to_decimal,
    validate_discount,
    validate_items,
    validate_partial_payment,
)
from .companies import get_company
from .customers import build_customer, get_customer
from .jobs import get_job
from .sequences import next_number
from .snapshots import (
    CustomerSnapshot,
    capture_address,
    capture_customer,
    capture_job_address,
)
from .tenancy import get_scoped

logger = logging.getLogger(__name__)

QUANTITY_SCALE = Decimal("0.001")
PRICE_SCALE = Decimal("0.0001")
RATE_SCALE = Decimal("0.01")
# (attribute, label, decimal places kept by the column)
LINE_PLACES = (
    ("quantity", "quantity", 3),
    ("unit_price", "unit price", 4),
    ("vat_percent", "VAT", 2),
)
RATE_PLACES = 2
UNPAID_STATUSES = (DocumentStatus.UNPAID, DocumentStatus.OVERDUE)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _quantize(value, scale: Decimal) -> Decimal:
    return to_decimal(value).quantize(scale, rounding=ROUND_HALF_UP)


def _places(value) -> int:
    try:
        number = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return 0
    if not number.is_finite():
        return 0
    return max(0, -number.normalize().as_tuple().exponent)


def _check_places(items, discount_percent, errors: list[str]) -> None:
    """Refuse inputs finer than the stored columns, which would be rounded on save."""
    for index, item in enumerate(items, start=1):
        for attribute, label, places in LINE_PLACES:
            if _places(getattr(item, attribute, None)) > places:
                errors.append(
                    f"Line {index}: {label} allows at most {places} decimal places."
                )
    if discount_percent is not None and _places(discount_percent) > RATE_PLACES:
        errors.append(f"Discount allows at most {RATE_PLACES} decimal places.")


def _normalize_items(items) -> list[LineItem]:
    # Inputs already passed _check_places; this only pins them to the column scales.
    return [
        LineItem(
            description=item.description.strip(),
            quantity=_quantize(item.quantity, QUANTITY_SCALE),
            unit_price=_quantize(item.unit_price, PRICE_SCALE),
            vat_percent=_quantize(item.vat_percent, RATE_SCALE),
        )
        for item in items
    ]


def _summarize(items, discount_percent, partial_payment) -> FinancialSummary:
    return compute(
        items,
        discount_percent,
        partial_payment,
        vat_after_discount=settings.vat_after_discount,
    )


def _apply_items(
    document: Document, items: list[LineItem], summary: FinancialSummary
) -> None:
    document.items = [
        DocumentLine(
            position=position,
            description=item.description,
            quantity=item.quantity,
            unit_price=item.unit_price,
            vat_percent=item.vat_percent,
            net=net,
        )
        for position, (item, net) in enumerate(zip(items, summary.line_nets))
    ]


def _apply_summary(document: Document, summary: FinancialSummary) -> None:
    document.subtotal = summary.subtotal
    document.discount_percent = _quantize(summary.discount_percent, RATE_SCALE)
    document.discount_amount = summary.discount_amount
    document.total_vat = summary.total_vat
    document.total = summary.total
    document.partial_payment = summary.partial_payment
    document.balance_due = summary.balance_due


def _recompute(document: Document, partial_payment=None) -> FinancialSummary:
    if partial_payment is None:
        partial_payment = document.partial_payment
    summary = _summarize(document.items, document.discount_percent, partial_payment)
    _apply_summary(document, summary)
    return summary


def preview_summary(payload: SummaryRequest) -> FinancialSummary:
    errors = validate_items(payload.items)
    validate_discount(payload.discount_percent, errors)
    validate_partial_payment(payload.partial_payment, errors)
    _check_places(payload.items, payload.discount_percent, errors)
    if errors:
        raise ValidationError(errors)
    return _summarize(
        _normalize_items(payload.items),
        payload.discount_percent,
        payload.partial_payment,
    )


def _validate_draft(draft: DocumentDraft, doc_type: DocumentType, issue_date: date) -> list[str]:
    errors: list[str] = []
    if not draft.items:
        errors.append("At least one line item is required.")
    errors.extend(validate_items(draft.items))
    validate_discount(draft.discount_percent, errors)
    validate_partial_payment(draft.partial_payment, errors)
    _check_places(draft.items, draft.discount_percent, errors)

    if doc_type == DocumentType.QUOTE:
        if to_decimal(draft.partial_payment) != ZERO:
            errors.append("Quotes cannot carry a partial payment.")
        if draft.due_date:
            errors.append("Quotes use an expiry date, not a due date.")
        if draft.expiry_date and draft.expiry_date < issue_date:
            errors.append("Expiry date cannot be before the quote date.")
    else:
        if draft.expiry_date:
            errors.append("Invoices use a due date, not an expiry date.")
        if draft.due_date and draft.due_date < issue_date:
            errors.append("Due date cannot be before the invoice date.")

    if draft.customer_id and draft.customer:
        errors.append("Choose an existing customer or enter a new one, not both.")
    if not (draft.customer_id or draft.customer or draft.job_id):
        errors.append("A customer is required.")
    if draft.customer and not draft.customer.name.strip():
        errors.append("Customer name is required.")
    return errors


def create_document(
    db: Session, company_id: str, draft: DocumentDraft, today: date | None = None
) -> Document:
    get_company(db, company_id)
    doc_type = DocumentType(draft.type)
    issue_date = draft.date or today or date.today()

    errors = _validate_draft(draft, doc_type, issue_date)
    if errors:
        raise ValidationError(errors)
    items = _normalize_items(draft.items)
    summary = _summarize(items, draft.discount_percent, draft.partial_payment)

    # Lookups run before anything is written or numbered.
    job = get_job(db, company_id, draft.job_id) if draft.job_id else None
    customer = None
    customer_id = draft.customer_id or (job.customer_id if job else None)
    if customer_id:
        customer = get_customer(db, company_id, customer_id)

    due_date = expiry_date = None
    if doc_type == DocumentType.INVOICE:
        due_date = draft.due_date or issue_date + timedelta(days=settings.default_due_days)
    else:
        expiry_date = draft.expiry_date or issue_date + timedelta(
            days=settings.default_quote_expiry_days
        )

    with atomic(db, "Document creation"):
        if draft.customer is not None:
            customer = build_customer(company_id, draft.customer)
            db.add(customer)
            db.flush()
        number = next_number(db, company_id, doc_type)

        if customer is not None:
            snapshot = capture_customer(customer)
        else:
            snapshot = CustomerSnapshot.from_dict(job.customer_snapshot)
        if draft.job_address is not None:
            job_address = capture_address(draft.job_address)
        else:
            job_address = capture_job_address(job) if job else None

        now = utcnow()
        document = Document(
            company_id=company_id,
            type=doc_type,
            number=number,
            reference=_clean(draft.reference),
            status=lifecycle.initial_status(doc_type),
            date=issue_date,
            due_date=due_date,
            expiry_date=expiry_date,
            customer_id=customer.id if customer is not None else None,
            job_id=job.id if job else None,
            customer_snapshot=snapshot.to_dict(),
            job_address=job_address.to_dict() if job_address else None,
            notes=_clean(draft.notes),
            payment_info=_clean(draft.payment_info),
            terms=_clean(draft.terms),
            created_at=now,
            updated_at=now,
        )
        _apply_items(document, items, summary)
        _apply_summary(document, summary)
        db.add(document)

    logger.info(
        "Document created company=%s type=%s number=%s total=%s",
        company_id,
        doc_type.value,
        number,
        summary.total,
    )
    return document


def get_document(db: Session, company_id: str, document_id: str) -> Document:
    return get_scoped(db, Document, company_id, document_id, "Document")


def _ensure_editable(document: Document) -> None:
    if lifecycle.is_terminal(document.type, document.status):
        raise DocumentLockedError(DocumentStatus(document.status).value)


def update_document(
    db: Session, company_id: str, document_id: str, patch: DocumentPatch
) -> Document:
    document = get_document(db, company_id, document_id)
    _ensure_editable(document)
    fields = patch.model_fields_set

    errors: list[str] = []
    if patch.due_date and document.type == DocumentType.QUOTE:
        errors.append("Quotes use an expiry date, not a due date.")
    if patch.expiry_date and document.type == DocumentType.INVOICE:
        errors.append("Invoices use a due date, not an expiry date.")
    if patch.due_date and patch.due_date < document.date:
        errors.append("Due date cannot be before the invoice date.")
    if patch.expiry_date and patch.expiry_date < document.date:
        errors.append("Expiry date cannot be before the quote date.")

    items = None
    if patch.items is not None:
        if not patch.items:
            errors.append("At least one line item is required.")
        errors.extend(validate_items(patch.items))
    discount = document.discount_percent
    if patch.discount_percent is not None:
        discount = validate_discount(patch.discount_percent, errors)
    _check_places(patch.items or [], patch.discount_percent, errors)
    if errors:
        raise ValidationError(errors)

    if patch.items is not None:
        items = _normalize_items(patch.items)
    summary = _summarize(
        items if items is not None else document.items,
        discount,
        document.partial_payment,
    )

    with atomic(db, "Document update"):
        if items is not None:
            _apply_items(document, items, summary)
        _apply_summary(document, summary)
        for field in ("reference", "notes", "payment_info", "terms"):
            if field in fields:
                setattr(document, field, _clean(getattr(patch, field)))
        for field in ("due_date", "expiry_date"):
            if field in fields and getattr(patch, field) is not None:
                setattr(document, field, getattr(patch, field))
        document.updated_at = utcnow()

    logger.info(
        "Document updated company=%s id=%s fields=%s",
        company_id,
        document.id,
        ",".join(sorted(fields)),
    )
    return document


def _settle(document: Document, amount: Decimal, paid_at, method: str | None) -> None:
    if amount > ZERO:
        document.payments.append(
            DocumentPayment(
                amount=amount, paid_at=paid_at, method=method, recorded_at=utcnow()
            )
        )
    _recompute(document, to_decimal(document.partial_payment) + amount)
    document.paid_at = paid_at


def transition_status(
    db: Session,
    company_id: str,
    document_id: str,
    new_status,
    today: date | None = None,
) -> Document:
    document = get_document(db, company_id, document_id)
    target = DocumentStatus(new_status)
    previous = DocumentStatus(document.status)
    if not lifecycle.check_transition(document.type, previous, target):
        return document

    today = today or date.today()
    if target == DocumentStatus.OVERDUE and not lifecycle.is_overdue(
        document.type, previous, document.due_date, today
    ):
        raise ValidationError("Invoice is not past its due date.")

    with atomic(db, "Status change"):
        if target == DocumentStatus.PAID:
            # Marking paid records whatever is still outstanding.
            _settle(document, money(document.balance_due), utcnow(), None)
        document.status = target
        document.updated_at = utcnow()

    logger.info(
        "Document status changed company=%s id=%s %s -> %s",
        company_id,
        document.id,
        previous.value,
        target.value,
    )
    return document


def unsend_quote(db: Session, company_id: str, document_id: str) -> Document:
    document = get_document(db, company_id, document_id)
    lifecycle.check_unsend(document.type, document.status)
    with atomic(db, "Quote unsend"):
        document.status = DocumentStatus.DRAFT
        document.updated_at = utcnow()
    logger.info("Quote returned to draft company=%s id=%s", company_id, document.id)
    return document


def record_payment(
    db: Session, company_id: str, document_id: str, payment: PaymentIn
) -> Document:
    document = get_document(db, company_id, document_id)
    if document.type != DocumentType.INVOICE:
        raise ValidationError("Payments can only be recorded against invoices.")
    _ensure_editable(document)
    amount = money(payment.amount)
    if amount <= ZERO:
        raise ValidationError("Payment amount must be greater than zero.")

    paid_at = payment.paid_at or utcnow()
    with atomic(db, "Payment recording"):
        document.payments.append(
            DocumentPayment(
                amount=amount,
                paid_at=paid_at,
                method=_clean(payment.method),
                recorded_at=utcnow(),
            )
        )
        summary = _recompute(document, to_decimal(document.partial_payment) + amount)
        if summary.balance_due == ZERO:
            lifecycle.check_transition(
                document.type, document.status, DocumentStatus.PAID
            )
            document.status = DocumentStatus.PAID
            document.paid_at = paid_at
        document.updated_at = utcnow()

    logger.info(
        "Payment recorded company=%s id=%s amount=%s balance=%s",
        company_id,
        document.id,
        amount,
        summary.balance_due,
    )
    return document


def void_document(
    db: Session,
    company_id: str,
    document_id: str,
    reason: str,
    voided_by: str | None = None,
) -> Document:
    """Retire a document without deleting it.

    The row, its lines and its number stay as they are; the number is never
    handed out again. Terminal documents cannot be voided.
    """
    document = get_document(db, company_id, document_id)
    _ensure_editable(document)
    reason = _clean(reason)
    if not reason:
        raise ValidationError("Void reason is required.")

    previous = DocumentStatus(document.status)
    with atomic(db, "Document void"):
        now = utcnow()
        document.void = DocumentVoid(
            reason=reason,
            voided_at=now,
            voided_by=voided_by or settings.voided_by,
        )
        document.status = DocumentStatus.VOID
        document.updated_at = now

    logger.info(
        "Document voided company=%s id=%s number=%s from=%s",
        company_id,
        document.id,
        document.number,
        previous.value,
    )
    return document


def refresh_overdue(
    db: Session, company_id: str, today: date | None = None
) -> list[Document]:
    """Move every past-due unpaid invoice of a company to Overdue.

    Safe to run repeatedly: invoices already Overdue are not selected again.
    """
    today = today or date.today()
    candidates = list(
        db.execute(
            select(Document)
            .where(
                Document.company_id == company_id,
                Document.type == DocumentType.INVOICE,
                Document.status == DocumentStatus.UNPAID,
                Document.due_date.is_not(None),
                Document.due_date < today,
            )
            .order_by(Document.number)
        ).scalars()
    )
    if not candidates:
        return []

    with atomic(db, "Overdue refresh"):
        now = utcnow()
        for document in candidates:
            lifecycle.check_transition(
                document.type, document.status, DocumentStatus.OVERDUE
            )
            document.status = DocumentStatus.OVERDUE
            document.updated_at = now

    logger.info(
        "Overdue refresh company=%s marked=%s", company_id, len(candidates)
    )
    return candidates


def _matches(document: Document, needle: str) -> bool:
    snapshot = document.customer_snapshot or {}
    haystack = [
        snapshot.get("name"),
        snapshot.get("company_name"),
        document.reference,
        str(document.number),
    ]
    return any(needle in value.lower() for value in haystack if value)


def list_documents(
    db: Session, company_id: str, filters: DocumentFilter | None = None
) -> list[Document]:
    filters = filters or DocumentFilter()
    query = (
        select(Document)
        .where(Document.company_id == company_id)
        .order_by(Document.created_at.desc(), Document.number.desc())
    )
    if filters.type:
        query = query.where(Document.type == filters.type)
    if filters.unpaid_only:
        query = query.where(
            Document.type == DocumentType.INVOICE,
            Document.status.in_(UNPAID_STATUSES),
        )
    elif filters.status:
        query = query.where(Document.status == filters.status)
    if filters.customer_id:
        query = query.where(Document.customer_id == filters.customer_id)
    if filters.date_from:
        query = query.where(Document.date >= filters.date_from)
    if filters.date_to:
        query = query.where(Document.date <= filters.date_to)

    documents = list(db.execute(query).scalars())
    if filters.q and filters.q.strip():
        needle = filters.q.strip().lower()
        documents = [document for document in documents if _matches(document, needle)]
    return documents
