import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import settings
from ..errors import AllocationConflictError, ValidationError
from ..models import DocumentSequence, DocumentType
from ..models.base import utcnow

logger = logging.getLogger(__name__)

JOB_SEQUENCE = "job"
SEQUENCE_KINDS = (DocumentType.INVOICE.value, DocumentType.QUOTE.value, JOB_SEQUENCE)


def start_number(kind: str) -> int:
    return {
        DocumentType.INVOICE.value: settings.invoice_start_number,
        DocumentType.QUOTE.value: settings.quote_start_number,
        JOB_SEQUENCE: settings.job_start_number,
    }[kind]


def _kind(kind) -> str:
    value = kind.value if hasattr(kind, "value") else str(kind)
    if value not in SEQUENCE_KINDS:
        raise ValidationError(f"Unknown sequence: {value}.")
    return value


def ensure_sequence(db: Session, company_id: str, kind) -> None:
    kind = _kind(kind)
    if _read_last_number(db, company_id, kind) is not None:
        return
    db.add(
        DocumentSequence(
            company_id=company_id,
            kind=kind,
            last_number=start_number(kind) - 1,
            updated_at=utcnow(),
        )
    )
    try:
        db.flush()
    except IntegrityError as exc:
        # Another writer created the counter between our read and insert.
        raise AllocationConflictError(
            f"Sequence {kind} for company {company_id} was created concurrently."
        ) from exc


def _read_last_number(db: Session, company_id: str, kind: str) -> int | None:
    return db.execute(
        select(DocumentSequence.last_number).where(
            DocumentSequence.company_id == company_id,
            DocumentSequence.kind == kind,
        )
    ).scalar_one_or_none()


def _compare_and_swap(
    db: Session, company_id: str, kind: str, expected: int, new: int
) -> bool:
    result = db.execute(
        update(DocumentSequence)
        .where(
            DocumentSequence.company_id == company_id,
            DocumentSequence.kind == kind,
            DocumentSequence.last_number == expected,
        )
        .values(last_number=new, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def next_number(
    db: Session, company_id: str, kind, max_retries: int | None = None
) -> int:
    """Allocate the next number of ``kind`` for a company.

    The increment is a compare-and-swap against the stored counter and shares
    the caller's transaction: it becomes visible when the caller commits and
    disappears if the caller rolls back.
    """
    kind = _kind(kind)
    attempts = settings.allocator_max_retries if max_retries is None else max_retries
    ensure_sequence(db, company_id, kind)

    for attempt in range(1, attempts + 1):
        seen = _read_last_number(db, company_id, kind)
        if _compare_and_swap(db, company_id, kind, seen, seen + 1):
            return seen + 1
        logger.warning(
            "Sequence contention company=%s kind=%s attempt=%s/%s",
            company_id,
            kind,
            attempt,
            attempts,
        )

    raise AllocationConflictError(
        f"Could not allocate a {kind} number after {attempts} attempts."
    )
