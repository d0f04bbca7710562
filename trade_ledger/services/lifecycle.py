from datetime import date

from ..errors import IllegalTransitionError
from ..models import DocumentStatus, DocumentType

# Void has no inbound edge: only voiding a document reaches it.
QUOTE_TRANSITIONS: dict[DocumentStatus, frozenset[DocumentStatus]] = {
    DocumentStatus.DRAFT: frozenset({DocumentStatus.SENT}),
    DocumentStatus.SENT: frozenset({DocumentStatus.ACCEPTED, DocumentStatus.DECLINED}),
    DocumentStatus.ACCEPTED: frozenset(),
    DocumentStatus.DECLINED: frozenset(),
    DocumentStatus.VOID: frozenset(),
}

INVOICE_TRANSITIONS: dict[DocumentStatus, frozenset[DocumentStatus]] = {
    DocumentStatus.UNPAID: frozenset({DocumentStatus.PAID, DocumentStatus.OVERDUE}),
    DocumentStatus.OVERDUE: frozenset({DocumentStatus.PAID}),
    DocumentStatus.PAID: frozenset(),
    DocumentStatus.VOID: frozenset(),
}

TRANSITIONS = {
    DocumentType.QUOTE: QUOTE_TRANSITIONS,
    DocumentType.INVOICE: INVOICE_TRANSITIONS,
}

INITIAL_STATUS = {
    DocumentType.QUOTE: DocumentStatus.DRAFT,
    DocumentType.INVOICE: DocumentStatus.UNPAID,
}


def _status(value) -> DocumentStatus:
    return value if isinstance(value, DocumentStatus) else DocumentStatus(value)


def _type(value) -> DocumentType:
    return value if isinstance(value, DocumentType) else DocumentType(value)


def initial_status(doc_type) -> DocumentStatus:
    return INITIAL_STATUS[_type(doc_type)]


def statuses_for(doc_type) -> frozenset[DocumentStatus]:
    return frozenset(TRANSITIONS[_type(doc_type)])


def is_terminal(doc_type, status) -> bool:
    table = TRANSITIONS[_type(doc_type)]
    return not table.get(_status(status), frozenset())


def check_transition(doc_type, current, target) -> bool:
    """Validate ``current -> target`` for a document type.

    Returns False when the document is already in ``target`` (re-applying a
    status is a no-op), True when the move is legal. Anything else raises
    ``IllegalTransitionError``.
    """
    current = _status(current)
    target = _status(target)
    if target not in statuses_for(doc_type):
        raise IllegalTransitionError(
            current.value,
            target.value,
            f"{target.value} is not a valid status for a {_type(doc_type).value}.",
        )
    if current == target:
        return False
    if target not in TRANSITIONS[_type(doc_type)].get(current, frozenset()):
        raise IllegalTransitionError(current.value, target.value)
    return True


def check_unsend(doc_type, current) -> None:
    current = _status(current)
    if _type(doc_type) != DocumentType.QUOTE or current != DocumentStatus.SENT:
        raise IllegalTransitionError(
            current.value,
            DocumentStatus.DRAFT.value,
            "Only a sent quote can be returned to draft.",
        )


def is_overdue(doc_type, status, due_date: date | None, today: date) -> bool:
    return (
        _type(doc_type) == DocumentType.INVOICE
        and _status(status) == DocumentStatus.UNPAID
        and due_date is not None
        and due_date < today
    )
