import logging

from sqlalchemy.orm import Session

from ..db import atomic
from ..errors import ValidationError
from ..models import Customer, SnapshotAnonymization
from ..schemas import CustomerCreate, CustomerUpdate
from .companies import get_company
from .snapshots import anonymize_customer
from .tenancy import get_scoped

logger = logging.getLogger(__name__)

CUSTOMER_FIELDS = (
    "name",
    "company_name",
    "address_line_1",
    "address_line_2",
    "city",
    "region",
    "postal_code",
    "phone",
    "email",
)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _normalize(field: str, value: str | None) -> str | None:
    value = _clean(value)
    if field == "postal_code" and value:
        return value.upper()
    return value


def build_customer(company_id: str, payload: CustomerCreate) -> Customer:
    if not _clean(payload.name):
        raise ValidationError("Customer name is required.")
    return Customer(
        company_id=company_id,
        **{field: _normalize(field, getattr(payload, field)) for field in CUSTOMER_FIELDS},
    )


def create_customer(db: Session, company_id: str, payload: CustomerCreate) -> Customer:
    get_company(db, company_id)
    customer = build_customer(company_id, payload)
    with atomic(db, "Customer creation"):
        db.add(customer)
    return customer


def get_customer(db: Session, company_id: str, customer_id: str) -> Customer:
    return get_scoped(db, Customer, company_id, customer_id, "Customer")


def update_customer(
    db: Session, company_id: str, customer_id: str, payload: CustomerUpdate
) -> Customer:
    """Edit the live record only. Existing snapshots are left as they were."""
    customer = get_customer(db, company_id, customer_id)
    changes = {
        field: _normalize(field, getattr(payload, field))
        for field in payload.model_fields_set
    }
    if "name" in changes and not changes["name"]:
        raise ValidationError("Customer name is required.")
    with atomic(db, "Customer update"):
        for field, value in changes.items():
            setattr(customer, field, value)
    return customer


def delete_customer(
    db: Session, company_id: str, customer_id: str, deleted_by: str | None = None
) -> SnapshotAnonymization:
    customer = get_customer(db, company_id, customer_id)
    return anonymize_customer(db, customer, anonymized_by=deleted_by)
