"""Frozen customer and site context embedded in documents and jobs.

A snapshot is taken once, when the document or job is created, and is what
every later rendering reads. The live ``Customer`` row is never consulted again
for an existing record. The one sanctioned rewrite is anonymization, which
replaces a whole snapshot with ``CustomerSnapshot.anonymized()`` when the
customer is deleted.
"""
from dataclasses import asdict, dataclass, fields
import logging

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import settings
from ..models import Customer, Document, Job, SnapshotAnonymization
from ..models.base import utcnow

logger = logging.getLogger(__name__)

ANONYMIZED_NAME = "[Deleted Customer]"


def _clean(value) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass(frozen=True)
class CustomerSnapshot:
    name: str
    company_name: str | None = None
    address_line_1: str | None = None
    address_line_2: str | None = None
    city: str | None = None
    region: str | None = None
    postal_code: str | None = None
    phone: str | None = None
    email: str | None = None

    @property
    def address(self) -> str | None:
        parts = [
            self.address_line_1,
            self.address_line_2,
            self.city,
            self.region,
            self.postal_code,
        ]
        return ", ".join(part for part in parts if part) or None

    @property
    def is_anonymized(self) -> bool:
        return self == CustomerSnapshot.anonymized()

    @classmethod
    def anonymized(cls) -> "CustomerSnapshot":
        return cls(name=ANONYMIZED_NAME)

    @classmethod
    def from_dict(cls, data: dict | None) -> "CustomerSnapshot":
        data = data or {}
        known = {field.name for field in fields(cls)}
        values = {key: data.get(key) for key in known}
        values["name"] = values["name"] or ""
        return cls(**values)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["address"] = self.address
        return data


@dataclass(frozen=True)
class JobAddress:
    address_line_1: str | None = None
    address_line_2: str | None = None
    city: str | None = None
    postcode: str | None = None

    @property
    def is_empty(self) -> bool:
        return not any(asdict(self).values())

    @classmethod
    def from_dict(cls, data: dict | None) -> "JobAddress":
        data = data or {}
        return cls(**{field.name: data.get(field.name) for field in fields(cls)})

    def to_dict(self) -> dict:
        return asdict(self)


def capture_customer(customer) -> CustomerSnapshot:
    """Freeze the display fields of a customer (ORM row or request payload)."""
    postal_code = _clean(getattr(customer, "postal_code", None))
    return CustomerSnapshot(
        name=_clean(customer.name) or "",
        company_name=_clean(getattr(customer, "company_name", None)),
        address_line_1=_clean(getattr(customer, "address_line_1", None)),
        address_line_2=_clean(getattr(customer, "address_line_2", None)),
        city=_clean(getattr(customer, "city", None)),
        region=_clean(getattr(customer, "region", None)),
        postal_code=postal_code.upper() if postal_code else None,
        phone=_clean(getattr(customer, "phone", None)),
        email=_clean(getattr(customer, "email", None)),
    )


def capture_job_address(job: Job) -> JobAddress | None:
    address = JobAddress(
        address_line_1=_clean(job.site_address_line_1),
        address_line_2=_clean(job.site_address_line_2),
        city=_clean(job.site_city),
        postcode=_clean(job.site_postcode),
    )
    return None if address.is_empty else address


def capture_address(payload) -> JobAddress | None:
    postcode = _clean(getattr(payload, "postcode", None))
    address = JobAddress(
        address_line_1=_clean(getattr(payload, "address_line_1", None)),
        address_line_2=_clean(getattr(payload, "address_line_2", None)),
        city=_clean(getattr(payload, "city", None)),
        postcode=postcode.upper() if postcode else None,
    )
    return None if address.is_empty else address


def anonymize_customer(
    db: Session, customer: Customer, anonymized_by: str | None = None
) -> SnapshotAnonymization:
    """Rewrite every snapshot of ``customer`` and delete the customer row.

    Documents and jobs are kept. Each table is rewritten with one statement that
    replaces the whole snapshot value and clears ``customer_id`` together, and
    the whole operation commits or rolls back as one transaction.
    """
    company_id = customer.company_id
    customer_id = customer.id
    anonymized = CustomerSnapshot.anonymized().to_dict()
    now = utcnow()

    try:
        documents = db.execute(
            update(Document)
            .where(
                Document.company_id == company_id,
                Document.customer_id == customer_id,
            )
            .values(customer_snapshot=anonymized, customer_id=None, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        jobs = db.execute(
            update(Job)
            .where(Job.company_id == company_id, Job.customer_id == customer_id)
            .values(customer_snapshot=anonymized, customer_id=None, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        audit = SnapshotAnonymization(
            company_id=company_id,
            customer_id=customer_id,
            documents_anonymized=documents.rowcount,
            jobs_anonymized=jobs.rowcount,
            anonymized_at=now,
            anonymized_by=anonymized_by or settings.anonymized_by,
        )
        db.add(audit)
        db.delete(customer)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "Customer anonymization failed company=%s customer=%s",
            company_id,
            customer_id,
        )
        raise

    logger.info(
        "Customer anonymized company=%s customer=%s documents=%s jobs=%s",
        company_id,
        customer_id,
        audit.documents_anonymized,
        audit.jobs_anonymized,
    )
    return audit
