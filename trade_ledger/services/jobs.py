import logging

from sqlalchemy.orm import Session

from ..db import atomic
from ..errors import ValidationError
from ..models import Job
from ..models.base import utcnow
from ..schemas import JobCreate
from .companies import get_company
from .customers import build_customer, get_customer
from .sequences import JOB_SEQUENCE, next_number
from .snapshots import capture_customer
from .tenancy import get_scoped

logger = logging.getLogger(__name__)


def format_job_reference(number: int, year: int) -> str:
    return f"TF-{year}-{number:04d}"


def create_job(db: Session, company_id: str, payload: JobCreate) -> Job:
    get_company(db, company_id)
    errors: list[str] = []
    if not payload.title.strip():
        errors.append("Job title is required.")
    if payload.customer_id and payload.customer:
        errors.append("Choose an existing customer or enter a new one, not both.")
    if not payload.customer_id and not payload.customer:
        errors.append("A customer is required.")
    if errors:
        raise ValidationError(errors)

    customer = None
    if payload.customer_id:
        customer = get_customer(db, company_id, payload.customer_id)
    else:
        customer = build_customer(company_id, payload.customer)

    with atomic(db, "Job creation"):
        if customer.id is None:
            db.add(customer)
            db.flush()
        number = next_number(db, company_id, JOB_SEQUENCE)
        job = Job(
            company_id=company_id,
            reference=format_job_reference(number, utcnow().year),
            customer_id=customer.id,
            customer_snapshot=capture_customer(customer).to_dict(),
            title=payload.title.strip(),
            scheduled_date=payload.scheduled_date,
            site_address_line_1=payload.site_address_line_1,
            site_address_line_2=payload.site_address_line_2,
            site_city=payload.site_city,
            site_postcode=payload.site_postcode,
            price=payload.price,
            notes=payload.notes,
        )
        db.add(job)
    logger.info("Job created company=%s reference=%s", company_id, job.reference)
    return job


def get_job(db: Session, company_id: str, job_id: str) -> Job:
    return get_scoped(db, Job, company_id, job_id, "Job")
