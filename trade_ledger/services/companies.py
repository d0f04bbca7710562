import logging

from sqlalchemy.orm import Session

from ..db import atomic
from ..errors import NotFoundError, ValidationError
from ..models import Company
from ..schemas import CompanyCreate
from .sequences import SEQUENCE_KINDS, ensure_sequence

logger = logging.getLogger(__name__)


def create_company(db: Session, payload: CompanyCreate) -> Company:
    name = payload.name.strip()
    if not name:
        raise ValidationError("Company name is required.")
    company = Company(name=name)
    with atomic(db, "Company creation"):
        db.add(company)
        db.flush()
        for kind in SEQUENCE_KINDS:
            ensure_sequence(db, company.id, kind)
    logger.info("Company created id=%s", company.id)
    return company


def get_company(db: Session, company_id: str) -> Company:
    company = db.get(Company, company_id)
    if company is None:
        raise NotFoundError("Company", company_id)
    return company
