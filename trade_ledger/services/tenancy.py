import logging

from sqlalchemy.orm import Session

from ..errors import NotFoundError, TenantIsolationError

logger = logging.getLogger(__name__)


def get_scoped(db: Session, model, company_id: str, record_id: str, kind: str):
    """Load a tenant-owned record, refusing records of any other company."""
    record = db.get(model, record_id)
    if record is None:
        raise NotFoundError(kind, record_id)
    if record.company_id != company_id:
        logger.warning(
            "Cross-company access blocked kind=%s id=%s caller=%s owner=%s",
            kind,
            record_id,
            company_id,
            record.company_id,
        )
        raise TenantIsolationError(kind, record_id)
    return record
