from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import JobCreate, JobRead
from ..services import jobs as jobs_service
from .deps import get_company_id

router = APIRouter()


@router.post("/jobs", response_model=JobRead, status_code=201)
def create_job(
    payload: JobCreate,
    company_id: str = Depends(get_company_id),
    db: Session = Depends(get_db),
) -> JobRead:
    return jobs_service.create_job(db, company_id, payload)


@router.get("/jobs/{job_id}", response_model=JobRead)
def get_job(
    job_id: str,
    company_id: str = Depends(get_company_id),
    db: Session = Depends(get_db),
) -> JobRead:
    return jobs_service.get_job(db, company_id, job_id)
