from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import CompanyCreate, CompanyRead
from ..services import companies as companies_service

router = APIRouter()


@router.post("/companies", response_model=CompanyRead, status_code=201)
def create_company(payload: CompanyCreate, db: Session = Depends(get_db)) -> CompanyRead:
    return companies_service.create_company(db, payload)
