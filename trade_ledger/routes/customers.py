from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import AnonymizationRead, CustomerCreate, CustomerRead, CustomerUpdate
from ..services import customers as customers_service
from .deps import get_company_id

router = APIRouter()


@router.post("/customers", response_model=CustomerRead, status_code=201)
def create_customer(
    payload: CustomerCreate,
    company_id: str = Depends(get_company_id),
    db: Session = Depends(get_db),
) -> CustomerRead:
    return customers_service.create_customer(db, company_id, payload)


@router.get("/customers/{customer_id}", response_model=CustomerRead)
def get_customer(
    customer_id: str,
    company_id: str = Depends(get_company_id),
    db: Session = Depends(get_db),
) -> CustomerRead:
    return customers_service.get_customer(db, company_id, customer_id)


@router.patch("/customers/{customer_id}", response_model=CustomerRead)
def update_customer(
    customer_id: str,
    payload: CustomerUpdate,
    company_id: str = Depends(get_company_id),
    db: Session = Depends(get_db),
) -> CustomerRead:
    return customers_service.update_customer(db, company_id, customer_id, payload)


@router.delete("/customers/{customer_id}", response_model=AnonymizationRead)
def delete_customer(
    customer_id: str,
    company_id: str = Depends(get_company_id),
    db: Session = Depends(get_db),
) -> AnonymizationRead:
    return customers_service.delete_customer(db, company_id, customer_id)
