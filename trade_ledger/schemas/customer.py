from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CustomerCreate(BaseModel):
    name: str
    company_name: str | None = None
    address_line_1: str | None = None
    address_line_2: str | None = None
    city: str | None = None
    region: str | None = None
    postal_code: str | None = None
    phone: str | None = None
    email: str | None = None


class CustomerUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    company_name: str | None = None
    address_line_1: str | None = None
    address_line_2: str | None = None
    city: str | None = None
    region: str | None = None
    postal_code: str | None = None
    phone: str | None = None
    email: str | None = None


class CustomerRead(CustomerCreate):
    id: str
    company_id: str
    address: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AnonymizationRead(BaseModel):
    customer_id: str
    documents_anonymized: int
    jobs_anonymized: int
    anonymized_at: datetime
    anonymized_by: str

    model_config = {"from_attributes": True}
