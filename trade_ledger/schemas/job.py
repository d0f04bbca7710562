from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel

from .customer import CustomerCreate
from .snapshot import CustomerSnapshotRead


class JobCreate(BaseModel):
    title: str
    customer_id: str | None = None
    customer: CustomerCreate | None = None
    scheduled_date: date | None = None
    site_address_line_1: str | None = None
    site_address_line_2: str | None = None
    site_city: str | None = None
    site_postcode: str | None = None
    price: Decimal | None = None
    notes: str | None = None


class JobRead(BaseModel):
    id: str
    company_id: str
    reference: str
    customer_id: str | None
    customer_snapshot: CustomerSnapshotRead
    title: str
    status: str
    scheduled_date: date | None
    site_address_line_1: str | None
    site_address_line_2: str | None
    site_city: str | None
    site_postcode: str | None
    price: Decimal | None
    notes: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
