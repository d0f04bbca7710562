from pydantic import BaseModel


class CustomerSnapshotRead(BaseModel):
    name: str
    company_name: str | None = None
    address_line_1: str | None = None
    address_line_2: str | None = None
    city: str | None = None
    region: str | None = None
    postal_code: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None


class JobAddressIn(BaseModel):
    address_line_1: str | None = None
    address_line_2: str | None = None
    city: str | None = None
    postcode: str | None = None


class JobAddressRead(JobAddressIn):
    pass
