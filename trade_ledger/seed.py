from sqlalchemy import select
from sqlalchemy.orm import Session

from .db import SessionLocal
from .models import Company
from .schemas import CompanyCreate
from .services.companies import create_company


SEED_COMPANY = "Demo Heating Ltd"


def seed_company(session: Session, name: str = SEED_COMPANY) -> Company:
    existing = session.execute(
        select(Company).where(Company.name == name)
    ).scalar_one_or_none()
    if existing:
        return existing
    return create_company(session, CompanyCreate(name=name))


def main() -> None:
    with SessionLocal() as session:
        company = seed_company(session)
        print(f"Seeded company: {company.name} ({company.id})")


if __name__ == "__main__":
    main()
