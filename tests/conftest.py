import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from trade_ledger.db import get_db
from trade_ledger.main import app
from trade_ledger.models import Base
from trade_ledger.schemas import CompanyCreate, CustomerCreate
from trade_ledger.services.companies import create_company
from trade_ledger.services.customers import create_customer


@pytest.fixture()
def engine(tmp_path):
    db_path = tmp_path / "test.db"
    engine = create_engine(
        f"sqlite+pysqlite:///{db_path}", connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture()
def SessionLocal(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(SessionLocal):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(SessionLocal):
    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def company(db_session):
    return create_company(db_session, CompanyCreate(name="Acme Plumbing"))


@pytest.fixture()
def other_company(db_session):
    return create_company(db_session, CompanyCreate(name="Rival Electrics"))


@pytest.fixture()
def headers(company):
    return {"X-Company-Id": company.id}


@pytest.fixture()
def other_headers(other_company):
    return {"X-Company-Id": other_company.id}


@pytest.fixture()
def customer(db_session, company):
    return create_customer(
        db_session,
        company.id,
        CustomerCreate(
            name="Jane Smith",
            address_line_1="1 High Street",
            city="Leeds",
            postal_code="ls1 4ap",
            email="jane@example.com",
        ),
    )
