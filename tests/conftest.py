import itertools
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from bookkeeper.db import get_db
from bookkeeper.main import app
from bookkeeper.models import (
    Base,
    Company,
    Customer,
    ExpenseCategory,
    PaymentAccount,
    PaymentMethod,
    Product,
    Vendor,
)


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
def books(db_session):
    """A company with one of everything a document needs to point at."""
    company = Company(name="Acme Ltd")
    db_session.add(company)
    db_session.flush()

    customer = Customer(company_id=company.id, name="Jane Buyer")
    other_customer = Customer(company_id=company.id, name="Other Buyer")
    vendor = Vendor(company_id=company.id, name="Parts Supplier")
    widget = Product(
        company_id=company.id,
        name="Widget",
        unit_price=Decimal("100.00"),
        tax_rate=Decimal("10"),
    )
    gadget = Product(
        company_id=company.id,
        name="Gadget",
        unit_price=Decimal("25.00"),
        tax_rate=Decimal("0"),
    )
    cash = PaymentMethod(company_id=company.id, name="Cash", is_active=True)
    category = ExpenseCategory(company_id=company.id, name="Office", is_active=True)
    account = PaymentAccount(company_id=company.id, name="Checking", is_active=True)
    db_session.add_all(
        [customer, other_customer, vendor, widget, gadget, cash, category, account]
    )
    db_session.commit()

    return {
        "company_id": company.id,
        "customer_id": customer.id,
        "other_customer_id": other_customer.id,
        "vendor_id": vendor.id,
        "widget_id": widget.id,
        "gadget_id": gadget.id,
        "payment_method_id": cash.id,
        "category_id": category.id,
        "payment_account_id": account.id,
    }


@pytest.fixture()
def make_invoice(client, books):
    numbers = itertools.count(1)

    def _make(unit_price=100, quantity=1, tax_rate=0, **overrides):
        payload = {
            "invoice_number": f"INV-T-{next(numbers):03d}",
            "customer_id": books["customer_id"],
            "invoice_date": "2026-03-01",
            "due_date": "2099-12-31",
            "items": [
                {
                    "product_id": books["widget_id"],
                    "description": "Widget",
                    "quantity": quantity,
                    "unit_price": unit_price,
                    "tax_rate": tax_rate,
                }
            ],
        }
        payload.update(overrides)
        response = client.post(f"/api/createInvoice/{books['company_id']}", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
