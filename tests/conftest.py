"""Point the app at in-memory SQLite and add the project root to sys.path."""
import os
import sys
from datetime import date
from decimal import Decimal

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")

_root_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _root_dir not in sys.path:
    sys.path.insert(0, _root_dir)

import pytest
from fastapi.testclient import TestClient

from database import SessionLocal, engine, init_db
from dependencies import verify_token
from main import app
from models import Base, Expense, Invoice, Lease, Property, Tenant
from services.invoice_service import recalculate_totals


@pytest.fixture()
def db():
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db):
    app.dependency_overrides[verify_token] = lambda: {"id": 1}
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def make_property(db):
    def _make(**kwargs):
        values = {"name": "609 Capps", "address": "609 Capps St", "city": "Cowpens",
                  "state": "SC", "zip_code": "29330", "property_type": "house"}
        values.update(kwargs)
        prop = Property(**values)
        db.add(prop)
        db.commit()
        return prop
    return _make


@pytest.fixture()
def make_tenant(db):
    def _make(**kwargs):
        values = {"first_name": "Jane", "last_name": "Doe", "email": "jane@example.com"}
        values.update(kwargs)
        tenant = Tenant(**values)
        db.add(tenant)
        db.commit()
        return tenant
    return _make


@pytest.fixture()
def make_lease(db, make_property, make_tenant):
    def _make(prop=None, tenant=None, **kwargs):
        prop = prop or make_property()
        tenant = tenant or make_tenant(property_id=prop.id)
        values = {
            "property_id": prop.id,
            "tenant_id": tenant.id,
            "rent": Decimal("1000.00"),
            "rent_cadence": "monthly",
            "lease_start_date": date(2025, 1, 1),
            "status": "active",
        }
        values.update(kwargs)
        lease = Lease(**values)
        db.add(lease)
        db.commit()
        return lease
    return _make


@pytest.fixture()
def make_invoice(db):
    def _make(lease, due_date, rent="1000.00", late="0", other="0", paid="0", **kwargs):
        totals = recalculate_totals(Decimal(rent), Decimal(late), Decimal(other), Decimal(paid))
        invoice = Invoice(
            lease_id=lease.id,
            tenant_id=lease.tenant_id,
            property_id=lease.property_id,
            due_date=due_date,
            amount_rent=Decimal(rent),
            amount_late=Decimal(late),
            amount_other=Decimal(other),
            amount_paid=Decimal(paid),
            **totals.as_dict(),
        )
        for field, value in kwargs.items():
            setattr(invoice, field, value)
        db.add(invoice)
        db.commit()
        return invoice
    return _make


@pytest.fixture()
def make_expense(db):
    def _make(**kwargs):
        expense = Expense(**kwargs)
        db.add(expense)
        db.commit()
        return expense
    return _make
