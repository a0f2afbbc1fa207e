"""Tests for the late-tenant report."""
from datetime import date
from decimal import Decimal

from models import Invoice, Lease, Payment, Property, Tenant
from models.invoice import InvoiceStatus
from services.invoice_service import recalculate_totals
from services.late_tenant_service import aggregate_late_tenants

TODAY = date(2025, 8, 15)


def _lease(lease_id, start=date(2025, 1, 1)):
    lease = Lease(
        id=lease_id,
        property_id=lease_id,
        tenant_id=lease_id,
        rent=Decimal("1000"),
        rent_cadence="monthly",
        lease_start_date=start,
        status="active",
    )
    lease.property = Property(id=lease_id, name=f"Property {lease_id}", state="SC")
    lease.tenant = Tenant(id=lease_id, first_name="Tenant", last_name=str(lease_id))
    return lease


def _invoice(lease_id, due, rent="1000", late="0", paid="0", status=None):
    totals = recalculate_totals(Decimal(rent), Decimal(late), Decimal("0"), Decimal(paid))
    values = totals.as_dict()
    if status is not None:
        values["status"] = status
    return Invoice(
        lease_id=lease_id,
        due_date=due,
        amount_rent=Decimal(rent),
        amount_late=Decimal(late),
        amount_other=Decimal("0"),
        amount_paid=Decimal(paid),
        **values,
    )


def test_lease_with_late_invoice_is_reported():
    lease = _lease(1)
    invoices = {1: [
        _invoice(1, date(2025, 7, 1), late="50"),
        _invoice(1, date(2025, 8, 1), paid="400"),
        _invoice(1, date(2025, 6, 1), paid="1000"),
    ]}
    payments = {1: [
        Payment(lease_id=1, payment_date=date(2025, 8, 2), amount=Decimal("400")),
        Payment(lease_id=1, payment_date=date(2025, 6, 1), amount=Decimal("1000")),
    ]}

    report = aggregate_late_tenants([lease], invoices, payments, TODAY)

    assert len(report["rows"]) == 1
    row = report["rows"][0]
    assert row["leaseId"] == 1
    assert row["daysLate"] == 45
    assert row["totalLatePeriods"] == 2
    assert row["totalOwedLate"] == 1650.0
    assert row["totalLateFees"] == 50.0
    assert [inv["due_date"] for inv in row["lateInvoices"]] == ["2025-08-01", "2025-07-01"]
    assert row["lateInvoices"][0]["days_late"] == 14
    assert row["lastPaymentDate"] == "2025-08-02"
    assert row["totalPayments"] == 2
    assert row["totalPaid"] == 1400.0
    assert row["tenant"]["full_name"] == "Tenant 1"
    assert row["property"]["name"] == "Property 1"


def test_invoice_due_today_is_owed_but_not_late():
    lease = _lease(1)
    report = aggregate_late_tenants([lease], {1: [_invoice(1, TODAY)]}, {}, TODAY)
    assert report["rows"] == []
    assert report["summary"]["lateLeases"] == 0
    assert report["summary"]["totalAllOwed"] == 1000.0
    assert report["summary"]["totalLateOwed"] == 0.0


def test_invoices_before_lease_start_and_void_are_ignored():
    lease = _lease(1, start=date(2025, 7, 1))
    invoices = {1: [
        _invoice(1, date(2025, 6, 1)),
        _invoice(1, date(2025, 7, 1), status=InvoiceStatus.VOID),
    ]}
    report = aggregate_late_tenants([lease], invoices, {}, TODAY)
    assert report["rows"] == []
    assert report["summary"]["totalAllOwed"] == 0.0


def test_rows_sorted_by_amount_owed_and_summary():
    small, large = _lease(1), _lease(2)
    invoices = {
        1: [_invoice(1, date(2025, 8, 1), rent="300")],
        2: [_invoice(2, date(2025, 7, 1), rent="900"), _invoice(2, date(2025, 8, 1), rent="900")],
    }
    report = aggregate_late_tenants([small, large], invoices, {}, TODAY)

    assert [row["leaseId"] for row in report["rows"]] == [2, 1]
    summary = report["summary"]
    assert summary["lateLeases"] == 2
    assert summary["totalLateOwed"] == 2100.0
    assert summary["totalAllOwed"] == 2100.0
    assert summary["thirtyPlusLate"] == 1
    # (45 + 14) / 2 = 29.5 rounds half up
    assert summary["avgDaysLate"] == 30


def test_empty_report():
    report = aggregate_late_tenants([], {}, {}, TODAY)
    assert report == {
        "summary": {
            "lateLeases": 0,
            "totalLateOwed": 0.0,
            "totalAllOwed": 0.0,
            "thirtyPlusLate": 0,
            "avgDaysLate": 0,
        },
        "rows": [],
    }


def test_late_tenants_endpoint(client, make_lease, make_invoice):
    lease = make_lease(lease_start_date=date(2025, 1, 1))
    make_invoice(lease, date(2025, 7, 1))
    make_invoice(lease, date(2025, 8, 1), paid="1000")

    response = client.get("/api/late-tenants", params={"today": "2025-08-15"})

    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["lateLeases"] == 1
    assert data["rows"][0]["leaseId"] == lease.id
    assert data["rows"][0]["daysLate"] == 45
    assert data["rows"][0]["tenant"]["email"] == "jane@example.com"


def test_single_late_invoice_figures():
    lease = _lease(1)
    due = date(2025, 8, 5)
    report = aggregate_late_tenants([lease], {1: [_invoice(1, due, rent="450", late="50")]}, {}, TODAY)

    row = report["rows"][0]
    assert row["daysLate"] == 10
    assert row["totalOwedLate"] == 500.0
    assert row["totalLateFees"] == 50.0
    assert row["totalLatePeriods"] == 1
    assert row["lastPaymentDate"] is None


def test_fully_paid_lease_adds_nothing_to_total_owed():
    paid_up, behind = _lease(1), _lease(2)
    invoices = {
        1: [_invoice(1, date(2025, 7, 1), paid="1000"), _invoice(1, date(2025, 8, 1), paid="1000")],
        2: [_invoice(2, date(2025, 8, 1), rent="300")],
    }
    report = aggregate_late_tenants([paid_up, behind], invoices, {}, TODAY)

    assert [row["leaseId"] for row in report["rows"]] == [2]
    assert report["summary"]["totalAllOwed"] == 300.0
