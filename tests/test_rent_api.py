"""Period map, payments grid and manual allocation tests."""
from datetime import date
from decimal import Decimal

import pytest

from models import Invoice, Payment, PaymentAllocation
from services.period_service import get_payment_grid


@pytest.fixture()
def make_payment(db):
    def _make(lease, day, amount, **kwargs):
        payment = Payment(
            lease_id=lease.id,
            tenant_id=lease.tenant_id,
            property_id=lease.property_id,
            payment_date=day,
            amount=Decimal(str(amount)),
            **kwargs,
        )
        db.add(payment)
        db.commit()
        return payment
    return _make


def _period_map(client, **body):
    return client.post("/api/rent/period-map", json=body)


# ---- period map ----

@pytest.mark.parametrize("body,message", [
    ({}, "leaseIds must be a non-empty array"),
    ({"leaseIds": [], "from": "2025-01-01", "to": "2025-12-31"}, "leaseIds must be a non-empty array"),
    ({"leaseIds": [1]}, "from and to dates are required (YYYY-MM-DD format)"),
    ({"leaseIds": [1], "from": "invalid-date", "to": "2025-12-31"}, "Invalid date format. Use YYYY-MM-DD"),
    ({"leaseIds": [1], "from": "2025-12-31", "to": "2025-01-01"}, "from date must be less than or equal to to date"),
    ({"leaseIds": list(range(1, 502)), "from": "2025-01-01", "to": "2025-02-01"}, "Too many lease IDs. Maximum allowed: 500"),
    ({"leaseIds": [1], "from": "2024-01-01", "to": "2025-12-31"}, "Date range too large. Maximum allowed: 18 months"),
    ({"leaseIds": ["abc"], "from": "2025-01-01", "to": "2025-02-01"}, "Invalid lease ID format: abc"),
])
def test_period_map_validation(client, body, message):
    response = _period_map(client, **body)
    assert response.status_code == 400
    assert response.json() == {"error": message}


def test_period_map_weekly_rows(client, make_lease, make_invoice, make_payment):
    lease = make_lease(rent=Decimal("200"), rent_cadence="Weekly", lease_start_date=date(2025, 7, 1))
    invoice = make_invoice(lease, date(2025, 7, 11), rent="200", late="25", paid="210")
    make_payment(lease, date(2025, 7, 2), 50)

    response = _period_map(client, leaseIds=[lease.id], **{"from": "2025-07-01", "to": "2025-07-20"})
    assert response.status_code == 200
    rows = response.json()["rows"]

    assert [r["due_date"] for r in rows] == ["2025-07-04", "2025-07-11", "2025-07-18"]
    assert all(r["cadence"] == "Weekly" for r in rows)

    missing, billed, empty = rows
    assert missing["is_missing_invoice"] is True
    assert missing["invoice_id"] is None
    assert missing["period_start"] == "2025-06-28"
    assert float(missing["billed_total"]) == 200.0
    assert float(missing["paid_to_rent"]) == 50.0
    assert float(missing["balance_due"]) == 150.0

    assert billed["invoice_id"] == invoice.id
    assert billed["is_missing_invoice"] is False
    assert float(billed["billed_total"]) == 225.0
    assert float(billed["paid_to_rent"]) == 200.0
    assert float(billed["paid_to_late"]) == 10.0
    assert float(billed["balance_due"]) == 15.0

    assert float(empty["balance_due"]) == 200.0


def test_period_map_monthly_and_biweekly(client, make_property, make_lease, make_invoice):
    monthly = make_lease(rent_cadence="monthly", rent_due_day=15, lease_start_date=date(2025, 7, 1))
    biweekly = make_lease(
        prop=make_property(name="107 Willis"),
        rent=Decimal("400"),
        rent_cadence="bi-weekly",
        lease_start_date=date(2025, 7, 4),
    )
    make_invoice(monthly, date(2025, 8, 1), paid="1000")

    body = {"leaseIds": [monthly.id, biweekly.id], "from": "2025-07-01", "to": "2025-08-31"}
    rows = client.post("/api/rent/period-map", json=body).json()["rows"]

    monthly_rows = [r for r in rows if r["lease_id"] == monthly.id]
    assert [r["due_date"] for r in monthly_rows] == ["2025-07-11", "2025-08-15"]
    assert monthly_rows[0]["is_missing_invoice"] is True
    assert monthly_rows[1]["period_start"] == "2025-08-01"
    assert monthly_rows[1]["period_end"] == "2025-08-31"
    assert float(monthly_rows[1]["balance_due"]) == 0.0

    biweekly_rows = [r for r in rows if r["lease_id"] == biweekly.id]
    assert [r["due_date"] for r in biweekly_rows] == ["2025-07-04", "2025-07-18", "2025-08-01", "2025-08-15", "2025-08-29"]
    assert biweekly_rows[0]["cadence"] == "Biweekly"


def test_period_map_unknown_lease_gives_no_rows(client, db):
    response = _period_map(client, leaseIds=[999], **{"from": "2025-07-01", "to": "2025-07-31"})
    assert response.status_code == 200
    assert response.json() == {"rows": []}


# ---- payments grid ----

def test_payment_grid_cells_and_total_owed(db, make_property, make_lease, make_payment):
    weekly = make_lease(rent=Decimal("100"), rent_cadence="weekly", lease_start_date=date(2025, 7, 1))
    monthly = make_lease(
        prop=make_property(name="109 Hosch"),
        rent=Decimal("500"),
        rent_cadence="Monthly",
        lease_start_date=date(2025, 7, 1),
    )
    make_lease(prop=make_property(name="Gone"), status="terminated")
    make_payment(weekly, date(2025, 7, 5), 100)
    make_payment(weekly, date(2025, 7, 14), 40)
    make_payment(monthly, date(2025, 7, 10), 500)

    grid = get_payment_grid(db, date(2025, 6, 27), date(2025, 7, 25), today=date(2025, 7, 20))

    assert grid["dateRange"] == {"startDate": "2025-06-27", "endDate": "2025-07-25"}
    assert grid["fridays"] == ["2025-06-27", "2025-07-04", "2025-07-11", "2025-07-18", "2025-07-25"]
    assert [row["lease"]["id"] for row in grid["rows"]] == [weekly.id, monthly.id]

    weekly_row, monthly_row = grid["rows"]
    assert [c["status"] for c in weekly_row["cells"]] == ["outside_lease", "owed", "paid", "partial", "upcoming"]
    assert weekly_row["cells"][0]["isLocked"] is True
    assert weekly_row["cells"][3]["amountPaid"] == 40.0
    assert weekly_row["cells"][2]["payments"][0]["date"] == "2025-07-05"
    assert weekly_row["totalOwed"] == 160.0
    assert weekly_row["property"]["name"] == "609 Capps"
    assert weekly_row["tenant"]["full_name"] == "Jane Doe"

    assert [c["status"] for c in monthly_row["cells"]] == ["outside_lease", "paid", "inactive", "inactive", "inactive"]
    assert monthly_row["cells"][1]["amountPaid"] == 500.0
    assert monthly_row["cells"][1]["windowStart"] == "2025-07-01"
    assert all(c["isLocked"] for c in monthly_row["cells"][2:])
    assert monthly_row["totalOwed"] == 0.0


def test_biweekly_off_friday_with_payment_shows_paid(db, make_lease, make_payment):
    lease = make_lease(rent=Decimal("400"), rent_cadence="biweekly", lease_start_date=date(2025, 7, 4))
    make_payment(lease, date(2025, 7, 9), 400)

    grid = get_payment_grid(db, date(2025, 7, 4), date(2025, 7, 18), today=date(2025, 7, 1))
    cells = grid["rows"][0]["cells"]

    assert [c["status"] for c in cells] == ["upcoming", "paid", "upcoming"]
    assert cells[1]["isLocked"] is False


def test_grid_rejects_reversed_range(db):
    with pytest.raises(ValueError):
        get_payment_grid(db, date(2025, 8, 1), date(2025, 7, 1))


def test_grid_endpoint(client, make_lease):
    make_lease()
    response = client.get("/api/rent/payments/grid", params={"rangeStart": "2025-07-01", "rangeEnd": "2025-07-31"})
    assert response.status_code == 200
    body = response.json()
    assert body["fridays"] == ["2025-07-04", "2025-07-11", "2025-07-18", "2025-07-25"]
    assert len(body["rows"]) == 1
    assert len(body["rows"][0]["cells"]) == 4

    default = client.get("/api/rent/payments/grid", params={"weekOffset": 1}).json()
    assert len(default["fridays"]) == 9

    response = client.get("/api/rent/payments/grid", params={"rangeStart": "2025-08-01", "rangeEnd": "2025-07-01"})
    assert response.status_code == 400


# ---- manual allocation ----

def _record_payment(client, lease, amount):
    body = {"tenant_id": lease.tenant_id, "lease_id": lease.id, "payment_date": "2025-08-05", "amount": amount}
    return client.post("/api/payments", json=body).json()["payment"]


@pytest.mark.parametrize("body,message", [
    ({"allocations": [{"invoiceId": 1, "amount": 10}]}, "Missing required field: paymentId"),
    ({"paymentId": 1}, "Missing or empty allocations array"),
    ({"paymentId": 1, "allocations": []}, "Missing or empty allocations array"),
    ({"paymentId": 1, "allocations": [{"invoiceId": 1}]}, "Each allocation must have invoiceId and amount"),
    ({"paymentId": 1, "allocations": [{"amount": 5}]}, "Each allocation must have invoiceId and amount"),
    ({"paymentId": 1, "allocations": [{"invoiceId": 1, "amount": 0}]}, "Allocation amounts must be greater than 0"),
])
def test_manual_allocation_validation(client, db, body, message):
    response = client.post("/api/allocations/manual", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": message}


def test_manual_allocation_unknown_payment(client, db):
    response = client.post("/api/allocations/manual", json={"paymentId": 999, "allocations": [{"invoiceId": 1, "amount": 5}]})
    assert response.status_code == 404
    assert response.json() == {"error": "Payment not found"}


def test_manual_allocation_applies_amounts(client, db, make_lease, make_invoice):
    lease = make_lease()
    payment = _record_payment(client, lease, 300)
    june = make_invoice(lease, date(2025, 6, 1))
    july = make_invoice(lease, date(2025, 7, 1))

    over = {"paymentId": payment["id"], "allocations": [
        {"invoiceId": june.id, "amount": 200},
        {"invoiceId": july.id, "amount": 150},
    ]}
    response = client.post("/api/allocations/manual", json=over)
    assert response.status_code == 400
    assert response.json()["error"].startswith("Total allocation (350) exceeds payment amount")

    body = {"paymentId": payment["id"], "allocations": [
        {"invoiceId": june.id, "amount": 200},
        {"invoiceId": july.id, "amount": 100},
    ]}
    response = client.post("/api/allocations/manual", json=body)
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["payment"]["id"] == payment["id"]
    assert {inv["id"]: float(inv["balance_due"]) for inv in data["invoices"]} == {june.id: 800.0, july.id: 900.0}
    assert [float(a["amount"]) for a in data["allocations"]] == [200.0, 100.0]

    detail = client.get(f"/api/invoices/{june.id}").json()
    assert detail["allocations"][0]["paymentId"] == payment["id"]
    assert float(detail["allocations"][0]["amount"]) == 200.0
    assert detail["allocations"][0]["receivedAt"] == "2025-08-05"

    # The whole payment is now allocated
    again = {"paymentId": payment["id"], "allocations": [{"invoiceId": july.id, "amount": 1}]}
    assert client.post("/api/allocations/manual", json=again).status_code == 400
    db.expire_all()
    assert db.query(PaymentAllocation).count() == 2


def test_manual_allocation_invoice_checks(client, db, make_lease, make_invoice):
    lease = make_lease()
    other = make_lease()
    payment = _record_payment(client, lease, 100)
    foreign = make_invoice(other, date(2025, 7, 1))
    void = make_invoice(lease, date(2025, 7, 1))
    client.post(f"/api/invoices/{void.id}/void", json={"reason": "Duplicate"})

    def allocate(invoice_id):
        body = {"paymentId": payment["id"], "allocations": [{"invoiceId": invoice_id, "amount": 50}]}
        return client.post("/api/allocations/manual", json=body)

    assert allocate(999).status_code == 404
    assert allocate(foreign.id).status_code == 400
    assert allocate(void.id).status_code == 400

    db.expire_all()
    assert db.query(PaymentAllocation).count() == 0
    assert float(db.get(Invoice, foreign.id).amount_paid) == 0.0
