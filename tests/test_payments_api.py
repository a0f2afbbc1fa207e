"""Payment recording and allocation tests."""
from datetime import date

from models import Invoice


def _payment(client, lease, **kwargs):
    payload = {"tenant_id": lease.tenant_id, "lease_id": lease.id, "payment_date": "2025-08-05"}
    payload.update(kwargs)
    return client.post("/api/payments", json=payload)


def test_payment_pays_oldest_invoices_first(client, db, make_lease, make_invoice):
    lease = make_lease()
    july = make_invoice(lease, date(2025, 7, 1))
    june = make_invoice(lease, date(2025, 6, 1))

    response = _payment(client, lease, amount=1500)
    assert response.status_code == 201
    body = response.json()
    assert body["payment"]["property_id"] == lease.property_id
    assert body["payment"]["payment_method"] == "Manual Entry"
    assert body["payment"]["status"] == "completed"
    assert [a["invoice_id"] for a in body["allocations"]] == [june.id, july.id]
    assert [float(a["amount_applied"]) for a in body["allocations"]] == [1000.0, 500.0]
    assert body["allocations"][0]["status"] == "PAID"
    assert float(body["unapplied"]) == 0.0

    db.expire_all()
    assert float(db.get(Invoice, july.id).balance_due) == 500.0
    assert db.get(Invoice, june.id).status.value == "PAID"


def test_overpayment_is_reported_unapplied(client, make_lease, make_invoice):
    lease = make_lease()
    make_invoice(lease, date(2025, 7, 1))

    body = _payment(client, lease, amount=1200).json()
    assert len(body["allocations"]) == 1
    assert float(body["unapplied"]) == 200.0
    assert body["payment"]["invoice_id"] == body["allocations"][0]["invoice_id"]


def test_payment_to_named_invoice(client, make_lease, make_invoice):
    lease = make_lease()
    make_invoice(lease, date(2025, 6, 1))
    july = make_invoice(lease, date(2025, 7, 1))

    body = _payment(client, lease, amount=300, invoice_id=july.id, notes="cash").json()
    assert [a["invoice_id"] for a in body["allocations"]] == [july.id]

    detail = client.get(f"/api/invoices/{july.id}").json()
    assert float(detail["invoice"]["amount_paid"]) == 300.0
    assert detail["allocations"][0]["paymentId"] == body["payment"]["id"]
    assert detail["allocations"][0]["memo"] == "cash"


def test_payment_validation(client, make_lease):
    lease = make_lease()

    response = _payment(client, lease, amount=0)
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"

    response = client.post("/api/payments", json={"tenant_id": lease.tenant_id, "lease_id": 999, "amount": 10})
    assert response.status_code == 400
    assert response.json() == {"error": "Could not find property_id for this lease"}

    response = _payment(client, lease, amount=10, invoice_id=999)
    assert response.status_code == 404


def test_list_and_filter_payments(client, make_lease):
    lease = make_lease()
    other = make_lease()
    _payment(client, lease, amount=100, payment_date="2025-07-01")
    _payment(client, lease, amount=200, payment_date="2025-08-01")
    _payment(client, other, amount=300, payment_date="2025-08-02")

    rows = client.get("/api/payments").json()
    assert [float(r["amount"]) for r in rows] == [300.0, 200.0, 100.0]

    rows = client.get("/api/payments", params={"lease_id": lease.id, "from": "2025-07-15"}).json()
    assert len(rows) == 1
    assert rows[0]["tenant_name"] == "Jane Doe"
    assert rows[0]["property_name"] == "609 Capps"
    assert rows[0]["lease_status"] == "active"

    rows = client.get("/api/payments", params={"limit": 2}).json()
    assert len(rows) == 2


def test_payments_by_period(client, make_lease, make_invoice):
    lease = make_lease()
    invoice = make_invoice(lease, date(2025, 8, 1))
    _payment(client, lease, amount=400, payment_date="2025-08-03", invoice_id=invoice.id)
    _payment(client, lease, amount=50, payment_date="2025-09-03")

    response = client.get("/api/payments/by-period", params={
        "lease_id": lease.id, "period_start": "2025-08-01", "period_end": "2025-08-31",
    })
    assert response.status_code == 200
    payments = response.json()["payments"]
    assert len(payments) == 1
    assert payments[0]["amount"] == 400.0
    # the September payment also went to the only open invoice
    assert payments[0]["invoice"]["balanceDue"] == 550.0

    response = client.get("/api/payments/by-period", params={"lease_id": lease.id})
    assert response.status_code == 400


def test_payments_by_property(client, make_lease):
    lease = make_lease()
    _payment(client, lease, amount=100, payment_date="2025-07-01")
    _payment(client, lease, amount=250, payment_date="2025-08-01")

    body = client.get("/api/payments/by-property", params={"property_id": lease.property_id, "start_date": "2025-07-15"}).json()
    assert body["summary"] == {"totalPayments": 1, "totalAmount": 250.0}

    assert client.get("/api/payments/by-property").status_code == 400


def test_update_and_delete_payment(client, make_lease):
    lease = make_lease()
    payment_id = _payment(client, lease, amount=100).json()["payment"]["id"]

    response = client.put(f"/api/payments/{payment_id}", json={"notes": "corrected", "amount": 120})
    assert response.status_code == 200
    assert response.json()["payment"]["notes"] == "corrected"
    assert float(response.json()["payment"]["amount"]) == 120.0

    assert client.put(f"/api/payments/{payment_id}", json={}).status_code == 400
    assert client.delete(f"/api/payments/{payment_id}").status_code == 200
    assert client.delete(f"/api/payments/{payment_id}").status_code == 404


def test_update_payment_rejects_null_amount(client, make_lease):
    lease = make_lease()
    payment = _payment(client, lease, amount=150).json()["payment"]

    for field in ("amount", "payment_date", "payment_type"):
        response = client.put(f"/api/payments/{payment['id']}", json={field: None})
        assert response.status_code == 400

    rows = client.get("/api/payments").json()
    assert float(rows[0]["amount"]) == 150.0


def test_split_payment_shows_on_each_invoice(client, make_lease, make_invoice):
    lease = make_lease()
    june = make_invoice(lease, date(2025, 6, 1))
    july = make_invoice(lease, date(2025, 7, 1))

    body = _payment(client, lease, amount=1250, notes="money order").json()
    assert body["payment"]["invoice_id"] is None

    june_detail = client.get(f"/api/invoices/{june.id}").json()
    july_detail = client.get(f"/api/invoices/{july.id}").json()
    assert [float(a["amount"]) for a in june_detail["allocations"]] == [1000.0]
    assert [float(a["amount"]) for a in july_detail["allocations"]] == [250.0]
    assert july_detail["allocations"][0]["paymentId"] == body["payment"]["id"]
    assert july_detail["allocations"][0]["memo"] == "money order"
