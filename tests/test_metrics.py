"""Dashboard and profit metric tests."""
from datetime import date
from decimal import Decimal

import pytest

from services.metrics_service import get_dashboard_metrics, get_profit_metrics, parse_month

TODAY = date(2025, 8, 15)


def test_dashboard_metrics(db, make_property, make_lease, make_invoice):
    house = make_property(name="House", property_type="house", rent_value=Decimal("900"))
    vacant = make_property(name="Vacant", property_type="doublewide", rent_value=Decimal("800"))
    loan = make_property(name="Loan", property_type="loan", rent_value=Decimal("0"))
    future = make_property(name="Future", property_type="singlewide")

    lease = make_lease(prop=house, rent=Decimal("200"), rent_cadence="Weekly")
    make_lease(prop=loan, status="inactive")
    make_lease(prop=future, lease_start_date=date(2025, 9, 1))

    make_invoice(lease, date(2025, 7, 1), rent="800")
    make_invoice(lease, TODAY, rent="800")
    make_invoice(lease, date(2025, 6, 1), rent="800", paid="800")
    make_invoice(lease, date(2024, 12, 1), rent="800")

    metrics = get_dashboard_metrics(db, today=TODAY)

    assert metrics["totalProperties"] == 4
    assert metrics["occupiedProperties"] == 1
    assert metrics["monthlyIncome"] == 800.0
    assert metrics["potentialIncome"] == 800.0
    assert metrics["totalPotentialIncome"] == 1600.0
    assert metrics["latePayments"] == 1
    assert metrics["totalOwed"] == 1600.0
    assert metrics["propertyTypeBreakdown"] == {"house": 1, "doublewide": 1, "singlewide": 1, "loan": 1}


def test_dashboard_metrics_empty(db):
    metrics = get_dashboard_metrics(db, today=TODAY)
    assert metrics["totalProperties"] == 0
    assert metrics["monthlyIncome"] == 0.0
    assert metrics["latePayments"] == 0


def test_profit_metrics(db, make_property, make_lease, make_invoice, make_expense):
    first = make_property(name="A", insurance_premium=Decimal("1200"), property_tax=Decimal("640"))
    second = make_property(name="B", insurance_premium=Decimal("600"))
    lease = make_lease(prop=first, rent=Decimal("200"), rent_cadence="weekly")
    other = make_lease(prop=second)

    make_invoice(lease, date(2025, 8, 1), rent="1000", paid="600")
    make_invoice(other, date(2025, 8, 5), rent="1000", late="50")
    make_invoice(other, date(2025, 7, 5), rent="1000", paid="1000")

    make_expense(category="Mortgage", amount=Decimal("500"))
    make_expense(category="Repair", amount_owed=Decimal("150"), last_paid_date=date(2025, 8, 10), is_one_time=True)
    make_expense(category="Supplies", description="Paint", amount_owed=Decimal("75.50"),
                 last_paid_date=date(2025, 8, 12), is_one_time=True)
    make_expense(category="Repair", amount_owed=Decimal("999"), last_paid_date=date(2025, 7, 10), is_one_time=True)

    metrics = get_profit_metrics(db, "2025-08", today=date(2025, 8, 20))

    assert metrics["fixedExpenses"] == {
        "insurance": 1800.0,
        "taxes": 640.0,
        "totalPayments": 500.0,
        "total": 2940.0,
    }
    one_time = metrics["oneTimeExpenseIncome"]
    assert one_time["expenses"] == {"repairs": 150.0, "otherExpenses": 75.5}
    assert one_time["income"] == {"miscIncome": 0.0, "rentCollected": 600.0}
    assert one_time["totalIncome"] == 600.0
    assert one_time["totalDebt"] == 3165.5

    rent = metrics["rentCollection"]
    assert rent["collected"] == 600.0
    assert rent["expected"] == 2050.0
    assert rent["collectionRate"] == 29.27
    assert rent["collectionRateDecimal"] == pytest.approx(600 / 2050)
    # weekly 200 * 4.33 + monthly 1000
    assert rent["projectedMonthlyRent"] == 1866.0


def test_profit_metrics_without_invoices(db):
    rent = get_profit_metrics(db, "2025-02")["rentCollection"]
    assert rent["expected"] == 0.0
    assert rent["collectionRate"] == 0.0


def test_parse_month():
    assert parse_month("2024-02") == (date(2024, 2, 1), date(2024, 2, 29))
    assert parse_month(None, today=TODAY) == (date(2025, 8, 1), date(2025, 8, 31))
    for bad in ("2025-13", "2025-8", "August", "2025/08"):
        with pytest.raises(ValueError):
            parse_month(bad)


def test_metric_endpoints(client, make_lease):
    make_lease()

    response = client.get("/api/dashboard/metrics")
    assert response.status_code == 200
    assert response.json()["totalProperties"] == 1

    response = client.get("/api/profit/metrics", params={"month": "2025-08"})
    assert response.status_code == 200
    assert response.json()["month"] == "2025-08"

    response = client.get("/api/profit/metrics", params={"month": "08-2025"})
    assert response.status_code == 400
    assert response.json() == {"error": "Month must be in YYYY-MM format"}
