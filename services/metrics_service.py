# services/metrics_service.py
"""
Metrics Service - dashboard and monthly profit figures.

Both reports read whole tables and aggregate in Python; the portfolio is a
few dozen properties, not thousands.
"""
import calendar
import logging
import re
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.orm import Session

from models import Expense, Invoice, Lease, Property, PropertyType
from models.invoice import InvoiceStatus
from services.income_service import DASHBOARD, PROFIT, total_monthly_income
from utils.currency import round_money, safe_decimal

logger = logging.getLogger(__name__)

MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")
REPAIR_KEYWORDS = ("repair", "maintenance")


def parse_month(month: Optional[str], today: Optional[date] = None) -> Tuple[date, date]:
     """
     First and last day of a YYYY-MM month; the current month when empty.

     Raises:
          ValueError: If month is not YYYY-MM or the month number is out of range
     """
     if not month:
          today = today or date.today()
          month = today.strftime("%Y-%m")

     match = MONTH_PATTERN.match(month.strip())
     if not match:
          raise ValueError("Month must be in YYYY-MM format")
     year, month_num = int(match.group(1)), int(match.group(2))
     if not 1 <= month_num <= 12:
          raise ValueError("Month must be in YYYY-MM format")

     last_day = calendar.monthrange(year, month_num)[1]
     return date(year, month_num, 1), date(year, month_num, last_day)


def _occupying_leases(db: Session, today: date):
     return db.query(Lease).filter(*Lease.occupying_filter(today)).all()


def get_dashboard_metrics(db: Session, today: Optional[date] = None) -> Dict[str, Any]:
     """Portfolio summary for the dashboard cards."""
     today = today or date.today()
     logger.info("Computing dashboard metrics for %s", today)

     properties = db.query(Property).all()
     leases = _occupying_leases(db, today)
     occupied_ids = {lease.property_id for lease in leases}

     monthly_income = total_monthly_income(leases, DASHBOARD)
     potential_income = sum(
          (
               safe_decimal(prop.rent_value)
               for prop in properties
               if prop.id not in occupied_ids and safe_decimal(prop.rent_value) > 0
          ),
          Decimal("0"),
     )

     late_payments = 0
     total_owed = Decimal("0")
     lease_starts = {lease.id: lease.lease_start_date for lease in leases}
     if lease_starts:
          unpaid = (
               db.query(Invoice)
               .filter(
                    Invoice.lease_id.in_(list(lease_starts)),
                    Invoice.due_date <= today,
                    Invoice.status == InvoiceStatus.OPEN,
                    Invoice.balance_due > 0,
               )
               .all()
          )
          for invoice in unpaid:
               if invoice.due_date < lease_starts[invoice.lease_id]:
                    continue
               total_owed += safe_decimal(invoice.balance_due)
               if invoice.due_date < today:
                    late_payments += 1

     breakdown = {kind.value: 0 for kind in PropertyType}
     for prop in properties:
          kind = prop.property_type.value if isinstance(prop.property_type, PropertyType) else prop.property_type
          if kind in breakdown:
               breakdown[kind] += 1

     return {
          "totalProperties": len(properties),
          "occupiedProperties": len(occupied_ids),
          "monthlyIncome": float(monthly_income),
          "potentialIncome": float(potential_income),
          "totalPotentialIncome": float(monthly_income + potential_income),
          "latePayments": late_payments,
          "totalOwed": float(total_owed),
          "propertyTypeBreakdown": breakdown,
     }


def _is_repair(expense: Expense) -> bool:
     text = f"{expense.category or ''} {expense.description or ''}".lower()
     return any(keyword in text for keyword in REPAIR_KEYWORDS)


def _money(value: Decimal) -> float:
     return float(round_money(value))


def get_profit_metrics(db: Session, month: Optional[str] = None, today: Optional[date] = None) -> Dict[str, Any]:
     """
     Profit figures for one calendar month.

     Insurance, taxes and recurring expense payments are portfolio totals;
     rent and one-time expenses are limited to the month.

     Raises:
          ValueError: If month is malformed
     """
     today = today or date.today()
     start, end = parse_month(month, today)
     logger.info("Computing profit metrics for %s to %s", start, end)

     properties = db.query(Property).all()
     insurance = sum((safe_decimal(p.insurance_premium) for p in properties), Decimal("0"))
     taxes = sum((safe_decimal(p.property_tax) for p in properties), Decimal("0"))

     expenses = db.query(Expense).all()
     total_payments = sum((safe_decimal(e.amount) for e in expenses), Decimal("0"))

     invoices = (
          db.query(Invoice)
          .filter(Invoice.due_date >= start, Invoice.due_date <= end)
          .all()
     )
     collected = Decimal("0")
     expected = Decimal("0")
     for invoice in invoices:
          collected += safe_decimal(invoice.amount_paid)
          total = safe_decimal(invoice.amount_total)
          if not total:
               total = (
                    safe_decimal(invoice.amount_rent)
                    + safe_decimal(invoice.amount_late)
                    + safe_decimal(invoice.amount_other)
               )
          expected += total

     one_time = [
          e for e in expenses
          if e.is_one_time and e.last_paid_date is not None and start <= e.last_paid_date <= end
     ]
     repairs = sum((safe_decimal(e.amount_owed) for e in one_time if _is_repair(e)), Decimal("0"))
     other_expenses = sum((safe_decimal(e.amount_owed) for e in one_time if not _is_repair(e)), Decimal("0"))

     misc_income = Decimal("0")
     total_fixed = insurance + taxes + total_payments
     total_debt = total_fixed + repairs + other_expenses
     total_income = collected + misc_income

     rate = collected / expected if expected > 0 else Decimal("0")
     rate_percent = (rate * 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

     # Leases in effect at month end, or today for the current month
     projected = total_monthly_income(_occupying_leases(db, min(end, today)), PROFIT)

     return {
          "month": start.strftime("%Y-%m"),
          "fixedExpenses": {
               "insurance": _money(insurance),
               "taxes": _money(taxes),
               "totalPayments": _money(total_payments),
               "total": _money(total_fixed),
          },
          "oneTimeExpenseIncome": {
               "expenses": {
                    "repairs": _money(repairs),
                    "otherExpenses": _money(other_expenses),
               },
               "income": {
                    "miscIncome": _money(misc_income),
                    "rentCollected": _money(collected),
               },
               "totalIncome": _money(total_income),
               "totalDebt": _money(total_debt),
          },
          "rentCollection": {
               "collected": _money(collected),
               "expected": _money(expected),
               "collectionRate": float(rate_percent),
               "collectionRateDecimal": float(rate),
               "projectedMonthlyRent": _money(projected),
          },
     }
