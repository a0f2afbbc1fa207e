# services/late_tenant_service.py
"""
Late Tenant Service - leases with overdue invoices.

For every active lease we look at the invoices due between the lease start
and `today`:

- unpaid: status OPEN with a positive balance; these always count toward the
  portfolio-wide totalAllOwed figure
- late: unpaid and due strictly before today; a lease with none is left out
  of the report rows

Data is loaded with three queries (leases, then invoices and payments for all
of those leases at once) and handed to the pure aggregate_late_tenants.
"""
import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from sqlalchemy.orm import Session, joinedload

from models import Invoice, Lease, Payment
from models.invoice import InvoiceStatus
from models.lease import LeaseStatus
from schemas.property import PropertyResponse
from schemas.tenant import TenantResponse
from utils.currency import safe_decimal

logger = logging.getLogger(__name__)

THIRTY_PLUS_DAYS = 30


def _is_unpaid(invoice: Invoice) -> bool:
     return invoice.status == InvoiceStatus.OPEN and safe_decimal(invoice.balance_due) > 0


def _days_between(later: date, earlier: date) -> int:
     return (later - earlier).days


def _dump(schema, obj) -> Optional[Dict[str, Any]]:
     if obj is None:
          return None
     return schema.model_validate(obj).model_dump(mode="json")


def _lease_summary(lease: Lease) -> Dict[str, Any]:
     return {
          "id": lease.id,
          "rent": float(safe_decimal(lease.rent)),
          "rent_cadence": lease.rent_cadence,
          "lease_start_date": lease.lease_start_date.isoformat() if lease.lease_start_date else None,
          "lease_end_date": lease.lease_end_date.isoformat() if lease.lease_end_date else None,
          "rent_due_day": lease.rent_due_day,
          "grace_days": lease.grace_days,
          "late_fee_amount": float(safe_decimal(lease.late_fee_amount)),
     }


def _late_invoice_row(invoice: Invoice, today: date) -> Dict[str, Any]:
     return {
          "id": invoice.id,
          "due_date": invoice.due_date.isoformat(),
          "period_start": invoice.period_start.isoformat() if invoice.period_start else None,
          "period_end": invoice.period_end.isoformat() if invoice.period_end else None,
          "amount_total": float(safe_decimal(invoice.amount_total)),
          "amount_paid": float(safe_decimal(invoice.amount_paid)),
          "balance_due": float(safe_decimal(invoice.balance_due)),
          "amount_late": float(safe_decimal(invoice.amount_late)),
          "status": invoice.status.value if invoice.status else None,
          "days_late": _days_between(today, invoice.due_date),
     }


def aggregate_late_tenants(
     leases: Iterable[Lease],
     invoices_by_lease: Mapping[int, Sequence[Invoice]],
     payments_by_lease: Mapping[int, Sequence[Payment]],
     today: date,
) -> Dict[str, Any]:
     """
     Build the late-tenant report.

     Returns:
          {"summary": {...}, "rows": [...]} with rows sorted by totalOwedLate,
          highest first.
     """
     rows: List[Dict[str, Any]] = []
     total_all_owed = Decimal("0")
     total_late_owed = Decimal("0")

     for lease in leases:
          invoices = [
               inv for inv in invoices_by_lease.get(lease.id, ())
               if lease.lease_start_date <= inv.due_date <= today
          ]
          unpaid = [inv for inv in invoices if _is_unpaid(inv)]
          late = [inv for inv in unpaid if inv.due_date < today]

          total_all_owed += sum((safe_decimal(inv.balance_due) for inv in unpaid), Decimal("0"))

          if not late:
               continue

          oldest_due = min(inv.due_date for inv in late)
          total_late = sum((safe_decimal(inv.balance_due) for inv in late), Decimal("0"))
          total_fees = sum((safe_decimal(inv.amount_late) for inv in late), Decimal("0"))
          total_late_owed += total_late

          payments = sorted(payments_by_lease.get(lease.id, ()), key=lambda p: p.payment_date)
          total_paid = sum((safe_decimal(p.amount) for p in payments), Decimal("0"))

          rows.append({
               "leaseId": lease.id,
               "property": _dump(PropertyResponse, lease.property),
               "tenant": _dump(TenantResponse, lease.tenant),
               "lease": _lease_summary(lease),
               "daysLate": _days_between(today, oldest_due),
               "totalOwedLate": float(total_late),
               "totalLateFees": float(total_fees),
               "totalLatePeriods": len(late),
               "lateInvoices": [
                    _late_invoice_row(inv, today)
                    for inv in sorted(late, key=lambda i: i.due_date, reverse=True)
               ],
               "lastPaymentDate": payments[-1].payment_date.isoformat() if payments else None,
               "totalPayments": len(payments),
               "totalPaid": float(total_paid),
          })

     rows.sort(key=lambda row: row["totalOwedLate"], reverse=True)

     avg_days_late = 0
     if rows:
          mean = Decimal(sum(row["daysLate"] for row in rows)) / len(rows)
          avg_days_late = int(mean.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

     summary = {
          "lateLeases": len(rows),
          "totalLateOwed": float(total_late_owed),
          "totalAllOwed": float(total_all_owed),
          "thirtyPlusLate": sum(1 for row in rows if row["daysLate"] >= THIRTY_PLUS_DAYS),
          "avgDaysLate": avg_days_late,
     }
     return {"summary": summary, "rows": rows}


def _group_by_lease(items) -> Dict[int, list]:
     grouped: Dict[int, list] = defaultdict(list)
     for item in items:
          grouped[item.lease_id].append(item)
     return grouped


def get_late_tenants(db: Session, today: Optional[date] = None) -> Dict[str, Any]:
     """Load active leases with their invoices and payments and aggregate."""
     today = today or date.today()
     logger.info("Fetching late tenants for date %s", today)

     leases = (
          db.query(Lease)
          .options(joinedload(Lease.property), joinedload(Lease.tenant))
          .filter(Lease.status == LeaseStatus.ACTIVE.value)
          .all()
     )
     lease_ids = [lease.id for lease in leases]

     invoices_by_lease: Dict[int, list] = {}
     payments_by_lease: Dict[int, list] = {}
     if lease_ids:
          invoices = (
               db.query(Invoice)
               .filter(Invoice.lease_id.in_(lease_ids), Invoice.due_date <= today)
               .order_by(Invoice.due_date.desc())
               .all()
          )
          payments = (
               db.query(Payment)
               .filter(Payment.lease_id.in_(lease_ids))
               .order_by(Payment.payment_date.asc())
               .all()
          )
          invoices_by_lease = _group_by_lease(invoices)
          payments_by_lease = _group_by_lease(payments)

     report = aggregate_late_tenants(leases, invoices_by_lease, payments_by_lease, today)
     logger.info("Late tenants summary: %s", report["summary"])
     return report
