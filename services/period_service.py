# services/period_service.py
"""
Period Service - rent periods on a Friday grid.

Rent is tracked against Fridays. For a lease and a list of header Fridays
every Friday becomes a RentPeriod; the active ones are the Fridays rent is
due on:

     weekly    every Friday inside the lease
     biweekly  every 14 days from the first Friday on or after the lease start
     monthly   one Friday per month, the one nearest rent_due_day (default 1),
               preferring Fridays on or before that day

Weekly and biweekly periods collect the payments made from the Saturday
before through the Friday. Monthly periods collect the whole month, and all
of a month's payments go to its active Friday.

get_period_map and get_payment_grid load leases, invoices and payments and
lay them out on those periods.
"""
import calendar
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from models import Invoice, Lease, Payment
from models.invoice import InvoiceStatus
from models.lease import LeaseStatus
from utils.cadence import BIWEEKLY, MONTHLY, WEEKLY, Cadence, normalize_cadence
from utils.currency import safe_decimal

logger = logging.getLogger(__name__)

FRIDAY = 4  # date.weekday()
MAX_LEASE_IDS = 500
MAX_RANGE_MONTHS = 18
GRID_WEEKS_EACH_SIDE = 4

CADENCE_LABELS = {WEEKLY: "Weekly", BIWEEKLY: "Biweekly", MONTHLY: "Monthly"}


@dataclass(frozen=True)
class RentPeriod:
     friday: date
     month_key: str
     is_active: bool
     window_start: date
     window_end: date
     due_date: date
     expected_amount: Decimal
     cadence: Optional[Cadence]


@dataclass
class BucketedPayments:
     amount_paid: Decimal = Decimal("0")
     payments: List[Dict[str, Any]] = field(default_factory=list)

     def add(self, payment) -> None:
          amount = safe_decimal(payment.amount)
          self.amount_paid += amount
          self.payments.append({
               "id": payment.id,
               "date": payment.payment_date,
               "amount": amount,
               "type": payment.payment_type,
               "notes": payment.notes,
          })


# ---- dates ----

def first_friday_on_or_after(day: date) -> date:
     return day + timedelta(days=(FRIDAY - day.weekday()) % 7)


def friday_columns(range_start: date, range_end: date) -> List[date]:
     """Every Friday from the first one on or after range_start through range_end."""
     fridays = []
     current = first_friday_on_or_after(range_start)
     while current <= range_end:
          fridays.append(current)
          current += timedelta(days=7)
     return fridays


def month_bounds(day: date) -> Tuple[date, date]:
     last = calendar.monthrange(day.year, day.month)[1]
     return day.replace(day=1), day.replace(day=last)


def month_key(day: date) -> str:
     return f"{day.year:04d}-{day.month:02d}"


def period_window(friday: date, cadence: Optional[str]) -> Tuple[date, date]:
     """Payment window for a Friday: its month when monthly, else Saturday through Friday."""
     if cadence == MONTHLY:
          return month_bounds(friday)
     return friday - timedelta(days=6), friday


# ---- periods ----

def lease_cadence(lease: Lease) -> Optional[Cadence]:
     cadence = normalize_cadence(lease.rent_cadence)
     if cadence is None and "month" in (lease.rent_cadence or "").lower():
          return MONTHLY
     return cadence


def _pick_monthly_friday(fridays: Sequence[date], due_day: int) -> date:
     for friday in fridays:
          if friday.day == due_day:
               return friday
     candidates = [f for f in fridays if f.day <= due_day] or list(fridays)
     # min() keeps the first of equally distant Fridays
     return min(candidates, key=lambda f: abs(f.day - due_day))


def monthly_periods(lease: Lease, fridays: Sequence[date]) -> List[RentPeriod]:
     if not fridays:
          return []
     due_day = lease.rent_due_day or 1
     lease_end = lease.lease_end_date or fridays[-1]

     by_month: Dict[str, List[date]] = defaultdict(list)
     for friday in fridays:
          by_month[month_key(friday)].append(friday)

     active = set()
     for month_fridays in by_month.values():
          month_start, month_end = month_bounds(month_fridays[0])
          if month_start <= lease_end and month_end >= lease.lease_start_date:
               active.add(_pick_monthly_friday(month_fridays, due_day))

     rent = safe_decimal(lease.rent)
     periods = []
     for friday in fridays:
          window_start, window_end = month_bounds(friday)
          periods.append(RentPeriod(
               friday=friday,
               month_key=month_key(friday),
               is_active=friday in active,
               window_start=window_start,
               window_end=window_end,
               due_date=friday,
               expected_amount=rent,
               cadence=MONTHLY,
          ))
     return periods


def periods_for_lease(lease: Lease, fridays: Sequence[date]) -> List[RentPeriod]:
     """One RentPeriod per header Friday, in order."""
     cadence = lease_cadence(lease)
     if cadence == MONTHLY:
          return monthly_periods(lease, fridays)

     anchor = first_friday_on_or_after(lease.lease_start_date)
     rent = safe_decimal(lease.rent)
     periods = []
     for friday in fridays:
          is_active = False
          if lease.in_term(friday):
               if cadence == WEEKLY:
                    is_active = True
               elif cadence == BIWEEKLY:
                    is_active = (friday - anchor).days % 14 == 0
          window_start, window_end = period_window(friday, cadence)
          periods.append(RentPeriod(
               friday=friday,
               month_key=month_key(friday),
               is_active=is_active,
               window_start=window_start,
               window_end=window_end,
               due_date=friday,
               expected_amount=rent,
               cadence=cadence,
          ))
     return periods


# ---- payments ----

def payment_matches_lease(payment, lease: Lease) -> bool:
     """Same lease, or no lease on the payment but the same property and tenant."""
     if payment.lease_id is not None:
          return payment.lease_id == lease.id
     return payment.property_id == lease.property_id and payment.tenant_id == lease.tenant_id


def bucket_payments_for_period(lease: Lease, window_start: date, window_end: date, payments: Iterable) -> BucketedPayments:
     bucket = BucketedPayments()
     for payment in payments:
          if payment_matches_lease(payment, lease) and window_start <= payment.payment_date <= window_end:
               bucket.add(payment)
     return bucket


def bucket_monthly_payments(lease: Lease, periods: Sequence[RentPeriod], payments: Iterable) -> Dict[date, BucketedPayments]:
     """
     Bucket per Friday where each payment goes to the active Friday of its
     month. Payments in a month with no active Friday are left out.
     """
     buckets = {period.friday: BucketedPayments() for period in periods}
     active_by_month = {period.month_key: period.friday for period in periods if period.is_active}
     for payment in payments:
          if not payment_matches_lease(payment, lease):
               continue
          friday = active_by_month.get(month_key(payment.payment_date))
          if friday is not None:
               buckets[friday].add(payment)
     return buckets


def build_payment_maps(payments: Iterable) -> Tuple[Dict[Any, list], Dict[Tuple[Any, Any], list]]:
     """Index payments by lease id and by (property id, tenant id)."""
     by_lease: Dict[Any, list] = defaultdict(list)
     by_property_tenant: Dict[Tuple[Any, Any], list] = defaultdict(list)
     for payment in payments:
          if payment.lease_id is not None:
               by_lease[payment.lease_id].append(payment)
          if payment.property_id is not None and payment.tenant_id is not None:
               by_property_tenant[(payment.property_id, payment.tenant_id)].append(payment)
     return by_lease, by_property_tenant


def payments_for_lease(lease: Lease, maps) -> List:
     """The lease's own payments plus lease-less ones for its property and tenant."""
     by_lease, by_property_tenant = maps
     payments = list(by_lease.get(lease.id, ()))
     for payment in by_property_tenant.get((lease.property_id, lease.tenant_id), ()):
          if payment.lease_id is None:
               payments.append(payment)
     return payments


# ---- period map ----

def _parse_day(value) -> date:
     if isinstance(value, date):
          return value
     try:
          return date.fromisoformat(str(value))
     except ValueError:
          raise ValueError("Invalid date format. Use YYYY-MM-DD")


def validate_period_map_request(lease_ids, date_from, date_to) -> Tuple[List[int], date, date]:
     """
     Check a period-map request and return (lease_ids, from, to).

     Raises:
          ValueError: With the message to send back
     """
     if not isinstance(lease_ids, list) or not lease_ids:
          raise ValueError("leaseIds must be a non-empty array")
     if not date_from or not date_to:
          raise ValueError("from and to dates are required (YYYY-MM-DD format)")
     start, end = _parse_day(date_from), _parse_day(date_to)
     if start > end:
          raise ValueError("from date must be less than or equal to to date")
     if len(lease_ids) > MAX_LEASE_IDS:
          raise ValueError(f"Too many lease IDs. Maximum allowed: {MAX_LEASE_IDS}")
     if (end.year - start.year) * 12 + (end.month - start.month) > MAX_RANGE_MONTHS:
          raise ValueError(f"Date range too large. Maximum allowed: {MAX_RANGE_MONTHS} months")

     invalid = [i for i in lease_ids if isinstance(i, bool) or not isinstance(i, int)]
     if invalid:
          raise ValueError(f"Invalid lease ID format: {', '.join(str(i) for i in invalid[:3])}")
     return lease_ids, start, end


def _invoice_for_window(invoices: Sequence[Invoice], window_start: date, window_end: date) -> Optional[Invoice]:
     for invoice in invoices:
          if window_start <= invoice.due_date <= window_end:
               return invoice
     return None


def _period_row(lease: Lease, period: RentPeriod, invoice: Optional[Invoice], payments: Sequence) -> Dict[str, Any]:
     if invoice is not None:
          billed = safe_decimal(invoice.amount_total)
          paid = safe_decimal(invoice.amount_paid)
          rent_part = safe_decimal(invoice.amount_rent) + safe_decimal(invoice.amount_other)
          paid_to_rent = min(paid, rent_part)
          paid_to_late = paid - paid_to_rent
     else:
          billed = period.expected_amount
          paid_to_rent = bucket_payments_for_period(lease, period.window_start, period.window_end, payments).amount_paid
          paid_to_late = Decimal("0")

     return {
          "lease_id": lease.id,
          "property_id": lease.property_id,
          "tenant_id": lease.tenant_id,
          "cadence": CADENCE_LABELS.get(period.cadence),
          "period_start": period.window_start,
          "period_end": period.window_end,
          "due_date": period.due_date,
          "invoice_id": invoice.id if invoice is not None else None,
          "billed_total": billed,
          "paid_to_rent": paid_to_rent,
          "paid_to_late": paid_to_late,
          "balance_due": billed - paid_to_rent - paid_to_late,
          "is_missing_invoice": invoice is None,
     }


def get_period_map(db: Session, lease_ids: Sequence[int], date_from: date, date_to: date) -> List[Dict[str, Any]]:
     """
     One row per active period of the given leases between date_from and
     date_to, with the invoice whose due date falls in the period window.
     Periods without an invoice are billed at the lease rent and credited
     with the payments made inside the window.
     """
     leases = db.query(Lease).filter(Lease.id.in_(list(lease_ids))).order_by(Lease.id.asc()).all()
     if not leases:
          return []
     fridays = friday_columns(date_from, date_to)
     if not fridays:
          return []

     # Monthly windows can reach past the Friday range on either side
     window_from = min(month_bounds(fridays[0])[0], fridays[0] - timedelta(days=6))
     window_to = month_bounds(fridays[-1])[1]
     ids = [lease.id for lease in leases]

     invoices_by_lease: Dict[int, list] = defaultdict(list)
     invoices = (
          db.query(Invoice)
          .filter(
               Invoice.lease_id.in_(ids),
               Invoice.status != InvoiceStatus.VOID,
               Invoice.due_date >= window_from,
               Invoice.due_date <= window_to,
          )
          .order_by(Invoice.due_date.asc(), Invoice.id.asc())
          .all()
     )
     for invoice in invoices:
          invoices_by_lease[invoice.lease_id].append(invoice)

     payments = (
          db.query(Payment)
          .filter(
               Payment.lease_id.in_(ids),
               Payment.payment_date >= window_from,
               Payment.payment_date <= window_to,
          )
          .all()
     )
     maps = build_payment_maps(payments)

     rows = []
     for lease in leases:
          lease_payments = payments_for_lease(lease, maps)
          for period in periods_for_lease(lease, fridays):
               if not period.is_active:
                    continue
               invoice = _invoice_for_window(invoices_by_lease[lease.id], period.window_start, period.window_end)
               rows.append(_period_row(lease, period, invoice, lease_payments))

     logger.info("Period map: leases=%d range=%s..%s rows=%d", len(leases), date_from, date_to, len(rows))
     return rows


# ---- payments grid ----

def default_grid_range(today: date, week_offset: int = 0) -> Tuple[date, date]:
     """Four weeks either side of the coming Friday, moved by week_offset blocks of four weeks."""
     centre = first_friday_on_or_after(today) + timedelta(weeks=GRID_WEEKS_EACH_SIDE * week_offset)
     span = timedelta(weeks=GRID_WEEKS_EACH_SIDE)
     return centre - span, centre + span


def _cell_status(lease: Lease, period: RentPeriod, paid: Decimal, today: date) -> Tuple[str, bool]:
     if not lease.in_term(period.friday):
          return "outside_lease", True
     if period.is_active:
          if paid >= period.expected_amount:
               return "paid", False
          if paid > 0:
               return "partial", False
          if today <= period.due_date:
               return "upcoming", False
          return "owed", False
     if period.cadence == MONTHLY:
          return "inactive", True
     if paid > 0:
          return "paid", False
     return "inactive", True


def _payment_json(entry: Dict[str, Any]) -> Dict[str, Any]:
     return {
          "id": entry["id"],
          "date": entry["date"].isoformat(),
          "amount": float(entry["amount"]),
          "type": entry["type"],
          "notes": entry["notes"],
     }


def _total_owed(lease: Lease, payments: Sequence, today: date) -> Decimal:
     """Expected minus paid from the later of lease start and 1 January through today."""
     year_start = date(today.year, 1, 1)
     since = max(lease.lease_start_date, year_start)
     if since > today:
          return Decimal("0")

     year_periods = periods_for_lease(lease, friday_columns(year_start, date(today.year, 12, 31)))
     expected = sum(
          (p.expected_amount for p in year_periods if p.is_active and since <= p.due_date <= today),
          Decimal("0"),
     )
     paid = sum(
          (safe_decimal(p.amount) for p in payments if since <= p.payment_date <= today),
          Decimal("0"),
     )
     return max(Decimal("0"), expected - paid)


def _grid_row(lease: Lease, fridays: Sequence[date], payments: Sequence, today: date) -> Dict[str, Any]:
     periods = periods_for_lease(lease, fridays)
     monthly_buckets = None
     if lease_cadence(lease) == MONTHLY:
          monthly_buckets = bucket_monthly_payments(lease, periods, payments)

     cells = []
     for period in periods:
          if monthly_buckets is not None:
               bucket = monthly_buckets[period.friday]
          else:
               bucket = bucket_payments_for_period(lease, period.window_start, period.window_end, payments)
          cell_status, is_locked = _cell_status(lease, period, bucket.amount_paid, today)
          cells.append({
               "dueDate": period.due_date.isoformat(),
               "windowStart": period.window_start.isoformat(),
               "windowEnd": period.window_end.isoformat(),
               "status": cell_status,
               "expectedAmount": float(period.expected_amount),
               "amountPaid": float(bucket.amount_paid),
               "payments": [_payment_json(p) for p in bucket.payments],
               "isLocked": is_locked,
          })

     prop, tenant = lease.property, lease.tenant
     return {
          "property": {
               "id": prop.id,
               "name": prop.name,
               "address": prop.address,
               "city": prop.city,
               "state": prop.state,
               "zip": prop.zip_code,
          } if prop else None,
          "tenant": {
               "id": tenant.id,
               "full_name": tenant.full_name,
               "email": tenant.email,
               "phone": tenant.phone,
          } if tenant else None,
          "lease": {
               "id": lease.id,
               "lease_start_date": lease.lease_start_date.isoformat(),
               "lease_end_date": lease.lease_end_date.isoformat() if lease.lease_end_date else None,
               "rent_cadence": lease.rent_cadence,
               "rent": float(safe_decimal(lease.rent)),
               "rent_due_day": lease.rent_due_day,
               "status": lease.status,
          },
          "totalOwed": float(_total_owed(lease, payments, today)),
          "cells": cells,
     }


def get_payment_grid(
     db: Session,
     range_start: Optional[date] = None,
     range_end: Optional[date] = None,
     week_offset: int = 0,
     today: Optional[date] = None,
) -> Dict[str, Any]:
     """
     Active leases against a row of Friday columns, each cell showing what
     was due and what was paid in that period.

     Without both range_start and range_end the range is
     default_grid_range(today, week_offset).

     Raises:
          ValueError: If range_start is after range_end
     """
     today = today or date.today()
     if range_start is None or range_end is None:
          range_start, range_end = default_grid_range(today, week_offset)
     if range_start > range_end:
          raise ValueError("rangeStart must be on or before rangeEnd")

     fridays = friday_columns(range_start, range_end)
     leases = (
          db.query(Lease)
          .options(joinedload(Lease.property), joinedload(Lease.tenant))
          .filter(
               Lease.status == LeaseStatus.ACTIVE.value,
               Lease.lease_start_date <= range_end,
               or_(Lease.lease_end_date.is_(None), Lease.lease_end_date >= range_start),
          )
          .order_by(Lease.id.asc())
          .all()
     )

     # Enough history for the cells' windows and for the year-to-date total
     payments_from = min(date(today.year, 1, 1), month_bounds(range_start)[0], range_start - timedelta(days=7))
     payments_to = max(today, month_bounds(range_end)[1])
     rows = []
     if leases:
          payments = (
               db.query(Payment)
               .filter(
                    Payment.lease_id.in_([lease.id for lease in leases]),
                    Payment.payment_date >= payments_from,
                    Payment.payment_date <= payments_to,
               )
               .order_by(Payment.payment_date.asc(), Payment.id.asc())
               .all()
          )
          maps = build_payment_maps(payments)
          rows = [_grid_row(lease, fridays, payments_for_lease(lease, maps), today) for lease in leases]

     logger.info("Payments grid %s..%s: %d lease(s), %d Friday(s)", range_start, range_end, len(rows), len(fridays))
     return {
          "dateRange": {"startDate": range_start.isoformat(), "endDate": range_end.isoformat()},
          "fridays": [friday.isoformat() for friday in fridays],
          "rows": rows,
     }
