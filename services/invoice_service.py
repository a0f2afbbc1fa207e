# services/invoice_service.py
"""
Invoice Service - balance recalculation and invoice writes.

Every path that changes an invoice amount goes through recalculate_totals so
that total, balance and status stay consistent:

     amount_total = amount_rent + amount_late + amount_other
     balance_due  = amount_total - amount_paid
     status       = PAID if balance_due <= 0 else OPEN   (VOID is left alone)

Updates are read-modify-write against the current session; two requests
updating the same invoice concurrently can overwrite each other.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from models import Invoice, Lease
from models.invoice import InvoiceStatus
from utils.currency import Numeric, safe_decimal

logger = logging.getLogger(__name__)


AMOUNT_FIELDS = ("amount_rent", "amount_late", "amount_other", "amount_paid")
# Any amount change triggers a recompute
RECOMPUTE_FIELDS = AMOUNT_FIELDS


def utc_now() -> datetime:
     """Naive UTC timestamp, matching the DateTime columns."""
     return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class InvoiceTotals:
     amount_total: Decimal
     balance_due: Decimal
     status: InvoiceStatus
     paid_in_full_at: Optional[datetime]

     def as_dict(self) -> Dict[str, Any]:
          return {
               "amount_total": self.amount_total,
               "balance_due": self.balance_due,
               "status": self.status,
               "paid_in_full_at": self.paid_in_full_at,
          }


def recalculate_totals(
     amount_rent: Numeric,
     amount_late: Numeric,
     amount_other: Numeric,
     amount_paid: Numeric,
     now: Optional[datetime] = None,
) -> InvoiceTotals:
     """
     Recompute total, balance and status from the component amounts.

     Pure and idempotent: the same inputs always give the same totals.
     paid_in_full_at is `now` (default: current UTC time) when the balance is
     settled, otherwise None.
     """
     amount_total = safe_decimal(amount_rent) + safe_decimal(amount_late) + safe_decimal(amount_other)
     balance_due = amount_total - safe_decimal(amount_paid)
     if balance_due <= 0:
          return InvoiceTotals(amount_total, balance_due, InvoiceStatus.PAID, now or utc_now())
     return InvoiceTotals(amount_total, balance_due, InvoiceStatus.OPEN, None)


class InvoiceService:
     """Service class for invoice-related business logic."""

     @staticmethod
     def get_invoice(db: Session, invoice_id: int) -> Optional[Invoice]:
          return db.query(Invoice).filter(Invoice.id == invoice_id).first()

     @staticmethod
     def _write_totals(invoice: Invoice, totals: InvoiceTotals) -> None:
          invoice.amount_total = totals.amount_total
          invoice.balance_due = totals.balance_due
          # A voided invoice keeps its status; only the figures move
          if not invoice.is_void:
               invoice.status = totals.status
               invoice.paid_in_full_at = totals.paid_in_full_at

     @staticmethod
     def create_invoice(db: Session, data: Dict[str, Any]) -> Invoice:
          """
          Create an invoice for a lease with derived totals.

          tenant_id and property_id default to the lease's.

          Raises:
               LookupError: If the lease doesn't exist
          """
          lease = db.query(Lease).filter(Lease.id == data["lease_id"]).first()
          if not lease:
               raise LookupError(f"Lease with ID {data['lease_id']} not found")

          values = dict(data)
          if values.get("tenant_id") is None:
               values["tenant_id"] = lease.tenant_id
          if values.get("property_id") is None:
               values["property_id"] = lease.property_id
          for field in AMOUNT_FIELDS:
               values[field] = safe_decimal(values.get(field))

          totals = recalculate_totals(
               values["amount_rent"],
               values["amount_late"],
               values["amount_other"],
               values["amount_paid"],
          )
          invoice = Invoice(**values)
          InvoiceService._write_totals(invoice, totals)

          db.add(invoice)
          db.flush()
          logger.info("Created invoice %s for lease %s (total %s)", invoice.id, lease.id, invoice.amount_total)
          return invoice

     @staticmethod
     def apply_update(db: Session, invoice: Invoice, changes: Dict[str, Any]) -> Invoice:
          """
          Apply a partial update.

          When `changes` carries any amount (amount_paid, amount_late,
          amount_rent, amount_other), the values not supplied are taken from
          the stored invoice and total, balance, status and paid_in_full_at
          are recomputed.
          """
          needs_recompute = any(field in changes for field in RECOMPUTE_FIELDS)

          for field, value in changes.items():
               setattr(invoice, field, value)

          if needs_recompute:
               totals = recalculate_totals(
                    invoice.amount_rent,
                    invoice.amount_late,
                    invoice.amount_other,
                    invoice.amount_paid,
               )
               InvoiceService._write_totals(invoice, totals)
               logger.info(
                    "Recalculated invoice %s: total=%s paid=%s balance=%s status=%s",
                    invoice.id,
                    totals.amount_total,
                    invoice.amount_paid,
                    totals.balance_due,
                    invoice.status.value,
               )

          db.flush()
          return invoice

     @staticmethod
     def set_late_fee(db: Session, invoice: Invoice, new_amount: Numeric) -> Invoice:
          """
          Force amount_late to `new_amount` and recompute; rent and other
          charges are left untouched.

          Raises:
               ValueError: If new_amount is negative
          """
          amount = safe_decimal(new_amount)
          if amount < 0:
               raise ValueError("Late fee amount cannot be negative")
          return InvoiceService.apply_update(db, invoice, {"amount_late": amount})

     @staticmethod
     def apply_payment(db: Session, invoice: Invoice, amount: Numeric) -> Invoice:
          """Add `amount` to amount_paid and recompute."""
          paid = safe_decimal(invoice.amount_paid) + safe_decimal(amount)
          return InvoiceService.apply_update(db, invoice, {"amount_paid": paid})

     @staticmethod
     def void_invoice(db: Session, invoice: Invoice, reason: str) -> Invoice:
          """
          Mark an invoice VOID with the given reason.

          Raises:
               ValueError: If the reason is blank or the invoice is already void
          """
          reason = (reason or "").strip()
          if not reason:
               raise ValueError("Void reason is required")
          if invoice.is_void:
               raise ValueError("Invoice is already voided")

          invoice.status = InvoiceStatus.VOID
          invoice.void_reason = reason
          invoice.voided_at = utc_now()
          db.flush()
          logger.info("Voided invoice %s: %s", invoice.id, reason)
          return invoice
