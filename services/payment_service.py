# services/payment_service.py
"""
Payment Service - recording payments and applying them to invoices.

A payment that names an invoice is applied to that invoice only. Otherwise
it is spread over the lease's OPEN invoices with a balance, oldest due date
first. Whatever is left over is reported back as unapplied.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from models import Invoice, Lease, Payment, PaymentAllocation
from models.invoice import InvoiceStatus
from services.invoice_service import InvoiceService
from utils.currency import safe_decimal

logger = logging.getLogger(__name__)

DEFAULT_PAYMENT_TYPE = "Rent"
DEFAULT_PAYMENT_METHOD = "Manual Entry"
DEFAULT_PAYMENT_STATUS = "completed"


def record_payment(db: Session, data: Dict[str, Any]) -> Payment:
     """
     Store a payment.

     property_id is taken from the lease when not given.

     Raises:
          ValueError: If tenant_id or lease_id is missing, the amount is not
               positive, or the lease doesn't exist
     """
     if not data.get("tenant_id") or not data.get("lease_id"):
          raise ValueError("Missing required fields: tenant_id, lease_id, amount")
     amount = safe_decimal(data.get("amount"))
     if amount <= 0:
          raise ValueError("Amount must be greater than 0")

     lease = db.query(Lease).filter(Lease.id == data["lease_id"]).first()
     if not lease:
          raise ValueError("Could not find property_id for this lease")

     payment = Payment(
          tenant_id=data["tenant_id"],
          lease_id=lease.id,
          property_id=data.get("property_id") or lease.property_id,
          invoice_id=data.get("invoice_id"),
          amount=amount,
          payment_date=data.get("payment_date") or date.today(),
          payment_type=data.get("payment_type") or DEFAULT_PAYMENT_TYPE,
          payment_method=DEFAULT_PAYMENT_METHOD,
          status=DEFAULT_PAYMENT_STATUS,
          notes=data.get("notes"),
     )
     db.add(payment)
     db.flush()
     logger.info("Recorded payment %s of %s for lease %s", payment.id, amount, lease.id)
     return payment


def _open_invoices(db: Session, lease_id: int) -> List[Invoice]:
     return (
          db.query(Invoice)
          .filter(
               Invoice.lease_id == lease_id,
               Invoice.status == InvoiceStatus.OPEN,
               Invoice.balance_due > 0,
          )
          .order_by(Invoice.due_date.asc(), Invoice.id.asc())
          .all()
     )


def allocate_payment(db: Session, payment: Payment) -> Tuple[List[Dict[str, Any]], Decimal]:
     """
     Apply a stored payment to invoices.

     Returns:
          (allocations, unapplied) where allocations is a list of
          {invoice_id, amount_applied, balance_due, status}.

     Raises:
          LookupError: If the payment names an invoice that doesn't exist
          ValueError: If the named invoice belongs to another lease or is void
     """
     remaining = safe_decimal(payment.amount)

     if payment.invoice_id:
          invoice = InvoiceService.get_invoice(db, payment.invoice_id)
          if not invoice:
               raise LookupError(f"Invoice with ID {payment.invoice_id} not found")
          if invoice.lease_id != payment.lease_id:
               raise ValueError("Invoice does not belong to the payment's lease")
          if invoice.is_void:
               raise ValueError("Cannot apply a payment to a voided invoice")
          targets = [invoice]
     else:
          targets = _open_invoices(db, payment.lease_id)

     allocations: List[Dict[str, Any]] = []
     for invoice in targets:
          if remaining <= 0:
               break
          balance = safe_decimal(invoice.balance_due)
          # A named invoice takes the whole payment, even past its balance
          applied = remaining if payment.invoice_id else min(remaining, balance)
          if applied <= 0:
               continue
          InvoiceService.apply_payment(db, invoice, applied)
          db.add(PaymentAllocation(payment_id=payment.id, invoice_id=invoice.id, amount=applied))
          remaining -= applied
          allocations.append({
               "invoice_id": invoice.id,
               "amount_applied": applied,
               "balance_due": invoice.balance_due,
               "status": invoice.status.value,
          })

     if payment.invoice_id is None and len(allocations) == 1:
          payment.invoice_id = allocations[0]["invoice_id"]
     db.flush()

     logger.info(
          "Allocated payment %s over %d invoice(s), %s unapplied",
          payment.id,
          len(allocations),
          remaining,
     )
     return allocations, remaining


def allocated_total(db: Session, payment_id: int) -> Decimal:
     """Sum of the allocations already recorded for a payment."""
     rows = db.query(PaymentAllocation.amount).filter(PaymentAllocation.payment_id == payment_id).all()
     return sum((safe_decimal(amount) for (amount,) in rows), Decimal("0"))


def apply_manual_allocations(
     db: Session,
     payment_id: Optional[int],
     items: Optional[List[Dict[str, Any]]],
) -> Tuple[Payment, List[Invoice], List[PaymentAllocation]]:
     """
     Apply chosen amounts of a stored payment to chosen invoices.

     Each item is {invoice_id, amount}. The amounts already allocated from
     the payment plus the new ones may not exceed the payment amount. Every
     invoice is checked before any of them is touched.

     Raises:
          ValueError: On a missing payment id, empty or malformed items,
               an over-allocation, or an invoice that is void or on another
               lease
          LookupError: If the payment or an invoice doesn't exist
     """
     if not payment_id:
          raise ValueError("Missing required field: paymentId")
     if not items:
          raise ValueError("Missing or empty allocations array")
     for item in items:
          if not item.get("invoice_id") or item.get("amount") is None:
               raise ValueError("Each allocation must have invoiceId and amount")
          if safe_decimal(item["amount"]) <= 0:
               raise ValueError("Allocation amounts must be greater than 0")

     payment = db.query(Payment).filter(Payment.id == payment_id).first()
     if not payment:
          raise LookupError("Payment not found")

     requested = sum((safe_decimal(item["amount"]) for item in items), Decimal("0"))
     total = allocated_total(db, payment.id) + requested
     if total > safe_decimal(payment.amount):
          raise ValueError(f"Total allocation ({total}) exceeds payment amount ({payment.amount})")

     invoices: Dict[int, Invoice] = {}
     for item in items:
          invoice = InvoiceService.get_invoice(db, item["invoice_id"])
          if not invoice:
               raise LookupError(f"Invoice with ID {item['invoice_id']} not found")
          if invoice.lease_id != payment.lease_id:
               raise ValueError("Invoice does not belong to the payment's lease")
          if invoice.is_void:
               raise ValueError("Cannot apply a payment to a voided invoice")
          invoices[invoice.id] = invoice

     created: List[PaymentAllocation] = []
     for item in items:
          invoice = invoices[item["invoice_id"]]
          amount = safe_decimal(item["amount"])
          InvoiceService.apply_payment(db, invoice, amount)
          allocation = PaymentAllocation(payment_id=payment.id, invoice_id=invoice.id, amount=amount)
          db.add(allocation)
          created.append(allocation)
     db.flush()

     logger.info(
          "Manually allocated %s of payment %s over %d invoice(s)",
          requested,
          payment.id,
          len(invoices),
     )
     return payment, list(invoices.values()), created
