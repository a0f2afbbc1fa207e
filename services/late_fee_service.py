# services/late_fee_service.py
"""
Late Fee Service - manual late-fee adjustments.

Every change goes through InvoiceService so amount_total, balance_due and
status are recomputed. Batch removals flush each invoice as it goes; if the
store fails part-way, the request fails and nothing is retried.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Union

from sqlalchemy.orm import Session

from models import Invoice, Lease, LateFeeWaiver
from services.invoice_service import InvoiceService, utc_now
from utils.currency import safe_decimal

logger = logging.getLogger(__name__)

VIRTUAL_PREFIX = "virtual-"


def is_virtual_invoice_id(invoice_id: Union[int, str, None]) -> bool:
     return isinstance(invoice_id, str) and invoice_id.startswith(VIRTUAL_PREFIX)


def move_late_fee(db: Session, invoice_id: Union[int, str, None], new_amount) -> Dict[str, Any]:
     """
     Set an invoice's late fee to `new_amount`.

     Ids starting with "virtual-" belong to periods shown in the UI without
     a stored invoice; those succeed without touching the database.

     Raises:
          ValueError: If either argument is missing or new_amount is negative
          LookupError: If the invoice doesn't exist
     """
     if invoice_id in (None, "") or new_amount is None:
          raise ValueError("Invoice ID and new amount are required")
     amount = safe_decimal(new_amount)
     if amount < 0:
          raise ValueError("Late fee amount cannot be negative")

     if is_virtual_invoice_id(invoice_id):
          logger.warning("Late fee move on virtual invoice %s is display only", invoice_id)
          return {
               "success": True,
               "message": "Virtual invoice late fee updated (display only)",
               "isVirtual": True,
               "newAmount": float(amount),
          }

     try:
          invoice = InvoiceService.get_invoice(db, int(invoice_id))
     except (TypeError, ValueError):
          invoice = None
     if not invoice:
          raise LookupError("Invoice not found")

     InvoiceService.set_late_fee(db, invoice, amount)
     logger.info("Moved late fee on invoice %s to %s", invoice.id, amount)
     return {
          "success": True,
          "message": "Late fee updated successfully",
          "newAmount": float(amount),
          "newAmountTotal": float(invoice.amount_total),
          "newBalanceDue": float(invoice.balance_due),
     }


def waive_late_fees(
     db: Session,
     invoice_id: Optional[int] = None,
     lease_id: Optional[int] = None,
     current_date: Optional[date] = None,
     waived_by: str = "system",
) -> Dict[str, Any]:
     """
     Waive late fees for a lease on a date, or on a single invoice.

     With a lease, a LateFeeWaiver row is recorded for (lease, current_date);
     waiving the same date again refreshes it. With an invoice, its late fee
     is set to 0.

     Raises:
          ValueError: If neither id is given or current_date is missing
          LookupError: If the lease or invoice doesn't exist
     """
     if not invoice_id and not lease_id:
          raise ValueError("Either invoice ID or lease ID is required")
     if current_date is None:
          raise ValueError("Current date is required")

     if lease_id:
          lease = db.query(Lease).filter(Lease.id == lease_id).first()
          if not lease:
               raise LookupError("Lease not found")

          waiver = (
               db.query(LateFeeWaiver)
               .filter(LateFeeWaiver.lease_id == lease_id, LateFeeWaiver.waiver_date == current_date)
               .first()
          )
          if waiver:
               waiver.waived_at = utc_now()
               waiver.waived_by = waived_by
          else:
               waiver = LateFeeWaiver(lease_id=lease_id, waiver_date=current_date, waived_by=waived_by)
               db.add(waiver)
          db.flush()
          logger.info("Waived late fees for lease %s on %s", lease_id, current_date)
          return {
               "success": True,
               "message": "Late fees waived successfully for this lease",
               "invoicesUpdated": 1,
               "waiverInfo": {
                    "leaseId": lease_id,
                    "waiverDate": current_date.isoformat(),
                    "waivedBy": waiver.waived_by,
               },
          }

     invoice = InvoiceService.get_invoice(db, invoice_id)
     if not invoice:
          raise LookupError("Invoice not found")
     InvoiceService.set_late_fee(db, invoice, Decimal("0"))
     logger.info("Waived late fee on invoice %s", invoice_id)
     return {
          "success": True,
          "message": "Late fees waived successfully",
          "invoicesUpdated": 1,
     }


def _clear_late_fees(db: Session, query) -> int:
     invoices = query.filter(Invoice.amount_late > 0).order_by(Invoice.id).all()
     for invoice in invoices:
          InvoiceService.set_late_fee(db, invoice, Decimal("0"))
     return len(invoices)


def remove_all_late_fees(db: Session, current_date: Optional[date]) -> Dict[str, Any]:
     """
     Zero the late fee on every invoice due on or before current_date.

     Raises:
          ValueError: If current_date is missing
     """
     if current_date is None:
          raise ValueError("Current date is required")

     updated = _clear_late_fees(db, db.query(Invoice).filter(Invoice.due_date <= current_date))
     logger.info("Removed late fees from %d invoice(s) due by %s", updated, current_date)
     if not updated:
          return {"success": True, "message": "No late fees to remove", "invoicesUpdated": 0}
     return {"success": True, "message": "All late fees removed successfully", "invoicesUpdated": updated}


def remove_lease_late_fees(db: Session, lease_id: Optional[int], current_date: Optional[date]) -> Dict[str, Any]:
     """
     Zero the late fee on one lease's invoices due on or before current_date.

     Raises:
          ValueError: If lease_id or current_date is missing
     """
     if not lease_id or current_date is None:
          raise ValueError("Lease ID and current date are required")

     query = db.query(Invoice).filter(Invoice.lease_id == lease_id, Invoice.due_date <= current_date)
     updated = _clear_late_fees(db, query)
     logger.info("Removed late fees from %d invoice(s) on lease %s", updated, lease_id)
     if not updated:
          return {"success": True, "message": "No late fees to remove for this lease", "invoicesUpdated": 0}
     return {
          "success": True,
          "message": f"Late fees removed for lease ({updated} invoices updated)",
          "invoicesUpdated": updated,
     }
