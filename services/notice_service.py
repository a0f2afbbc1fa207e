# services/notice_service.py
"""
Notice Service - 7-day pay-or-quit notices for late invoices.

The statute cited depends on the state of the property; states other than
SC and NC get the same notice without a statute reference.
"""
import logging
import os
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from models import Invoice, Lease
from utils.currency import safe_decimal, to_usd
from utils import email as email_util

logger = logging.getLogger(__name__)

NOTICE_DAYS = 7
DEFAULT_STATE = "SC"

LANDLORD_NAME = os.getenv("NOTICE_LANDLORD_NAME", "Property Management")
LANDLORD_ADDRESS = os.getenv("NOTICE_LANDLORD_ADDRESS", "")
LANDLORD_CONTACT = os.getenv("NOTICE_LANDLORD_CONTACT", "")

STATUTES = {
     "SC": {
          "title": "7-Day Notice to Pay Rent or Quit - South Carolina",
          "heading": "7-DAY NOTICE PURSUANT TO SOUTH CAROLINA CODE ANN. § 27-40-710(B)",
          "basis": "Pursuant to South Carolina law (SC Code Ann. § 27-40-710(B)), you",
          "footer": "This notice is generated pursuant to South Carolina Code Ann. § 27-40-710(B) and is legally binding.",
     },
     "NC": {
          "title": "7-Day Notice to Pay Rent or Quit - North Carolina",
          "heading": "7-DAY NOTICE PURSUANT TO NORTH CAROLINA GENERAL STATUTES § 42-26",
          "basis": "Pursuant to North Carolina law (NC Gen. Stat. § 42-26), you",
          "footer": "This notice is generated pursuant to North Carolina General Statutes § 42-26 and is legally binding.",
     },
}
GENERIC = {
     "title": "7-Day Notice to Pay Rent or Quit",
     "heading": "7-DAY NOTICE",
     "basis": "You",
     "footer": "This notice is legally binding.",
}


class NoticeNotFound(LookupError):
     pass


def long_date(value: date) -> str:
     """October 7, 2025"""
     return f"{value.strftime('%B')} {value.day}, {value.year}"


def _location(prop) -> str:
     city = f"{prop.city}, " if prop.city else ""
     return f"{city}{prop.state or ''} {prop.zip_code or ''}".strip()


def _breakdown(invoice: Invoice, total_due: Decimal) -> str:
     lines = [f"- Rent: {to_usd(invoice.amount_rent)}"]
     if safe_decimal(invoice.amount_late) > 0:
          lines.append(f"- Late Fee: {to_usd(invoice.amount_late)}")
     if safe_decimal(invoice.amount_other) > 0:
          lines.append(f"- Other Charges: {to_usd(invoice.amount_other)}")
     lines.append(f"- **TOTAL DUE: {to_usd(total_due)}**")
     return "\n".join(lines)


def _signature() -> str:
     return "\n".join(line for line in (LANDLORD_NAME, LANDLORD_ADDRESS, LANDLORD_CONTACT) if line)


def render_notice(invoice: Invoice, lease: Lease, today: date) -> Dict[str, Any]:
     """Build the notice text for an invoice on a lease. Pure."""
     prop = lease.property
     tenant = lease.tenant
     state = ((prop.state if prop else None) or DEFAULT_STATE).upper()
     template = STATUTES.get(state, GENERIC)

     total_due = safe_decimal(invoice.balance_due)
     notice_date = long_date(today)
     deadline = long_date(today + timedelta(days=NOTICE_DAYS))
     address = prop.address if prop and prop.address else ""
     location = _location(prop) if prop else ""
     tenant_name = tenant.full_name if tenant else ""

     content = f"""**NOTICE TO PAY RENT OR QUIT - INTENT TO EVICT**
{template["heading"]}

Date: {notice_date}

{tenant_name}
{address}
{location}

You are hereby notified that your rent in the amount of {to_usd(total_due)} for the property located at {address}, {location} was due on {long_date(invoice.due_date)}.

**BREAKDOWN OF AMOUNTS DUE:**
{_breakdown(invoice, total_due)}

As of the date of this notice, the full amount of {to_usd(total_due)} remains unpaid.

{template["basis"]} have seven (7) days from the date of this notice ({notice_date}) to pay the full amount of rent due or surrender possession of the premises. The deadline for payment or vacating the premises is {deadline}.

**IMPORTANT: Payment in full will stop all eviction proceedings from moving forward.**

This notice is being delivered by physical delivery to the premises.

Failure to comply with this notice by the specified deadline will result in the commencement of eviction proceedings without further notice. This may include legal action to recover possession of the property, unpaid rent, and any other damages or costs as permitted by law.

We urge you to take immediate action to resolve this matter.

{_signature()}

Date Notice Delivered: {notice_date}
Method of Delivery: Physical Delivery to Premises

---
{template["footer"]}"""

     return {
          "noticeTitle": template["title"],
          "noticeContent": content,
          "state": state,
          "totalDue": total_due,
          "deadline": deadline,
     }


def generate_notice(
     db: Session,
     invoice_id: int,
     lease_id: int,
     today: Optional[date] = None,
     send_email: bool = False,
) -> Dict[str, Any]:
     """
     Generate (and optionally e-mail) a late notice.

     Raises:
          NoticeNotFound: If the invoice or the lease doesn't exist
          RuntimeError: If e-mail delivery was requested and failed
     """
     invoice = db.query(Invoice).filter(Invoice.id == invoice_id).first()
     if not invoice:
          raise NoticeNotFound("Invoice not found")
     lease = db.query(Lease).filter(Lease.id == lease_id).first()
     if not lease:
          raise NoticeNotFound("Lease, property, or tenant data not found")

     notice = render_notice(invoice, lease, today or date.today())
     notice["emailedTo"] = None
     logger.info("Generated %s notice for invoice %s (lease %s)", notice["state"], invoice_id, lease_id)

     if send_email:
          to_email = lease.tenant.email if lease.tenant else None
          if not to_email:
               logger.warning("Tenant on lease %s has no e-mail; notice not sent", lease_id)
          else:
               email_util.send_notice_email(to_email, notice["noticeTitle"], notice["noticeContent"])
               notice["emailedTo"] = to_email
     return notice
