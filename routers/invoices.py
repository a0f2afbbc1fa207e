# routers/invoices.py
"""
Invoice API routes.

Amount changes go through InvoiceService so amount_total, balance_due and
status always agree with the component amounts.
"""
import logging
from datetime import date
from typing import Optional, List
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, joinedload

from database import get_session
from dependencies import verify_token
from models import Invoice, Payment, PaymentAllocation
from models.invoice import InvoiceStatus
from services.invoice_service import InvoiceService
from schemas.invoice import (
     InvoiceCreate,
     InvoiceUpdate,
     InvoiceVoidRequest,
     InvoiceResponse,
     InvoiceDetailResponse,
     InvoiceUpdateResponse,
     InvoiceVoidResponse,
     InvoiceWithAllocationsResponse,
     PeriodInvoiceResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


def _get_invoice_or_404(db: Session, invoice_id: int) -> Invoice:
     invoice = (
          db.query(Invoice)
          .options(joinedload(Invoice.tenant), joinedload(Invoice.property))
          .filter(Invoice.id == invoice_id)
          .first()
     )
     if not invoice:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Invoice not found"
          )
     return invoice


def _build_invoice_detail(invoice: Invoice) -> InvoiceDetailResponse:
     """Flatten tenant and property attributes onto the invoice."""
     detail = InvoiceDetailResponse.model_validate(invoice)
     tenant = invoice.tenant
     prop = invoice.property
     if tenant:
          detail.tenant_name = tenant.full_name
          detail.tenant_email = tenant.email
          detail.tenant_phone = tenant.phone
     if prop:
          detail.property_name = prop.name
          detail.property_address = prop.address
          detail.property_city = prop.city
          detail.property_state = prop.state
          detail.property_zip = prop.zip_code
     return detail


@router.get(
     "",
     response_model=List[InvoiceDetailResponse],
     summary="List invoices with filters"
)
def list_invoices(
     tenant_id: Optional[int] = Query(None, description="Filter by tenant ID"),
     lease_id: Optional[int] = Query(None, description="Filter by lease ID"),
     invoice_status: Optional[InvoiceStatus] = Query(None, alias="status", description="Filter by status"),
     date_from: Optional[date] = Query(None, alias="from", description="Earliest due date"),
     date_to: Optional[date] = Query(None, alias="to", description="Latest due date"),
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """
     Retrieve invoices, most recent due date first.

     Filters:
     - **tenant_id** / **lease_id**: restrict to one tenant or lease
     - **status**: OPEN, PAID or VOID
     - **from** / **to**: due date range, inclusive
     """
     query = db.query(Invoice).options(joinedload(Invoice.tenant), joinedload(Invoice.property))

     if tenant_id:
          query = query.filter(Invoice.tenant_id == tenant_id)
     if lease_id:
          query = query.filter(Invoice.lease_id == lease_id)
     if invoice_status:
          query = query.filter(Invoice.status == invoice_status)
     if date_from:
          query = query.filter(Invoice.due_date >= date_from)
     if date_to:
          query = query.filter(Invoice.due_date <= date_to)

     invoices = query.order_by(Invoice.due_date.desc(), Invoice.id.desc()).all()
     return [_build_invoice_detail(inv) for inv in invoices]


@router.post(
     "",
     response_model=InvoiceDetailResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new invoice"
)
def create_invoice(
     invoice_data: InvoiceCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """
     Create an invoice for a lease. amount_total, balance_due and status
     are derived from the amounts.
     """
     try:
          invoice = InvoiceService.create_invoice(db, invoice_data.model_dump())
     except LookupError:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Lease not found"
          )
     db.commit()
     return _build_invoice_detail(_get_invoice_or_404(db, invoice.id))


@router.get(
     "/by-period",
     response_model=List[PeriodInvoiceResponse],
     summary="Get a lease's invoices by billing period"
)
def get_invoices_by_period(
     lease_id: Optional[int] = Query(None, description="Lease ID (required)"),
     date_from: Optional[date] = Query(None, alias="from", description="Earliest due date"),
     date_to: Optional[date] = Query(None, alias="to", description="Latest due date"),
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """One row per invoice of the lease, oldest due date first."""
     if not lease_id:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="lease_id is required"
          )

     query = db.query(Invoice).filter(Invoice.lease_id == lease_id)
     if date_from:
          query = query.filter(Invoice.due_date >= date_from)
     if date_to:
          query = query.filter(Invoice.due_date <= date_to)

     return [
          PeriodInvoiceResponse(
               lease_id=inv.lease_id,
               property_id=inv.property_id,
               tenant_id=inv.tenant_id,
               invoice_id=inv.id,
               period_start=inv.period_start,
               period_end=inv.period_end,
               period_due_date=inv.due_date,
               billed_total=inv.amount_total,
               amount_paid=inv.amount_paid,
               balance_due=inv.balance_due,
               status=inv.status,
          )
          for inv in query.order_by(Invoice.due_date.asc(), Invoice.id.asc()).all()
     ]


@router.get(
     "/{invoice_id}",
     response_model=InvoiceWithAllocationsResponse,
     summary="Get invoice by ID"
)
def get_invoice(
     invoice_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """Invoice with tenant/property details and the payments applied to it."""
     invoice = _get_invoice_or_404(db, invoice_id)
     rows = (
          db.query(PaymentAllocation, Payment)
          .join(Payment, Payment.id == PaymentAllocation.payment_id)
          .filter(PaymentAllocation.invoice_id == invoice_id)
          .order_by(Payment.payment_date.asc(), PaymentAllocation.id.asc())
          .all()
     )
     allocations = [
          {
               "paymentId": payment.id,
               "amount": allocation.amount,
               "receivedAt": payment.payment_date,
               "memo": payment.notes,
          }
          for allocation, payment in rows
     ]
     return {"invoice": _build_invoice_detail(invoice), "allocations": allocations}


@router.put(
     "/{invoice_id}",
     response_model=InvoiceUpdateResponse,
     summary="Update invoice"
)
def update_invoice(
     invoice_id: int,
     invoice_data: InvoiceUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """
     Update an existing invoice.

     Only provided fields are updated. Supplying any amount recomputes
     amount_total, balance_due and status (PAID once the balance is settled).
     """
     invoice = _get_invoice_or_404(db, invoice_id)
     changes = invoice_data.model_dump(exclude_unset=True)
     logger.info("Updating invoice %s with %s", invoice_id, changes)

     InvoiceService.apply_update(db, invoice, changes)
     db.commit()
     db.refresh(invoice)

     return {"success": True, "invoice": InvoiceResponse.model_validate(invoice)}


@router.post(
     "/{invoice_id}/void",
     response_model=InvoiceVoidResponse,
     summary="Void invoice"
)
def void_invoice(
     invoice_id: int,
     void_data: InvoiceVoidRequest,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """Mark an invoice VOID. A reason is required."""
     invoice = _get_invoice_or_404(db, invoice_id)
     try:
          InvoiceService.void_invoice(db, invoice, void_data.reason)
     except ValueError as e:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail=str(e)
          )
     db.commit()

     return {
          "success": True,
          "message": "Invoice voided successfully",
          "invoice": _build_invoice_detail(invoice),
          "void_reason": invoice.void_reason,
          "voided_at": invoice.voided_at,
     }
