# routers/payments.py
"""
Payment API routes.

POST records the payment and applies it to the lease's invoices; see
services.payment_service for the allocation order.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Optional, List
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, joinedload

from database import get_session
from dependencies import verify_token
from models import Payment
from services.payment_service import record_payment, allocate_payment
from utils.currency import safe_decimal, safe_numeric
from schemas.payment import (
     PaymentCreate,
     PaymentUpdate,
     PaymentResponse,
     PaymentDetailResponse,
     PaymentCreateResponse,
     PaymentUpdateResponse,
     PeriodPaymentsResponse,
     PropertyPaymentsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payments", tags=["payments"])


def _get_payment_or_404(db: Session, payment_id: int) -> Payment:
     payment = db.query(Payment).filter(Payment.id == payment_id).first()
     if not payment:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Payment not found"
          )
     return payment


def _build_payment_detail(payment: Payment) -> PaymentDetailResponse:
     detail = PaymentDetailResponse.model_validate(payment)
     if payment.tenant:
          detail.tenant_name = payment.tenant.full_name
          detail.tenant_email = payment.tenant.email
     if payment.property:
          detail.property_name = payment.property.name
          detail.property_address = payment.property.address
     if payment.lease:
          detail.lease_rent = payment.lease.rent
          detail.lease_status = payment.lease.status
     return detail


@router.get(
     "",
     response_model=List[PaymentDetailResponse],
     summary="List payments with filters"
)
def list_payments(
     tenant_id: Optional[int] = Query(None, description="Filter by tenant ID"),
     lease_id: Optional[int] = Query(None, description="Filter by lease ID"),
     property_id: Optional[int] = Query(None, description="Filter by property ID"),
     invoice_id: Optional[int] = Query(None, description="Filter by invoice ID"),
     date_from: Optional[date] = Query(None, alias="from", description="Earliest payment date"),
     date_to: Optional[date] = Query(None, alias="to", description="Latest payment date"),
     limit: Optional[int] = Query(None, ge=1, le=1000, description="Maximum rows"),
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """Payments, most recent first, with tenant, property and lease details."""
     query = db.query(Payment).options(
          joinedload(Payment.tenant),
          joinedload(Payment.property),
          joinedload(Payment.lease),
     )

     if tenant_id:
          query = query.filter(Payment.tenant_id == tenant_id)
     if lease_id:
          query = query.filter(Payment.lease_id == lease_id)
     if property_id:
          query = query.filter(Payment.property_id == property_id)
     if invoice_id:
          query = query.filter(Payment.invoice_id == invoice_id)
     if date_from:
          query = query.filter(Payment.payment_date >= date_from)
     if date_to:
          query = query.filter(Payment.payment_date <= date_to)

     query = query.order_by(Payment.payment_date.desc(), Payment.id.desc())
     if limit:
          query = query.limit(limit)
     return [_build_payment_detail(p) for p in query.all()]


@router.post(
     "",
     response_model=PaymentCreateResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Record a payment"
)
def create_payment(
     payment_data: PaymentCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """
     Record a payment and apply it.

     - With **invoice_id**: the whole amount goes to that invoice
     - Without: oldest OPEN invoices of the lease are paid off first
     """
     try:
          payment = record_payment(db, payment_data.model_dump())
          allocations, unapplied = allocate_payment(db, payment)
     except LookupError as e:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail=str(e)
          )
     except ValueError as e:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail=str(e)
          )
     db.commit()
     db.refresh(payment)

     return {
          "payment": PaymentResponse.model_validate(payment),
          "allocations": allocations,
          "unapplied": unapplied,
     }


@router.get(
     "/by-period",
     response_model=PeriodPaymentsResponse,
     summary="Get a lease's payments for a billing period"
)
def get_payments_by_period(
     lease_id: Optional[int] = Query(None, description="Lease ID"),
     period_start: Optional[date] = Query(None, description="Period start"),
     period_end: Optional[date] = Query(None, description="Period end"),
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     if not lease_id or not period_start or not period_end:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="Missing required parameters: lease_id, period_start, period_end"
          )

     payments = (
          db.query(Payment)
          .options(joinedload(Payment.invoice))
          .filter(
               Payment.lease_id == lease_id,
               Payment.payment_date >= period_start,
               Payment.payment_date <= period_end,
          )
          .order_by(Payment.payment_date.desc(), Payment.id.desc())
          .all()
     )

     rows = []
     for p in payments:
          invoice = None
          if p.invoice:
               invoice = {
                    "id": p.invoice.id,
                    "dueDate": p.invoice.due_date,
                    "periodStart": p.invoice.period_start,
                    "periodEnd": p.invoice.period_end,
                    "amountTotal": safe_numeric(p.invoice.amount_total),
                    "amountPaid": safe_numeric(p.invoice.amount_paid),
                    "balanceDue": safe_numeric(p.invoice.balance_due),
               }
          rows.append({
               "id": p.id,
               "amount": safe_numeric(p.amount),
               "date": p.payment_date,
               "method": p.payment_method or "Unknown",
               "type": p.payment_type,
               "notes": p.notes,
               "status": p.status,
               "createdAt": p.created_at,
               "invoiceId": p.invoice_id,
               "invoice": invoice,
          })
     return {"success": True, "payments": rows}


@router.get(
     "/by-property",
     response_model=PropertyPaymentsResponse,
     summary="Get a property's payments"
)
def get_payments_by_property(
     property_id: Optional[int] = Query(None, description="Property ID"),
     start_date: Optional[date] = Query(None, description="Earliest payment date"),
     end_date: Optional[date] = Query(None, description="Latest payment date"),
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     if not property_id:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="Property ID is required"
          )

     query = db.query(Payment).filter(Payment.property_id == property_id)
     if start_date:
          query = query.filter(Payment.payment_date >= start_date)
     if end_date:
          query = query.filter(Payment.payment_date <= end_date)
     payments = query.order_by(Payment.payment_date.desc(), Payment.id.desc()).all()

     total = sum((safe_decimal(p.amount) for p in payments), Decimal("0"))
     return {
          "success": True,
          "payments": payments,
          "summary": {"totalPayments": len(payments), "totalAmount": float(total)},
     }


@router.put(
     "/{payment_id}",
     response_model=PaymentUpdateResponse,
     summary="Update payment"
)
def update_payment(
     payment_id: int,
     payment_data: PaymentUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """Edits the payment record only; invoice allocations are not redone."""
     payment = _get_payment_or_404(db, payment_id)
     changes = payment_data.model_dump(exclude_unset=True)
     if not changes:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="No fields to update"
          )
     for field, value in changes.items():
          setattr(payment, field, value)
     db.commit()
     db.refresh(payment)
     logger.info("Updated payment %s", payment_id)
     return {"success": True, "payment": PaymentResponse.model_validate(payment)}


@router.delete(
     "/{payment_id}",
     summary="Delete payment"
)
def delete_payment(
     payment_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     payment = _get_payment_or_404(db, payment_id)
     db.delete(payment)
     db.commit()
     logger.info("Deleted payment %s", payment_id)
     return {"success": True, "message": "Payment deleted successfully"}
