# schemas/invoice.py
"""
Pydantic schemas for Invoice API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_validator

from models.invoice import InvoiceStatus


class InvoiceCreate(BaseModel):
     """Schema for creating a new invoice; totals and status are derived."""
     lease_id: int = Field(..., gt=0, description="Lease ID (must exist)")
     tenant_id: Optional[int] = Field(None, gt=0, description="Defaults to the lease's tenant")
     property_id: Optional[int] = Field(None, gt=0, description="Defaults to the lease's property")
     due_date: date = Field(..., description="Payment due date")
     period_start: Optional[date] = None
     period_end: Optional[date] = None
     amount_rent: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
     amount_late: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
     amount_other: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
     amount_paid: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "lease_id": 1,
                    "due_date": "2025-08-01",
                    "period_start": "2025-08-01",
                    "period_end": "2025-08-31",
                    "amount_rent": 950.00,
                    "amount_late": 0,
                    "amount_other": 0
               }
          }
     )


class InvoiceUpdate(BaseModel):
     """
     Schema for updating an existing invoice.

     Supplying any amount recomputes amount_total, balance_due and status.
     """
     due_date: Optional[date] = None
     period_start: Optional[date] = None
     period_end: Optional[date] = None
     amount_rent: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     amount_late: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     amount_other: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     amount_paid: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "amount_paid": 500.00
               }
          }
     )

     @field_validator("due_date", "amount_rent", "amount_late", "amount_other", "amount_paid", mode="before")
     def reject_null(cls, v, info):
          if v is None:
               raise ValueError(f"{info.field_name} cannot be null")
          return v


class InvoiceVoidRequest(BaseModel):
     reason: str = Field("", description="Why the invoice is being voided")


class InvoiceResponse(BaseModel):
     """Schema for invoice response."""
     id: int
     lease_id: int
     tenant_id: Optional[int] = None
     property_id: Optional[int] = None
     due_date: date
     period_start: Optional[date] = None
     period_end: Optional[date] = None
     amount_rent: Decimal
     amount_late: Decimal
     amount_other: Decimal
     amount_total: Decimal
     amount_paid: Decimal
     balance_due: Decimal
     status: InvoiceStatus
     paid_in_full_at: Optional[datetime] = None
     void_reason: Optional[str] = None
     voided_at: Optional[datetime] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class InvoiceDetailResponse(InvoiceResponse):
     """Invoice joined with tenant and property attributes."""
     tenant_name: Optional[str] = None
     tenant_email: Optional[str] = None
     tenant_phone: Optional[str] = None
     property_name: Optional[str] = None
     property_address: Optional[str] = None
     property_city: Optional[str] = None
     property_state: Optional[str] = None
     property_zip: Optional[str] = None


class InvoiceAllocation(BaseModel):
     """A payment applied to an invoice."""
     paymentId: int
     amount: Decimal
     receivedAt: date
     memo: Optional[str] = None


class InvoiceWithAllocationsResponse(BaseModel):
     invoice: InvoiceDetailResponse
     allocations: List[InvoiceAllocation] = []


class InvoiceUpdateResponse(BaseModel):
     success: bool = True
     invoice: InvoiceResponse


class InvoiceVoidResponse(BaseModel):
     success: bool = True
     message: str = "Invoice voided successfully"
     invoice: InvoiceDetailResponse
     void_reason: str
     voided_at: datetime


class PeriodInvoiceResponse(BaseModel):
     """One billing period of a lease and the invoice covering it."""
     lease_id: int
     property_id: Optional[int] = None
     tenant_id: Optional[int] = None
     invoice_id: int
     period_start: Optional[date] = None
     period_end: Optional[date] = None
     period_due_date: date
     billed_total: Decimal
     amount_paid: Decimal
     balance_due: Decimal
     status: InvoiceStatus
