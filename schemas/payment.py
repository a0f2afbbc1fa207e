# schemas/payment.py
"""
Pydantic schemas for payment API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import AliasChoices, BaseModel, Field, ConfigDict, field_validator

from schemas.invoice import InvoiceResponse


class PaymentCreate(BaseModel):
     """
     Request body for POST /api/payments.

     Accepts both snake_case and camelCase keys (tenant_id / tenantId, ...).
     """
     tenant_id: int = Field(..., gt=0, validation_alias=AliasChoices("tenant_id", "tenantId"))
     lease_id: int = Field(..., gt=0, validation_alias=AliasChoices("lease_id", "leaseId"))
     property_id: Optional[int] = Field(None, gt=0, validation_alias=AliasChoices("property_id", "propertyId"))
     invoice_id: Optional[int] = Field(None, gt=0, validation_alias=AliasChoices("invoice_id", "invoiceId"))
     amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Amount received")
     payment_date: Optional[date] = Field(
          None,
          validation_alias=AliasChoices("payment_date", "receivedAt"),
          description="Defaults to today",
     )
     payment_type: str = Field("Rent", max_length=50, validation_alias=AliasChoices("payment_type", "paymentType"))
     notes: Optional[str] = Field(None, validation_alias=AliasChoices("notes", "memo"))

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "tenant_id": 1,
                    "lease_id": 1,
                    "amount": 200.00,
                    "payment_date": "2025-08-01",
                    "payment_type": "Rent",
               }
          }
     )


class PaymentUpdate(BaseModel):
     payment_date: Optional[date] = None
     amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     payment_type: Optional[str] = Field(None, max_length=50)
     notes: Optional[str] = None

     @field_validator("payment_date", "amount", "payment_type", mode="before")
     def reject_null(cls, v, info):
          if v is None:
               raise ValueError(f"{info.field_name} cannot be null")
          return v


class PaymentResponse(BaseModel):
     id: int
     lease_id: int
     property_id: Optional[int] = None
     tenant_id: int
     invoice_id: Optional[int] = None
     payment_date: date
     amount: Decimal
     payment_type: str
     payment_method: Optional[str] = None
     status: str
     notes: Optional[str] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class PaymentDetailResponse(PaymentResponse):
     """Payment joined with tenant, property and lease attributes."""
     tenant_name: Optional[str] = None
     tenant_email: Optional[str] = None
     property_name: Optional[str] = None
     property_address: Optional[str] = None
     lease_rent: Optional[Decimal] = None
     lease_status: Optional[str] = None


class PaymentAllocationResponse(BaseModel):
     invoice_id: int
     amount_applied: Decimal
     balance_due: Decimal
     status: str


class PaymentCreateResponse(BaseModel):
     payment: PaymentResponse
     allocations: List[PaymentAllocationResponse] = []
     unapplied: Decimal = Decimal("0")


class PaymentUpdateResponse(BaseModel):
     success: bool = True
     payment: PaymentResponse


class PeriodPaymentInvoice(BaseModel):
     id: int
     dueDate: date
     periodStart: Optional[date] = None
     periodEnd: Optional[date] = None
     amountTotal: float
     amountPaid: float
     balanceDue: float


class PeriodPayment(BaseModel):
     """Payment row as shown in the period payment modal."""
     id: int
     amount: float
     date: date
     method: str
     type: str
     notes: Optional[str] = None
     status: str
     createdAt: Optional[datetime] = None
     invoiceId: Optional[int] = None
     invoice: Optional[PeriodPaymentInvoice] = None


class PeriodPaymentsResponse(BaseModel):
     success: bool = True
     payments: List[PeriodPayment]


class PropertyPaymentsSummary(BaseModel):
     totalPayments: int
     totalAmount: float


class PropertyPaymentsResponse(BaseModel):
     success: bool = True
     payments: List[PaymentResponse]
     summary: PropertyPaymentsSummary


class ManualAllocationItem(BaseModel):
     invoice_id: Optional[int] = Field(None, validation_alias=AliasChoices("invoice_id", "invoiceId"))
     amount: Optional[Decimal] = None


class ManualAllocationRequest(BaseModel):
     # Optional here; the service reports missing values with its own messages
     payment_id: Optional[int] = Field(None, validation_alias=AliasChoices("payment_id", "paymentId"))
     allocations: Optional[List[ManualAllocationItem]] = None


class AllocationRecordResponse(BaseModel):
     id: int
     payment_id: int
     invoice_id: int
     amount: Decimal
     applied_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class ManualAllocationResponse(BaseModel):
     success: bool = True
     payment: PaymentResponse
     invoices: List[InvoiceResponse] = []
     allocations: List[AllocationRecordResponse] = []
