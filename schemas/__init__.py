# schemas/__init__.py
from .property import PropertyCreate, PropertyUpdate, PropertyResponse
from .tenant import TenantCreate, TenantUpdate, TenantResponse, TenantWithPropertyResponse
from .lease import LeaseCreate, LeaseUpdate, LeaseResponse
from .invoice import (
     InvoiceCreate,
     InvoiceUpdate,
     InvoiceVoidRequest,
     InvoiceResponse,
     InvoiceDetailResponse,
)
from .payment import PaymentCreate, PaymentUpdate, PaymentResponse
from .expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse

__all__ = [
     "PropertyCreate",
     "PropertyUpdate",
     "PropertyResponse",
     "TenantCreate",
     "TenantUpdate",
     "TenantResponse",
     "TenantWithPropertyResponse",
     "LeaseCreate",
     "LeaseUpdate",
     "LeaseResponse",
     "InvoiceCreate",
     "InvoiceUpdate",
     "InvoiceVoidRequest",
     "InvoiceResponse",
     "InvoiceDetailResponse",
     "PaymentCreate",
     "PaymentUpdate",
     "PaymentResponse",
     "ExpenseCreate",
     "ExpenseUpdate",
     "ExpenseResponse",
]
