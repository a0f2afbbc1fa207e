# models/__init__.py
from .base import Base
from .property import Property, PropertyType
from .tenant import Tenant
from .lease import Lease, LeaseStatus
from .invoice import Invoice, InvoiceStatus
from .payment import Payment
from .payment_allocation import PaymentAllocation
from .expense import Expense
from .late_fee_waiver import LateFeeWaiver

__all__ = [
     "Base",
     "Property",
     "PropertyType",
     "Tenant",
     "Lease",
     "LeaseStatus",
     "Invoice",
     "InvoiceStatus",
     "Payment",
     "PaymentAllocation",
     "Expense",
     "LateFeeWaiver",
]
