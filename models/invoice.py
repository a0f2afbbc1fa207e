import enum
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base


class InvoiceStatus(str, enum.Enum):
     """Enumeration for invoice payment status."""
     OPEN = "OPEN"
     PAID = "PAID"
     VOID = "VOID"


class Invoice(Base):
     """
     Invoice model - one billing period of a lease.

     amount_total, balance_due and status are derived from the component
     amounts and amount_paid; every write path recomputes them through
     services.invoice_service.
     """
     __tablename__ = "invoices"

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Foreign keys
     lease_id = Column(
          Integer,
          ForeignKey("leases.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=True, index=True)
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=True, index=True)

     # Billing period
     due_date = Column(Date, nullable=False, index=True)
     period_start = Column(Date, nullable=True)
     period_end = Column(Date, nullable=True)

     # Amounts
     amount_rent = Column(Numeric(12, 2), default=0, nullable=False)
     amount_late = Column(Numeric(12, 2), default=0, nullable=False)
     amount_other = Column(Numeric(12, 2), default=0, nullable=False)
     amount_total = Column(Numeric(12, 2), default=0, nullable=False)
     amount_paid = Column(Numeric(12, 2), default=0, nullable=False)
     balance_due = Column(Numeric(12, 2), default=0, nullable=False)

     status = Column(
          Enum(InvoiceStatus, name="invoice_status", create_constraint=True),
          default=InvoiceStatus.OPEN,
          nullable=False,
          index=True
     )
     paid_in_full_at = Column(DateTime, nullable=True)
     void_reason = Column(String(500), nullable=True)
     voided_at = Column(DateTime, nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Defined before the `property` relationship, which shadows the builtin below
     @property
     def is_void(self) -> bool:
          return self.status == InvoiceStatus.VOID

     # Relationships
     lease = relationship("Lease", back_populates="invoices")
     tenant = relationship("Tenant")
     property = relationship("Property")
     payments = relationship("Payment", back_populates="invoice")
     allocations = relationship("PaymentAllocation", back_populates="invoice", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Invoice(id={self.id}, total={self.amount_total}, status='{self.status.value}', due_date={self.due_date})>"
