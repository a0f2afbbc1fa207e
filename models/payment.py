from sqlalchemy import Column, Integer, String, Numeric, Date, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class Payment(Base):
     """
     Payment model - money received from a tenant against a lease.
     Table name is derived by Base: payments.
     """

     id = Column(Integer, primary_key=True, autoincrement=True)
     lease_id = Column(Integer, ForeignKey("leases.id", ondelete="CASCADE"), nullable=False, index=True)
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=True, index=True)
     tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False, index=True)
     invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=True, index=True)

     payment_date = Column(Date, nullable=False, index=True)
     amount = Column(Numeric(12, 2), nullable=False)
     payment_type = Column(String(50), default="Rent", nullable=False)
     payment_method = Column(String(50), default="Manual Entry", nullable=True)
     status = Column(String(20), default="completed", nullable=False)
     notes = Column(Text, nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     lease = relationship("Lease", back_populates="payments")
     tenant = relationship("Tenant")
     property = relationship("Property")
     invoice = relationship("Invoice", back_populates="payments")
     allocations = relationship("PaymentAllocation", back_populates="payment", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Payment(id={self.id}, lease_id={self.lease_id}, amount={self.amount})>"
