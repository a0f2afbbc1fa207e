from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class PaymentAllocation(Base):
     """
     PaymentAllocation model - the part of a payment applied to one invoice.

     The allocations of a payment never add up to more than its amount.
     """

     id = Column(Integer, primary_key=True, autoincrement=True)
     payment_id = Column(Integer, ForeignKey("payments.id", ondelete="CASCADE"), nullable=False, index=True)
     invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False, index=True)

     amount = Column(Numeric(12, 2), nullable=False)
     applied_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     payment = relationship("Payment", back_populates="allocations")
     invoice = relationship("Invoice", back_populates="allocations")

     def __repr__(self):
          return f"<PaymentAllocation(payment_id={self.payment_id}, invoice_id={self.invoice_id}, amount={self.amount})>"
