from sqlalchemy import Column, Integer, String, Numeric, Date, Boolean, Text, DateTime, ForeignKey, func
from .base import Base


class Expense(Base):
     """
     Expense model - recurring carrying costs (mortgage, loan payments) and
     one-time expenses such as repairs.
     """

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="SET NULL"), nullable=True, index=True)

     category = Column(String(100), nullable=True)
     description = Column(Text, nullable=True)
     amount = Column(Numeric(12, 2), default=0, nullable=False)
     amount_owed = Column(Numeric(12, 2), nullable=True)
     interest_rate = Column(Numeric(7, 4), nullable=True)
     last_paid_date = Column(Date, nullable=True, index=True)
     is_one_time = Column(Boolean, default=False, nullable=False)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     def __repr__(self):
          return f"<Expense(id={self.id}, category='{self.category}', amount={self.amount})>"
