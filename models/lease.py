import enum
from datetime import date
from typing import Optional

from sqlalchemy import Column, Integer, String, Numeric, Date, Text, DateTime, ForeignKey, func, or_
from sqlalchemy.orm import relationship
from .base import Base


class LeaseStatus(str, enum.Enum):
     ACTIVE = "active"
     INACTIVE = "inactive"
     TERMINATED = "terminated"


class Lease(Base):
     """
     Lease model - rental agreement between a tenant and a property.

     rent_cadence is free text as entered by the user ("Weekly", "bi-weekly",
     "every 2 weeks", ...); see utils.cadence.normalize_cadence.
     """
     __tablename__ = "leases"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False, index=True)

     # Pricing
     rent = Column(Numeric(12, 2), nullable=False)
     rent_cadence = Column(String(50), nullable=True)
     late_fee_amount = Column(Numeric(10, 2), nullable=True)

     # Lease period
     lease_start_date = Column(Date, nullable=False)
     lease_end_date = Column(Date, nullable=True)  # NULL = open-ended

     status = Column(String(20), default=LeaseStatus.ACTIVE.value, nullable=False, index=True)
     rent_due_day = Column(Integer, nullable=True)
     grace_days = Column(Integer, nullable=True)
     notes = Column(Text, nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     property = relationship("Property", back_populates="leases")
     tenant = relationship("Tenant", back_populates="leases")
     invoices = relationship("Invoice", back_populates="lease", cascade="all, delete-orphan")
     payments = relationship("Payment", back_populates="lease", cascade="all, delete-orphan")
     late_fee_waivers = relationship("LateFeeWaiver", back_populates="lease", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Lease(id={self.id}, tenant_id={self.tenant_id}, property_id={self.property_id})>"

     def in_term(self, on: date, open_end: Optional[date] = None) -> bool:
          """
          True when `on` falls between the start and end dates, inclusive.

          Status is not considered. An open-ended lease runs until `open_end`
          when given, otherwise indefinitely.
          """
          if self.lease_start_date is None or self.lease_start_date > on:
               return False
          end = self.lease_end_date or open_end
          return end is None or end >= on

     @classmethod
     def occupying_filter(cls, on: Optional[date] = None):
          """SQL criteria matching active leases in effect on the given date."""
          on = on or date.today()
          return (
               cls.status == LeaseStatus.ACTIVE.value,
               cls.lease_start_date <= on,
               or_(cls.lease_end_date.is_(None), cls.lease_end_date >= on),
          )
