"""
LateFeeWaiver model - late fees waived for a lease on a given date.

One row per (lease, date); waiving the same date twice refreshes the row.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from .base import Base


class LateFeeWaiver(Base):
     __table_args__ = (
          UniqueConstraint("lease_id", "waiver_date", name="uq_late_fee_waivers_lease_date"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     lease_id = Column(
          Integer,
          ForeignKey("leases.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     waiver_date = Column(Date, nullable=False)
     waived_at = Column(DateTime, server_default=func.now(), nullable=False)
     waived_by = Column(String(100), default="system", nullable=False)

     # Relationships
     lease = relationship("Lease", back_populates="late_fee_waivers")

     def __repr__(self):
          return f"<LateFeeWaiver(lease_id={self.lease_id}, waiver_date={self.waiver_date})>"
