from sqlalchemy import Column, Integer, String, Boolean, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class Tenant(Base):
     """
     Tenant model - a person renting (or buying on terms) one of the properties.
     """
     __tablename__ = "tenants"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="SET NULL"), nullable=True)

     # Personal info
     first_name = Column(String(100), nullable=False)
     last_name = Column(String(100), nullable=False)
     email = Column(String(255), nullable=True)
     phone = Column(String(50), nullable=True)

     is_active = Column(Boolean, default=True, nullable=False)
     notes = Column(Text, nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Defined before the `property` relationship, which shadows the builtin below
     @property
     def full_name(self) -> str:
          return f"{self.first_name or ''} {self.last_name or ''}".strip()

     # Relationships
     property = relationship("Property", back_populates="tenants")
     leases = relationship("Lease", back_populates="tenant")

     def __repr__(self):
          return f"<Tenant(id={self.id}, name='{self.full_name}')>"
