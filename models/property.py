import enum
from sqlalchemy import Column, Integer, String, Numeric, Text, DateTime, Enum, func
from sqlalchemy.orm import relationship
from .base import Base


class PropertyType(str, enum.Enum):
     """Kinds of property in the portfolio."""
     HOUSE = "house"
     DOUBLEWIDE = "doublewide"
     SINGLEWIDE = "singlewide"
     LOAN = "loan"


class Property(Base):
     """
     Property model - a rentable house, mobile home or owner-financed loan.
     """
     __tablename__ = "properties"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(255), nullable=False)

     # Address
     address = Column(String(255), nullable=True)
     city = Column(String(100), nullable=True)
     state = Column(String(50), nullable=True)
     zip_code = Column(String(20), nullable=True)

     property_type = Column(
          Enum(PropertyType, name="property_type", values_callable=lambda e: [m.value for m in e]),
          nullable=True,
     )

     # Potential monthly rent while vacant
     rent_value = Column(Numeric(12, 2), nullable=True)
     # Annual carrying costs
     insurance_premium = Column(Numeric(12, 2), nullable=True)
     property_tax = Column(Numeric(12, 2), nullable=True)

     notes = Column(Text, nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     leases = relationship("Lease", back_populates="property")
     tenants = relationship("Tenant", back_populates="property")

     def __repr__(self):
          return f"<Property(id={self.id}, name='{self.name}')>"
