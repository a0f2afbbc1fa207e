# schemas/lease.py
"""
Pydantic schemas for Lease API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

from models.lease import LeaseStatus
from schemas.property import PropertyResponse
from schemas.tenant import TenantResponse


class LeaseBase(BaseModel):
     model_config = ConfigDict(use_enum_values=True)

     rent_cadence: Optional[str] = Field(None, max_length=50, description="Free text, e.g. 'Weekly' or 'bi-weekly'")
     lease_end_date: Optional[date] = Field(None, description="Leave empty for an open-ended lease")
     rent_due_day: Optional[int] = Field(None, ge=0, le=31)
     grace_days: Optional[int] = Field(None, ge=0)
     late_fee_amount: Optional[Decimal] = Field(None, ge=0)
     notes: Optional[str] = None


class LeaseCreate(LeaseBase):
     """Schema for creating a new lease."""
     property_id: int = Field(..., gt=0)
     tenant_id: int = Field(..., gt=0)
     rent: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
     lease_start_date: date
     status: LeaseStatus = LeaseStatus.ACTIVE

     model_config = ConfigDict(
          use_enum_values=True,
          json_schema_extra={
               "example": {
                    "property_id": 1,
                    "tenant_id": 1,
                    "rent": 200.00,
                    "rent_cadence": "weekly",
                    "lease_start_date": "2025-07-01",
                    "lease_end_date": None,
                    "rent_due_day": 5,
                    "grace_days": 3,
                    "late_fee_amount": 25.00
               }
          }
     )


class LeaseUpdate(LeaseBase):
     property_id: Optional[int] = Field(None, gt=0)
     tenant_id: Optional[int] = Field(None, gt=0)
     rent: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     lease_start_date: Optional[date] = None
     status: Optional[LeaseStatus] = None

     @field_validator("property_id", "tenant_id", "rent", "lease_start_date", "status", mode="before")
     def reject_null(cls, v, info):
          if v is None:
               raise ValueError(f"{info.field_name} cannot be null")
          return v


class LateFeeWaiverResponse(BaseModel):
     """A date on which late fees were waived for the lease."""
     lease_id: int
     waiver_date: date
     waived_at: Optional[datetime] = None
     waived_by: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)


class LeaseResponse(LeaseBase):
     """Schema for lease response, with the property and tenant embedded."""
     id: int
     property_id: int
     tenant_id: int
     rent: Decimal
     lease_start_date: date
     status: str
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     property: Optional[PropertyResponse] = None
     tenant: Optional[TenantResponse] = None
     late_fee_waivers: List[LateFeeWaiverResponse] = []

     model_config = ConfigDict(from_attributes=True, use_enum_values=True)
