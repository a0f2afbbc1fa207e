# schemas/tenant.py
"""
Pydantic schemas for Tenant API request/response validation.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

from schemas.property import PropertyResponse


class TenantBase(BaseModel):
     property_id: Optional[int] = Field(None, gt=0)
     email: Optional[str] = Field(None, max_length=255)
     phone: Optional[str] = Field(None, max_length=50)
     is_active: Optional[bool] = None
     notes: Optional[str] = None


class TenantCreate(TenantBase):
     """Schema for creating a new tenant."""
     first_name: str = Field(..., min_length=1, max_length=100)
     last_name: str = Field(..., min_length=1, max_length=100)
     is_active: bool = True


class TenantUpdate(TenantBase):
     first_name: Optional[str] = Field(None, min_length=1, max_length=100)
     last_name: Optional[str] = Field(None, min_length=1, max_length=100)

     @field_validator("first_name", "last_name", "is_active", mode="before")
     def reject_null(cls, v, info):
          if v is None:
               raise ValueError(f"{info.field_name} cannot be null")
          return v


class TenantResponse(TenantBase):
     """Schema for tenant response."""
     id: int
     first_name: str
     last_name: str
     full_name: str
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class TenantWithPropertyResponse(TenantResponse):
     property: Optional[PropertyResponse] = None
