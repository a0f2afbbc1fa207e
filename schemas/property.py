# schemas/property.py
"""
Pydantic schemas for Property API request/response validation.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

from models.property import PropertyType


class PropertyBase(BaseModel):
     address: Optional[str] = Field(None, max_length=255)
     city: Optional[str] = Field(None, max_length=100)
     state: Optional[str] = Field(None, max_length=50)
     zip_code: Optional[str] = Field(None, max_length=20)
     property_type: Optional[PropertyType] = None
     rent_value: Optional[Decimal] = Field(None, ge=0, description="Potential monthly rent when vacant")
     insurance_premium: Optional[Decimal] = Field(None, ge=0)
     property_tax: Optional[Decimal] = Field(None, ge=0)
     notes: Optional[str] = None


class PropertyCreate(PropertyBase):
     """Schema for creating a new property."""
     name: str = Field(..., min_length=1, max_length=255)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "609 Capps",
                    "address": "609 Capps St",
                    "city": "Cowpens",
                    "state": "SC",
                    "zip_code": "29330",
                    "property_type": "house",
                    "rent_value": 950.00,
                    "insurance_premium": 1200.00,
                    "property_tax": 640.00
               }
          }
     )


class PropertyUpdate(PropertyBase):
     """Schema for updating a property; only provided fields change."""
     name: Optional[str] = Field(None, min_length=1, max_length=255)

     @field_validator("name", mode="before")
     def reject_null(cls, v, info):
          if v is None:
               raise ValueError(f"{info.field_name} cannot be null")
          return v


class PropertyResponse(PropertyBase):
     """Schema for property response."""
     id: int
     name: str
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)
