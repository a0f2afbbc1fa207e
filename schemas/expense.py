# schemas/expense.py
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator


class ExpenseBase(BaseModel):
     property_id: Optional[int] = Field(None, gt=0)
     category: Optional[str] = Field(None, max_length=100)
     description: Optional[str] = None
     amount_owed: Optional[Decimal] = Field(None, ge=0)
     interest_rate: Optional[Decimal] = None
     last_paid_date: Optional[date] = None


class ExpenseCreate(ExpenseBase):
     amount: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
     is_one_time: bool = False


class ExpenseUpdate(ExpenseBase):
     amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     is_one_time: Optional[bool] = None

     @field_validator("amount", "is_one_time", mode="before")
     def reject_null(cls, v, info):
          if v is None:
               raise ValueError(f"{info.field_name} cannot be null")
          return v


class ExpenseResponse(ExpenseBase):
     id: int
     amount: Decimal
     is_one_time: bool
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)
