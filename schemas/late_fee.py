# schemas/late_fee.py
"""
Request bodies for the late-fee adjustment endpoints.

Fields are optional at the schema level; the routes report missing values
with their own 400 messages.
"""
from datetime import date
from decimal import Decimal
from typing import Optional, Union
from pydantic import AliasChoices, BaseModel, Field


class MoveLateFeeRequest(BaseModel):
     # "virtual-..." ids refer to periods the UI shows without a stored invoice
     invoice_id: Optional[Union[int, str]] = Field(None, validation_alias=AliasChoices("invoice_id", "invoiceId"))
     new_amount: Optional[Decimal] = Field(None, validation_alias=AliasChoices("new_amount", "newAmount"))


class WaiveLateFeeRequest(BaseModel):
     invoice_id: Optional[int] = Field(None, validation_alias=AliasChoices("invoice_id", "invoiceId"))
     lease_id: Optional[int] = Field(None, validation_alias=AliasChoices("lease_id", "leaseId"))
     current_date: Optional[date] = Field(None, validation_alias=AliasChoices("current_date", "currentDate"))


class RemoveAllLateFeesRequest(BaseModel):
     current_date: Optional[date] = Field(None, validation_alias=AliasChoices("current_date", "currentDate"))


class RemoveLeaseLateFeesRequest(BaseModel):
     lease_id: Optional[int] = Field(None, validation_alias=AliasChoices("lease_id", "leaseId"))
     current_date: Optional[date] = Field(None, validation_alias=AliasChoices("current_date", "currentDate"))
