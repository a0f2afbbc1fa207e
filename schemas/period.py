# schemas/period.py
"""
Schemas for the rent period map.

The request is loose on purpose so services.period_service can answer with
its own 400 messages.
"""
from datetime import date
from decimal import Decimal
from typing import Any, List, Optional
from pydantic import AliasChoices, BaseModel, Field


class PeriodMapRequest(BaseModel):
     lease_ids: Optional[List[Any]] = Field(None, validation_alias=AliasChoices("leaseIds", "lease_ids"))
     date_from: Optional[str] = Field(None, validation_alias=AliasChoices("from", "date_from"))
     date_to: Optional[str] = Field(None, validation_alias=AliasChoices("to", "date_to"))


class PeriodInvoiceRow(BaseModel):
     """An active rent period of a lease and the invoice billed for it, if any."""
     lease_id: int
     property_id: int
     tenant_id: int
     cadence: Optional[str] = None
     period_start: date
     period_end: date
     due_date: date
     invoice_id: Optional[int] = None
     billed_total: Decimal
     paid_to_rent: Decimal
     paid_to_late: Decimal
     balance_due: Decimal
     is_missing_invoice: bool


class PeriodMapResponse(BaseModel):
     rows: List[PeriodInvoiceRow] = []
