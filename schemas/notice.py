# schemas/notice.py
from decimal import Decimal
from typing import Optional
from pydantic import AliasChoices, BaseModel, Field


class NoticeRequest(BaseModel):
     invoice_id: Optional[int] = Field(None, validation_alias=AliasChoices("invoice_id", "invoiceId"))
     lease_id: Optional[int] = Field(None, validation_alias=AliasChoices("lease_id", "leaseId"))
     send_email: bool = Field(False, validation_alias=AliasChoices("send_email", "sendEmail"))


class NoticeResponse(BaseModel):
     noticeTitle: str
     noticeContent: str
     state: str
     totalDue: Decimal
     deadline: str
     emailedTo: Optional[str] = None
