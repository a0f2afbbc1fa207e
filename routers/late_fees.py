# routers/late_fees.py
"""
Late-fee adjustment routes.

Services raise ValueError for bad input (400) and LookupError for unknown
ids (404).
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import verify_token
from services import late_fee_service
from schemas.late_fee import (
     MoveLateFeeRequest,
     WaiveLateFeeRequest,
     RemoveAllLateFeesRequest,
     RemoveLeaseLateFeesRequest,
)

router = APIRouter(prefix="/api/late-fees", tags=["late-fees"])


def _run(db: Session, operation, *args, **kwargs):
     try:
          result = operation(db, *args, **kwargs)
     except LookupError as e:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
     db.commit()
     return result


@router.post("/move", summary="Set the late fee on an invoice")
def move_late_fee(
     body: MoveLateFeeRequest,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     return _run(db, late_fee_service.move_late_fee, body.invoice_id, body.new_amount)


@router.post("/waive", summary="Waive late fees for a lease or an invoice")
def waive_late_fees(
     body: WaiveLateFeeRequest,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     waived_by = str(token.get("id") or "system")
     return _run(
          db,
          late_fee_service.waive_late_fees,
          invoice_id=body.invoice_id,
          lease_id=body.lease_id,
          current_date=body.current_date,
          waived_by=waived_by,
     )


@router.post("/remove-all", summary="Remove late fees from every invoice due by a date")
def remove_all_late_fees(
     body: RemoveAllLateFeesRequest,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     return _run(db, late_fee_service.remove_all_late_fees, body.current_date)


@router.post("/remove-lease", summary="Remove late fees from one lease's invoices due by a date")
def remove_lease_late_fees(
     body: RemoveLeaseLateFeesRequest,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     return _run(db, late_fee_service.remove_lease_late_fees, body.lease_id, body.current_date)
