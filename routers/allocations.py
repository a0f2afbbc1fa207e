# routers/allocations.py
"""
Manual payment allocation: apply parts of a recorded payment to invoices
chosen by the user.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import verify_token
from schemas.payment import ManualAllocationRequest, ManualAllocationResponse
from services.payment_service import apply_manual_allocations

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/allocations", tags=["allocations"])


@router.post(
     "/manual",
     response_model=ManualAllocationResponse,
     summary="Allocate a payment to invoices by hand"
)
def manual_allocation(
     request: ManualAllocationRequest,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     items = None
     if request.allocations is not None:
          items = [item.model_dump() for item in request.allocations]
     try:
          payment, invoices, allocations = apply_manual_allocations(db, request.payment_id, items)
     except LookupError as e:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

     db.commit()
     return {
          "success": True,
          "payment": payment,
          "invoices": invoices,
          "allocations": allocations,
     }
