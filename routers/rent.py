# routers/rent.py
"""
Rent period routes: the period/invoice map and the Friday payments grid.
"""
import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import verify_token
from schemas.period import PeriodMapRequest, PeriodMapResponse
from services.period_service import get_payment_grid, get_period_map, validate_period_map_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/rent", tags=["rent"])


@router.post(
     "/period-map",
     response_model=PeriodMapResponse,
     summary="Map the rent periods of leases to their invoices"
)
def period_map(
     request: PeriodMapRequest,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """
     One row per active rent period of each lease between `from` and `to`.
     At most 500 leases and 18 months per request.
     """
     try:
          lease_ids, date_from, date_to = validate_period_map_request(
               request.lease_ids, request.date_from, request.date_to
          )
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
     return {"rows": get_period_map(db, lease_ids, date_from, date_to)}


@router.get("/payments/grid", summary="Friday payments grid for active leases")
def payments_grid(
     range_start: Optional[date] = Query(None, alias="rangeStart"),
     range_end: Optional[date] = Query(None, alias="rangeEnd"),
     week_offset: int = Query(0, alias="weekOffset", description="Shift the default range by blocks of four weeks"),
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     try:
          return get_payment_grid(db, range_start, range_end, week_offset)
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
