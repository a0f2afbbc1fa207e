# routers/reports.py
"""
Read-only report routes: late tenants, dashboard metrics, profit metrics.
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import verify_token
from services.late_tenant_service import get_late_tenants
from services.metrics_service import get_dashboard_metrics, get_profit_metrics

router = APIRouter(prefix="/api", tags=["reports"])


@router.get("/late-tenants", summary="Leases with overdue invoices")
def late_tenants(
     today: Optional[date] = Query(None, description="Report date, defaults to today"),
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """
     Summary plus one row per lease with at least one late invoice,
     largest amount owed first.
     """
     return get_late_tenants(db, today)


@router.get("/dashboard/metrics", summary="Dashboard metrics")
def dashboard_metrics(
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     return get_dashboard_metrics(db)


@router.get("/profit/metrics", summary="Profit metrics for a month")
def profit_metrics(
     month: Optional[str] = Query(None, description="YYYY-MM, defaults to the current month"),
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     try:
          return get_profit_metrics(db, month)
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
