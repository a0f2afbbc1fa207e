# routers/leases.py
"""
Lease API routes.

Leases are returned with their property and tenant embedded.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload, selectinload

from database import get_session
from dependencies import verify_token
from models import Lease, Property, Tenant
from schemas.lease import LeaseCreate, LeaseUpdate, LeaseResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/leases", tags=["leases"])


def _lease_query(db: Session):
     return db.query(Lease).options(
          joinedload(Lease.property),
          joinedload(Lease.tenant),
          selectinload(Lease.late_fee_waivers),
     )


def _get_lease_or_404(db: Session, lease_id: int) -> Lease:
     lease = _lease_query(db).filter(Lease.id == lease_id).first()
     if not lease:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Lease not found"
          )
     return lease


def _check_parties(db: Session, property_id, tenant_id) -> None:
     if property_id is not None and not db.query(Property).filter(Property.id == property_id).first():
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Property not found"
          )
     if tenant_id is not None and not db.query(Tenant).filter(Tenant.id == tenant_id).first():
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Tenant not found"
          )


def _check_dates(start, end) -> None:
     if start and end and end < start:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="Lease end date cannot be before the start date"
          )


@router.get(
     "",
     response_model=List[LeaseResponse],
     summary="List all leases"
)
def list_leases(
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     return _lease_query(db).order_by(Lease.created_at.desc(), Lease.id.desc()).all()


@router.post(
     "",
     response_model=LeaseResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new lease"
)
def create_lease(
     lease_data: LeaseCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     _check_parties(db, lease_data.property_id, lease_data.tenant_id)
     _check_dates(lease_data.lease_start_date, lease_data.lease_end_date)

     lease = Lease(**lease_data.model_dump(exclude_unset=True))
     db.add(lease)
     db.commit()
     logger.info("Created lease %s (property %s, tenant %s)", lease.id, lease.property_id, lease.tenant_id)
     return _get_lease_or_404(db, lease.id)


@router.get(
     "/{lease_id}",
     response_model=LeaseResponse,
     summary="Get lease by ID"
)
def get_lease(
     lease_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     return _get_lease_or_404(db, lease_id)


@router.put(
     "/{lease_id}",
     response_model=LeaseResponse,
     summary="Update lease"
)
def update_lease(
     lease_id: int,
     lease_data: LeaseUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     lease = _get_lease_or_404(db, lease_id)
     changes = lease_data.model_dump(exclude_unset=True)
     _check_parties(db, changes.get("property_id"), changes.get("tenant_id"))
     _check_dates(
          changes.get("lease_start_date", lease.lease_start_date),
          changes.get("lease_end_date", lease.lease_end_date),
     )

     for field, value in changes.items():
          setattr(lease, field, value)
     db.commit()
     db.refresh(lease)
     logger.info("Updated lease %s", lease_id)
     return lease


@router.delete(
     "/{lease_id}",
     summary="Delete lease"
)
def delete_lease(
     lease_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """Deletes the lease together with its invoices, payments and waivers."""
     lease = _get_lease_or_404(db, lease_id)
     db.delete(lease)
     db.commit()
     logger.info("Deleted lease %s", lease_id)
     return {"message": "Lease deleted successfully"}
