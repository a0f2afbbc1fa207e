# routers/tenants.py
"""
Tenant API routes.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload

from database import get_session
from dependencies import verify_token
from models import Property, Tenant
from schemas.tenant import TenantCreate, TenantUpdate, TenantWithPropertyResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tenants", tags=["tenants"])


def _get_tenant_or_404(db: Session, tenant_id: int) -> Tenant:
     tenant = (
          db.query(Tenant)
          .options(joinedload(Tenant.property))
          .filter(Tenant.id == tenant_id)
          .first()
     )
     if not tenant:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Tenant not found"
          )
     return tenant


def _check_property(db: Session, property_id) -> None:
     if property_id is not None and not db.query(Property).filter(Property.id == property_id).first():
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Property not found"
          )


@router.get(
     "",
     response_model=List[TenantWithPropertyResponse],
     summary="List all tenants"
)
def list_tenants(
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     return (
          db.query(Tenant)
          .options(joinedload(Tenant.property))
          .order_by(Tenant.last_name, Tenant.first_name)
          .all()
     )


@router.post(
     "",
     response_model=TenantWithPropertyResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new tenant"
)
def create_tenant(
     tenant_data: TenantCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     _check_property(db, tenant_data.property_id)
     tenant = Tenant(**tenant_data.model_dump(exclude_unset=True))
     db.add(tenant)
     db.commit()
     db.refresh(tenant)
     logger.info("Created tenant %s", tenant.id)
     return tenant


@router.get(
     "/{tenant_id}",
     response_model=TenantWithPropertyResponse,
     summary="Get tenant by ID"
)
def get_tenant(
     tenant_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     return _get_tenant_or_404(db, tenant_id)


@router.put(
     "/{tenant_id}",
     response_model=TenantWithPropertyResponse,
     summary="Update tenant"
)
def update_tenant(
     tenant_id: int,
     tenant_data: TenantUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     tenant = _get_tenant_or_404(db, tenant_id)
     changes = tenant_data.model_dump(exclude_unset=True)
     if "property_id" in changes:
          _check_property(db, changes["property_id"])
     for field, value in changes.items():
          setattr(tenant, field, value)
     db.commit()
     db.refresh(tenant)
     logger.info("Updated tenant %s", tenant_id)
     return tenant


@router.delete(
     "/{tenant_id}",
     summary="Delete tenant"
)
def delete_tenant(
     tenant_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     tenant = _get_tenant_or_404(db, tenant_id)
     if tenant.leases:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="Cannot delete a tenant that has leases"
          )
     db.delete(tenant)
     db.commit()
     logger.info("Deleted tenant %s", tenant_id)
     return {"message": "Tenant deleted successfully"}
