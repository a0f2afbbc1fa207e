# routers/properties.py
"""
Property API routes.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import verify_token
from models import Property
from schemas.property import PropertyCreate, PropertyUpdate, PropertyResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/properties", tags=["properties"])


def _get_property_or_404(db: Session, property_id: int) -> Property:
     prop = db.query(Property).filter(Property.id == property_id).first()
     if not prop:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Property not found"
          )
     return prop


@router.get(
     "",
     response_model=List[PropertyResponse],
     summary="List all properties"
)
def list_properties(
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """Newest first."""
     return db.query(Property).order_by(Property.created_at.desc(), Property.id.desc()).all()


@router.post(
     "",
     response_model=PropertyResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new property"
)
def create_property(
     property_data: PropertyCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     prop = Property(**property_data.model_dump(exclude_unset=True))
     db.add(prop)
     db.commit()
     db.refresh(prop)
     logger.info("Created property %s", prop.id)
     return prop


@router.get(
     "/{property_id}",
     response_model=PropertyResponse,
     summary="Get property by ID"
)
def get_property(
     property_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     return _get_property_or_404(db, property_id)


@router.put(
     "/{property_id}",
     response_model=PropertyResponse,
     summary="Update property"
)
def update_property(
     property_id: int,
     property_data: PropertyUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """Only provided fields are updated."""
     prop = _get_property_or_404(db, property_id)
     for field, value in property_data.model_dump(exclude_unset=True).items():
          setattr(prop, field, value)
     db.commit()
     db.refresh(prop)
     logger.info("Updated property %s", property_id)
     return prop


@router.delete(
     "/{property_id}",
     summary="Delete property"
)
def delete_property(
     property_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     prop = _get_property_or_404(db, property_id)
     if prop.leases:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="Cannot delete a property that has leases"
          )
     db.delete(prop)
     db.commit()
     logger.info("Deleted property %s", property_id)
     return {"message": "Property deleted successfully"}
