# routers/properties.py
"""
Property API routes.

Owners manage their properties; accounts a property was shared with can
read it (and its health score) but not change it.
"""
from typing import Optional, List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user
from models import Property, User
from schemas.property import PropertyCreate, PropertyUpdate, PropertyResponse, HealthScoreResponse
from services.access import is_read_only
from services.property_service import PropertyService

router = APIRouter(prefix="/api/properties", tags=["properties"])


def _build_property_response(property_obj: Property, user: User) -> PropertyResponse:
     response = PropertyResponse.model_validate(property_obj)
     response.read_only = is_read_only(user.id, property_obj)
     return response


@router.post(
     "",
     response_model=PropertyResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new property"
)
def create_property(
     property_data: PropertyCreate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     """
     Create a property owned by the current user.

     - **rent_amount**: base monthly rent, before any carried balance
     - **utilities_to_track**: utility categories pre-filled on each monthly record
     - **tenants**: occupants listed on the property
     """
     property_obj = PropertyService.create_property(db, user.id, property_data)
     db.commit()
     db.refresh(property_obj)
     return _build_property_response(property_obj, user)


@router.get(
     "",
     response_model=List[PropertyResponse],
     summary="List owned and shared properties"
)
def list_properties(
     q: Optional[str] = Query(None, description="Case-insensitive search on name or address"),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     properties = PropertyService.list_properties(db, user.id, search=q)
     return [_build_property_response(p, user) for p in properties]


@router.get(
     "/{property_id}",
     response_model=PropertyResponse,
     summary="Get property by ID"
)
def get_property(
     property_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     property_obj = PropertyService.get_property(db, user.id, property_id)
     return _build_property_response(property_obj, user)


@router.put(
     "/{property_id}",
     response_model=PropertyResponse,
     summary="Update property"
)
def update_property(
     property_id: int,
     property_data: PropertyUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     """
     Update an owned property. Only provided fields change; a provided
     tenant list replaces the current one.
     """
     property_obj = PropertyService.update_property(db, user.id, property_id, property_data)
     db.commit()
     db.refresh(property_obj)
     return _build_property_response(property_obj, user)


@router.delete(
     "/{property_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete property"
)
def delete_property(
     property_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     """
     Delete an owned property.

     Note: This permanently removes its tenants, payments, repairs and shares.
     """
     PropertyService.delete_property(db, user.id, property_id)
     db.commit()
     return None


@router.get(
     "/{property_id}/health-score",
     response_model=HealthScoreResponse,
     summary="Get property health score"
)
def get_health_score(
     property_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     """
     0-100 score: 75 with no payment history, otherwise 100 minus flat
     penalties for rent and utility shortfalls in closed months and for
     open repairs.
     """
     score = PropertyService.health_score(db, user.id, property_id)
     return HealthScoreResponse(property_id=property_id, score=score)
