# routers/repairs.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user
from models import User, RepairStatus
from schemas.repair import RepairCreate, RepairUpdate, RepairResponse, RepairListResponse, RepairStatusEnum
from services.repair_service import RepairService

router = APIRouter(prefix="/api/repairs", tags=["repairs"])


@router.post(
     "",
     response_model=RepairResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Log a repair"
)
def create_repair(
     repair_data: RepairCreate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     repair = RepairService.create_repair(db, user.id, repair_data)
     db.commit()
     db.refresh(repair)
     return RepairResponse.model_validate(repair)


@router.get(
     "",
     response_model=RepairListResponse,
     summary="List repairs"
)
def list_repairs(
     property_id: Optional[int] = Query(None, gt=0, description="Filter by property"),
     status_filter: Optional[RepairStatusEnum] = Query(None, alias="status", description="Filter by status"),
     open_only: bool = Query(False, description="Only repairs that are not complete"),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     repairs = RepairService.list_repairs(
          db,
          user.id,
          property_id=property_id,
          status=RepairStatus(status_filter.value) if status_filter else None,
          open_only=open_only,
     )
     return RepairListResponse(
          repairs=[RepairResponse.model_validate(r) for r in repairs],
          total=len(repairs),
     )


@router.get("/{repair_id}", response_model=RepairResponse, summary="Get repair by ID")
def get_repair(
     repair_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     repair = RepairService.get_repair(db, user.id, repair_id)
     return RepairResponse.model_validate(repair)


@router.put("/{repair_id}", response_model=RepairResponse, summary="Update repair")
def update_repair(
     repair_id: int,
     repair_data: RepairUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     """
     Update a repair. Moving it to **Complete** stamps completion_date once.
     """
     repair = RepairService.update_repair(db, user.id, repair_id, repair_data)
     db.commit()
     db.refresh(repair)
     return RepairResponse.model_validate(repair)


@router.delete("/{repair_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete repair")
def delete_repair(
     repair_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     RepairService.delete_repair(db, user.id, repair_id)
     db.commit()
     return None
