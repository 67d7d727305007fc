# services/repair_service.py
"""
Repair Service - maintenance requests on properties.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from models import Repair, RepairStatus, Contractor
from schemas.repair import RepairCreate, RepairUpdate
from .access import get_property_for_read, get_property_for_write, visible_property_ids
from .errors import NotFoundError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
     return datetime.now(timezone.utc).replace(tzinfo=None)


def _check_contractor(db: Session, owner_id: int, contractor_id: Optional[int]) -> None:
     if contractor_id is None:
          return
     contractor = (
          db.query(Contractor)
          .filter(Contractor.id == contractor_id, Contractor.owner_id == owner_id)
          .first()
     )
     if contractor is None:
          raise NotFoundError(f"Contractor with ID {contractor_id} not found")


class RepairService:
     """Service class for repair-related business logic."""

     @staticmethod
     def create_repair(db: Session, user_id: int, data: RepairCreate) -> Repair:
          property_obj = get_property_for_write(db, user_id, data.property_id)
          _check_contractor(db, property_obj.owner_id, data.contractor_id)

          status = RepairStatus(data.status.value)
          repair = Repair(
               property_id=property_obj.id,
               owner_id=property_obj.owner_id,
               contractor_id=data.contractor_id,
               description=data.description,
               status=status,
               cost=data.cost,
               notes=data.notes,
               request_date=data.request_date or _utcnow(),
               repair_date=data.repair_date,
               completion_date=_utcnow() if status == RepairStatus.COMPLETE else None,
          )
          db.add(repair)
          db.flush()
          return repair

     @staticmethod
     def get_repair(db: Session, user_id: int, repair_id: int) -> Repair:
          repair = db.query(Repair).filter(Repair.id == repair_id).first()
          if repair is None:
               raise NotFoundError(f"Repair with ID {repair_id} not found")
          get_property_for_read(db, user_id, repair.property_id)
          return repair

     @staticmethod
     def list_repairs(
          db: Session,
          user_id: int,
          property_id: Optional[int] = None,
          status: Optional[RepairStatus] = None,
          open_only: bool = False,
     ) -> List[Repair]:
          """Repairs on visible properties, most recently requested first."""
          if property_id is not None:
               get_property_for_read(db, user_id, property_id)
               ids = {property_id}
          else:
               ids = visible_property_ids(db, user_id)
          if not ids:
               return []

          query = db.query(Repair).filter(Repair.property_id.in_(ids))
          if status is not None:
               query = query.filter(Repair.status == status)
          if open_only:
               query = query.filter(Repair.status != RepairStatus.COMPLETE)
          return query.order_by(Repair.request_date.desc(), Repair.id.desc()).all()

     @staticmethod
     def update_repair(db: Session, user_id: int, repair_id: int, data: RepairUpdate) -> Repair:
          """
          Update a repair. completion_date is stamped the first time the
          status becomes COMPLETE and kept afterwards.
          """
          repair = db.query(Repair).filter(Repair.id == repair_id).first()
          if repair is None:
               raise NotFoundError(f"Repair with ID {repair_id} not found")
          property_obj = get_property_for_write(db, user_id, repair.property_id)

          if data.description is not None:
               repair.description = data.description
          if data.cost is not None:
               repair.cost = data.cost
          if data.notes is not None:
               repair.notes = data.notes
          if data.repair_date is not None:
               repair.repair_date = data.repair_date
          if data.contractor_id is not None:
               _check_contractor(db, property_obj.owner_id, data.contractor_id)
               repair.contractor_id = data.contractor_id
          if data.status is not None:
               repair.status = RepairStatus(data.status.value)
               if repair.status == RepairStatus.COMPLETE and repair.completion_date is None:
                    repair.completion_date = _utcnow()

          db.flush()
          return repair

     @staticmethod
     def delete_repair(db: Session, user_id: int, repair_id: int) -> None:
          repair = db.query(Repair).filter(Repair.id == repair_id).first()
          if repair is None:
               raise NotFoundError(f"Repair with ID {repair_id} not found")
          get_property_for_write(db, user_id, repair.property_id)
          db.delete(repair)
          db.flush()
