# services/property_service.py
"""
Property Service - landlord properties, their tenants and health scores.
"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import or_, func
from sqlalchemy.orm import Session, selectinload

from models import Property, Tenant, Payment, Repair
from schemas.property import PropertyCreate, PropertyUpdate
from .access import get_property_for_read, get_property_for_write, visible_property_ids
from .errors import ValidationError
from .health_score import compute_health_score

logger = logging.getLogger(__name__)


class PropertyService:
     """Service class for property-related business logic."""

     @staticmethod
     def create_property(db: Session, owner_id: int, data: PropertyCreate) -> Property:
          property_obj = Property(
               owner_id=owner_id,
               name=data.name,
               address=data.address,
               lease_start=data.lease_start,
               lease_end=data.lease_end,
               security_deposit=data.security_deposit,
               rent_amount=data.rent_amount,
               utilities_to_track=list(data.utilities_to_track),
               tenants=[Tenant(name=t.name, phone=t.phone, email=t.email) for t in data.tenants],
          )
          db.add(property_obj)
          db.flush()
          logger.info("Property %s created for user %s", property_obj.id, owner_id)
          return property_obj

     @staticmethod
     def list_properties(db: Session, user_id: int, search: Optional[str] = None) -> List[Property]:
          """
          Properties the user owns or has been shared, optionally filtered by a
          case-insensitive match on name or address.
          """
          ids = visible_property_ids(db, user_id)
          if not ids:
               return []
          query = (
               db.query(Property)
               .options(selectinload(Property.tenants))
               .filter(Property.id.in_(ids))
          )
          if search:
               pattern = f"%{search.lower()}%"
               query = query.filter(
                    or_(
                         func.lower(Property.name).like(pattern),
                         func.lower(func.coalesce(Property.address, "")).like(pattern),
                    )
               )
          return query.order_by(Property.id).all()

     @staticmethod
     def get_property(db: Session, user_id: int, property_id: int) -> Property:
          return get_property_for_read(db, user_id, property_id)

     @staticmethod
     def update_property(db: Session, user_id: int, property_id: int, data: PropertyUpdate) -> Property:
          """
          Update an owned property. Changing rent_amount does not rewrite
          existing bills; it applies from the next carry-forward onwards.
          """
          property_obj = get_property_for_write(db, user_id, property_id)

          fields = data.model_dump(exclude_unset=True, exclude={"tenants"})
          for name, value in fields.items():
               if value is None and name in ("name", "rent_amount", "security_deposit", "utilities_to_track"):
                    continue
               setattr(property_obj, name, value)

          if data.tenants is not None:
               property_obj.tenants = [Tenant(name=t.name, phone=t.phone, email=t.email) for t in data.tenants]

          if property_obj.lease_start and property_obj.lease_end and property_obj.lease_end < property_obj.lease_start:
               raise ValidationError("lease_end must not be before lease_start")

          db.flush()
          return property_obj

     @staticmethod
     def delete_property(db: Session, user_id: int, property_id: int) -> None:
          """Delete an owned property with its tenants, payments, repairs and shares."""
          property_obj = get_property_for_write(db, user_id, property_id)
          db.delete(property_obj)
          db.flush()
          logger.info("Property %s deleted by user %s", property_id, user_id)

     @staticmethod
     def health_score_for(db: Session, property_obj: Property, today: Optional[date] = None) -> int:
          """Load a property's payments and repairs and score them."""
          payments = (
               db.query(Payment)
               .options(selectinload(Payment.utilities))
               .filter(Payment.property_id == property_obj.id)
               .all()
          )
          repairs = db.query(Repair).filter(Repair.property_id == property_obj.id).all()
          return compute_health_score(payments, repairs, today=today)

     @staticmethod
     def health_score(db: Session, user_id: int, property_id: int, today: Optional[date] = None) -> int:
          property_obj = get_property_for_read(db, user_id, property_id)
          return PropertyService.health_score_for(db, property_obj, today=today)
