# services/access.py
"""
Property visibility rules.

- Owner: full access to the property and everything hanging off it.
- Viewer (has a Share for the property): read-only access.
- Anyone else: the property does not exist for them.
"""
import logging
from typing import Set

from sqlalchemy.orm import Session

from models import Property, Share
from .errors import NotFoundError, AccessDeniedError

logger = logging.getLogger(__name__)


def owned_property_ids(db: Session, user_id: int) -> Set[int]:
     rows = db.query(Property.id).filter(Property.owner_id == user_id).all()
     return {row[0] for row in rows}


def shared_property_ids(db: Session, user_id: int) -> Set[int]:
     rows = db.query(Share.property_id).filter(Share.viewer_id == user_id).all()
     return {row[0] for row in rows}


def visible_property_ids(db: Session, user_id: int) -> Set[int]:
     """Owned plus shared property ids."""
     return owned_property_ids(db, user_id) | shared_property_ids(db, user_id)


def is_read_only(user_id: int, property_obj: Property) -> bool:
     """True when the user sees the property through a share."""
     return property_obj.owner_id != user_id


def get_property_for_read(db: Session, user_id: int, property_id: int) -> Property:
     """Property the user owns or has been shared. Raises NotFoundError otherwise."""
     property_obj = db.query(Property).filter(Property.id == property_id).first()
     if property_obj is None:
          raise NotFoundError(f"Property with ID {property_id} not found")
     if property_obj.owner_id == user_id:
          return property_obj
     share = (
          db.query(Share)
          .filter(Share.property_id == property_id, Share.viewer_id == user_id)
          .first()
     )
     if share is None:
          raise NotFoundError(f"Property with ID {property_id} not found")
     return property_obj


def get_property_for_write(db: Session, user_id: int, property_id: int) -> Property:
     """Property the user owns. Viewers get AccessDeniedError, strangers NotFoundError."""
     property_obj = get_property_for_read(db, user_id, property_id)
     if property_obj.owner_id != user_id:
          logger.info("User %s denied write access to shared property %s", user_id, property_id)
          raise AccessDeniedError("Shared properties are read-only")
     return property_obj
