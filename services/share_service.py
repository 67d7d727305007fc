# services/share_service.py
"""
Share Service - read-only views of a landlord's properties for other accounts.
"""
import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from models import Share, User, Property
from .errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class ShareService:

     @staticmethod
     def find_user_by_email(db: Session, email: str):
          return db.query(User).filter(User.email == email.lower()).first()

     @staticmethod
     def share_properties(
          db: Session,
          owner: User,
          viewer_email: str,
          property_ids: List[int],
     ) -> Tuple[List[Share], List[int]]:
          """
          Share owned properties with a registered user.

          Properties already shared with that user are skipped, not duplicated.

          Returns:
               (created shares, skipped property ids)

          Raises:
               ValidationError: sharing with oneself
               NotFoundError: unknown viewer email or property not owned
          """
          if viewer_email.lower() == owner.email.lower():
               raise ValidationError("You cannot share properties with yourself")

          viewer = ShareService.find_user_by_email(db, viewer_email)
          if viewer is None:
               raise NotFoundError(f"No registered user with email {viewer_email}")

          created, skipped = [], []
          for property_id in dict.fromkeys(property_ids):
               property_obj = (
                    db.query(Property)
                    .filter(Property.id == property_id, Property.owner_id == owner.id)
                    .first()
               )
               if property_obj is None:
                    raise NotFoundError(f"Property with ID {property_id} not found")

               exists = (
                    db.query(Share)
                    .filter(Share.property_id == property_id, Share.viewer_id == viewer.id)
                    .first()
               )
               if exists:
                    skipped.append(property_id)
                    continue

               share = Share(owner_id=owner.id, viewer_id=viewer.id, property_id=property_id)
               db.add(share)
               created.append(share)

          db.flush()
          logger.info(
               "User %s shared %d properties with user %s (%d skipped)",
               owner.id, len(created), viewer.id, len(skipped),
          )
          return created, skipped

     @staticmethod
     def shares_by_owner(db: Session, owner_id: int) -> List[Share]:
          return db.query(Share).filter(Share.owner_id == owner_id).order_by(Share.id).all()

     @staticmethod
     def shares_for_viewer(db: Session, viewer_id: int) -> List[Share]:
          return db.query(Share).filter(Share.viewer_id == viewer_id).order_by(Share.id).all()

     @staticmethod
     def revoke_share(db: Session, user_id: int, share_id: int) -> None:
          """The owner revokes a share; a viewer may also drop a share they received."""
          share = db.query(Share).filter(Share.id == share_id).first()
          if share is None or user_id not in (share.owner_id, share.viewer_id):
               raise NotFoundError(f"Share with ID {share_id} not found")
          db.delete(share)
          db.flush()
