# services/notification_service.py
"""
Notification Service - short messages between accounts, addressed by email.

When BREVO_API_KEY is configured a copy of each message is emailed to the
recipient. Delivery problems are logged; the stored notification stands.
"""
import logging
from typing import List

import requests
from sqlalchemy.orm import Session

from models import Notification, User
from utils.email import send_notification_email, email_delivery_enabled
from .errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class NotificationService:

     @staticmethod
     def send(db: Session, sender: User, recipient_email: str, message: str) -> Notification:
          if recipient_email.lower() == sender.email.lower():
               raise ValidationError("You cannot send a notification to yourself")

          notification = Notification(
               sender_id=sender.id,
               recipient_email=recipient_email.lower(),
               message=message,
               is_acknowledged=False,
          )
          db.add(notification)
          db.flush()

          if email_delivery_enabled():
               try:
                    send_notification_email(notification.recipient_email, sender.full_name, sender.email, message)
               except (requests.RequestException, RuntimeError) as e:
                    logger.warning("Email copy of notification %s not delivered: %s", notification.id, e)
          return notification

     @staticmethod
     def received(db: Session, user: User) -> List[Notification]:
          return (
               db.query(Notification)
               .filter(Notification.recipient_email == user.email.lower())
               .order_by(Notification.id.desc())
               .all()
          )

     @staticmethod
     def sent(db: Session, user: User) -> List[Notification]:
          return (
               db.query(Notification)
               .filter(Notification.sender_id == user.id)
               .order_by(Notification.id.desc())
               .all()
          )

     @staticmethod
     def unread_count(db: Session, user: User) -> int:
          """Notifications addressed to the user and not yet acknowledged."""
          return (
               db.query(Notification)
               .filter(
                    Notification.recipient_email == user.email.lower(),
                    Notification.is_acknowledged.is_(False),
               )
               .count()
          )

     @staticmethod
     def acknowledge(db: Session, user: User, notification_id: int) -> Notification:
          """Only the recipient can acknowledge."""
          notification = db.query(Notification).filter(Notification.id == notification_id).first()
          if notification is None or notification.recipient_email != user.email.lower():
               raise NotFoundError(f"Notification with ID {notification_id} not found")
          notification.acknowledge()
          db.flush()
          return notification

     @staticmethod
     def delete(db: Session, user: User, notification_id: int) -> None:
          notification = db.query(Notification).filter(Notification.id == notification_id).first()
          if notification is None or (
               notification.sender_id != user.id and notification.recipient_email != user.email.lower()
          ):
               raise NotFoundError(f"Notification with ID {notification_id} not found")
          db.delete(notification)
          db.flush()
