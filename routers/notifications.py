# routers/notifications.py
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user
from models import Notification, User
from schemas.notification import NotificationCreate, NotificationResponse, UnreadCountResponse
from services.notification_service import NotificationService

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


def _build_notification_response(notification: Notification) -> NotificationResponse:
     return NotificationResponse(
          id=notification.id,
          sender_id=notification.sender_id,
          sender_name=notification.sender.full_name,
          sender_email=notification.sender.email,
          recipient_email=notification.recipient_email,
          message=notification.message,
          is_acknowledged=notification.is_acknowledged,
          created_at=notification.created_at,
     )


@router.post(
     "",
     response_model=NotificationResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Send a notification"
)
def send_notification(
     notification_data: NotificationCreate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     notification = NotificationService.send(db, user, notification_data.recipient_email, notification_data.message)
     db.commit()
     db.refresh(notification)
     return _build_notification_response(notification)


@router.get("/received", response_model=List[NotificationResponse], summary="Notifications sent to me")
def list_received(
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     return [_build_notification_response(n) for n in NotificationService.received(db, user)]


@router.get("/unread-count", response_model=UnreadCountResponse, summary="Unacknowledged notifications for me")
def get_unread_count(
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     return UnreadCountResponse(count=NotificationService.unread_count(db, user))


@router.get("/sent", response_model=List[NotificationResponse], summary="Notifications I sent")
def list_sent(
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     return [_build_notification_response(n) for n in NotificationService.sent(db, user)]


@router.patch(
     "/{notification_id}/acknowledge",
     response_model=NotificationResponse,
     summary="Acknowledge a notification"
)
def acknowledge_notification(
     notification_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     notification = NotificationService.acknowledge(db, user, notification_id)
     db.commit()
     db.refresh(notification)
     return _build_notification_response(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a notification")
def delete_notification(
     notification_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     NotificationService.delete(db, user, notification_id)
     db.commit()
     return None
