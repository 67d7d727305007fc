# schemas/notification.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, EmailStr


class NotificationCreate(BaseModel):
     recipient_email: EmailStr
     message: str = Field(..., min_length=1, max_length=2000)


class NotificationResponse(BaseModel):
     id: int
     sender_id: int
     sender_name: str
     sender_email: str
     recipient_email: str
     message: str
     is_acknowledged: bool
     created_at: Optional[datetime] = None


class UnreadCountResponse(BaseModel):
     count: int
