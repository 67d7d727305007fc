# models/notification.py
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class Notification(Base):
     """
     Notification model - a short message from one account to an email address.
     The recipient does not need to be registered yet.
     """
     __tablename__ = "notifications"

     id = Column(Integer, primary_key=True, autoincrement=True)
     sender_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
     recipient_email = Column(String(255), nullable=False, index=True)
     message = Column(Text, nullable=False)
     is_acknowledged = Column(Boolean, default=False, nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     sender = relationship("User")

     def acknowledge(self) -> None:
          self.is_acknowledged = True

     def __repr__(self):
          return f"<Notification(id={self.id}, to='{self.recipient_email}', acknowledged={self.is_acknowledged})>"
