# models/share.py
"""
Share model - grants another account a read-only view of one property.
"""
from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from .base import Base


class Share(Base):
     __tablename__ = "shares"
     __table_args__ = (
          UniqueConstraint("viewer_id", "property_id", name="uq_shares_viewer_property"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     viewer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     owner = relationship("User", foreign_keys=[owner_id])
     viewer = relationship("User", foreign_keys=[viewer_id])
     property = relationship("Property", back_populates="shares")

     def __repr__(self):
          return f"<Share(id={self.id}, property_id={self.property_id}, viewer_id={self.viewer_id})>"
