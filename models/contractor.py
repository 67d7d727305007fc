# models/contractor.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Contractor(TimestampMixin, Base):
     """
     Contractor model - a repairman or company an owner hires for repairs.
     """
     __tablename__ = "contractors"

     id = Column(Integer, primary_key=True, autoincrement=True)
     owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

     name = Column(String(200), nullable=False)  # Contact person
     contact = Column(String(50), nullable=False)  # Contact phone
     company_name = Column(String(255), nullable=True)
     company_address = Column(String(500), nullable=True)
     email = Column(String(255), nullable=True)
     comments = Column(Text, nullable=True)

     # Relationships
     owner = relationship("User", back_populates="contractors")
     repairs = relationship("Repair", back_populates="contractor", passive_deletes=True)

     def __repr__(self):
          return f"<Contractor(id={self.id}, name='{self.name}')>"
