# models/tenant.py
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base


class Tenant(Base):
     """
     Tenant model - an occupant listed on a property.
     """
     __tablename__ = "tenants"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)

     name = Column(String(200), nullable=False)
     phone = Column(String(50), nullable=True)
     email = Column(String(255), nullable=True)

     # Relationships
     property = relationship("Property", back_populates="tenants")

     def __repr__(self):
          return f"<Tenant(id={self.id}, name='{self.name}')>"
