# models/property.py
from sqlalchemy import Column, Integer, String, Numeric, Date, JSON, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Property(TimestampMixin, Base):
     """
     Property model - a rental unit tracked by a landlord account.

     rent_amount is the base rent: the standalone monthly figure, independent
     of any balance carried forward from an earlier month.
     """
     __tablename__ = "properties"

     id = Column(Integer, primary_key=True, autoincrement=True)
     owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
     name = Column(String(255), nullable=False)
     address = Column(String(500), nullable=True)

     # Lease
     lease_start = Column(Date, nullable=True)
     lease_end = Column(Date, nullable=True)
     security_deposit = Column(Numeric(12, 2), default=0, nullable=False)
     rent_amount = Column(Numeric(12, 2), nullable=False)

     # Utility categories billed alongside rent, e.g. ["Water", "Internet"]
     utilities_to_track = Column(JSON, default=list, nullable=False)

     # Relationships
     owner = relationship("User", back_populates="properties")
     tenants = relationship("Tenant", back_populates="property", cascade="all, delete-orphan", order_by="Tenant.id")
     payments = relationship("Payment", back_populates="property", cascade="all, delete-orphan")
     repairs = relationship("Repair", back_populates="property", cascade="all, delete-orphan")
     shares = relationship("Share", back_populates="property", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Property(id={self.id}, name='{self.name}')>"
