# models/repair.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class RepairStatus(str, enum.Enum):
     """Enumeration for repair progress."""
     PENDING_REPAIRMEN = "Pending Repairmen"
     PENDING_SUPPLY = "Pending Supply"
     IN_PROGRESS = "In Progress"
     COMPLETE = "Complete"


class Repair(TimestampMixin, Base):
     """
     Repair model - maintenance work requested on a property.

     Anything not COMPLETE counts as an open repair for the health score.
     """
     __tablename__ = "repairs"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
     owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     contractor_id = Column(Integer, ForeignKey("contractors.id", ondelete="SET NULL"), nullable=True)

     description = Column(Text, nullable=False)
     status = Column(
          Enum(RepairStatus, name="repair_status", values_callable=lambda e: [m.value for m in e], create_constraint=True),
          default=RepairStatus.PENDING_REPAIRMEN,
          nullable=False,
          index=True,
     )
     cost = Column(Numeric(12, 2), default=0, nullable=False)  # Bill amount for the repair
     notes = Column(Text, nullable=True)

     request_date = Column(DateTime, nullable=False)
     repair_date = Column(DateTime, nullable=True)
     completion_date = Column(DateTime, nullable=True)  # When status became COMPLETE

     # Relationships
     property = relationship("Property", back_populates="repairs")
     contractor = relationship("Contractor", back_populates="repairs")

     def __repr__(self):
          return f"<Repair(id={self.id}, property_id={self.property_id}, status='{self.status.value}')>"
