# models/payment.py
"""
Payment models - one record per property per calendar month.

rent_bill_amount is base rent plus any balance carried from the nearest
earlier record; it is rewritten by the ledger engine whenever an earlier
record changes. Utility lines are billed and paid independently and are
never carried forward.
"""
from sqlalchemy import Column, Integer, String, Numeric, Text, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Payment(TimestampMixin, Base):
     """
     Monthly payment record for a property.
     """
     __tablename__ = "payments"
     __table_args__ = (
          UniqueConstraint("property_id", "year", "month", name="uq_payments_property_period"),
          CheckConstraint("month >= 1 AND month <= 12", name="ck_payments_month"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
     owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

     # Billing period
     year = Column(Integer, nullable=False)
     month = Column(Integer, nullable=False)  # 1-12

     # Rent
     rent_bill_amount = Column(Numeric(12, 2), nullable=False)
     rent_paid_amount = Column(Numeric(12, 2), default=0, nullable=False)

     notes = Column(Text, nullable=True)
     payment_date = Column(DateTime, nullable=True)  # When the last payment part was made

     # Relationships
     property = relationship("Property", back_populates="payments")
     utilities = relationship(
          "UtilityPayment",
          back_populates="payment",
          cascade="all, delete-orphan",
          order_by="UtilityPayment.id",
     )

     def __repr__(self):
          return f"<Payment(id={self.id}, property_id={self.property_id}, period={self.year}-{self.month:02d})>"


class UtilityPayment(Base):
     """
     One utility ledger line (category, billed, paid) of a payment record.
     """
     __tablename__ = "utility_payments"

     id = Column(Integer, primary_key=True, autoincrement=True)
     payment_id = Column(Integer, ForeignKey("payments.id", ondelete="CASCADE"), nullable=False, index=True)
     category = Column(String(100), nullable=False)
     bill_amount = Column(Numeric(12, 2), default=0, nullable=False)
     paid_amount = Column(Numeric(12, 2), default=0, nullable=False)

     payment = relationship("Payment", back_populates="utilities")

     def __repr__(self):
          return f"<UtilityPayment(category='{self.category}', bill={self.bill_amount}, paid={self.paid_amount})>"
