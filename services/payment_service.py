# services/payment_service.py
"""
Payment Service - monthly payment records and their rent carry-forward.

Every create, update and delete re-derives the property's record set after
the mutation and hands it to the ledger engine, then persists the adjustment
it emits. An adjusted record is itself a changed record, so the walk repeats
from there until the engine reports nothing left to change; this keeps every
later bill consistent with the record before it.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from models import Payment, UtilityPayment, Property
from schemas.payment import PaymentCreate, PaymentUpdate, UtilityLine
from .access import get_property_for_read, get_property_for_write
from .errors import NotFoundError, ConflictError
from .ledger_engine import expected_rent_bill, recalculate_following_record, sort_records

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
     return datetime.now(timezone.utc).replace(tzinfo=None)


def _utility_rows(lines: List[UtilityLine]) -> List[UtilityPayment]:
     return [
          UtilityPayment(category=line.category, bill_amount=line.bill_amount, paid_amount=line.paid_amount)
          for line in lines
     ]


def _has_paid_amount(payment: Payment) -> bool:
     return payment.rent_paid_amount > 0 or any(u.paid_amount > 0 for u in payment.utilities)


class PaymentService:
     """Service class for payment-record business logic."""

     @staticmethod
     def records_for_property(db: Session, property_id: int) -> List[Payment]:
          """All payment records of a property, oldest first."""
          records = (
               db.query(Payment)
               .options(selectinload(Payment.utilities))
               .filter(Payment.property_id == property_id)
               .all()
          )
          return sort_records(records)

     @staticmethod
     def rebalance_after(
          db: Session,
          property_obj: Property,
          changed: Payment,
          is_deletion: bool = False,
     ) -> List[Payment]:
          """
          Run the ledger engine for a changed record and persist what it emits.

          Args:
               db: SQLAlchemy database session
               property_obj: Property owning the records (supplies base rent)
               changed: The record that was created, edited or deleted
               is_deletion: True when changed has just been deleted

          Returns:
               Records whose rent_bill_amount was rewritten, in order
          """
          db.flush()
          adjusted = []
          current, deletion = changed, is_deletion
          while True:
               records = PaymentService.records_for_property(db, property_obj.id)
               adjustment = recalculate_following_record(current, records, property_obj, deletion)
               if adjustment is None:
                    break
               record = adjustment.record
               logger.info(
                    "Carry-forward: property %s %s-%02d rent bill %s -> %s",
                    property_obj.id,
                    record.year,
                    record.month,
                    record.rent_bill_amount,
                    adjustment.rent_bill_amount,
               )
               record.rent_bill_amount = adjustment.rent_bill_amount
               db.flush()
               adjusted.append(record)
               current, deletion = record, False
          return adjusted

     @staticmethod
     def create_payment(db: Session, user_id: int, data: PaymentCreate) -> Payment:
          """
          Record a month's payment for a property the user owns.

          Raises:
               NotFoundError: property not visible
               AccessDeniedError: property only shared with the user
               ConflictError: a record already exists for that month
          """
          property_obj = get_property_for_write(db, user_id, data.property_id)

          existing = (
               db.query(Payment)
               .filter(
                    Payment.property_id == data.property_id,
                    Payment.year == data.year,
                    Payment.month == data.month,
               )
               .first()
          )
          if existing:
               raise ConflictError(
                    f"A payment for {data.year}-{data.month:02d} already exists for this property (id={existing.id})"
               )

          rent_bill = data.rent_bill_amount
          if rent_bill is None:
               records = PaymentService.records_for_property(db, property_obj.id)
               rent_bill = expected_rent_bill(property_obj.rent_amount, records, data.year, data.month)

          if data.utilities:
               utilities = _utility_rows(data.utilities)
          else:
               utilities = [
                    UtilityPayment(category=category, bill_amount=Decimal("0"), paid_amount=Decimal("0"))
                    for category in (property_obj.utilities_to_track or [])
               ]

          payment = Payment(
               property_id=property_obj.id,
               owner_id=property_obj.owner_id,
               year=data.year,
               month=data.month,
               rent_bill_amount=rent_bill,
               rent_paid_amount=data.rent_paid_amount,
               notes=data.notes,
               payment_date=data.payment_date,
               utilities=utilities,
          )
          if payment.payment_date is None and _has_paid_amount(payment):
               payment.payment_date = _utcnow()

          db.add(payment)
          PaymentService.rebalance_after(db, property_obj, payment)
          return payment

     @staticmethod
     def get_payment(db: Session, user_id: int, payment_id: int) -> Payment:
          payment = db.query(Payment).filter(Payment.id == payment_id).first()
          if payment is None:
               raise NotFoundError(f"Payment with ID {payment_id} not found")
          get_property_for_read(db, user_id, payment.property_id)
          return payment

     @staticmethod
     def list_payments(db: Session, user_id: int, property_id: int) -> List[Payment]:
          """Records of one visible property, newest first."""
          get_property_for_read(db, user_id, property_id)
          return list(reversed(PaymentService.records_for_property(db, property_id)))

     @staticmethod
     def update_payment(db: Session, user_id: int, payment_id: int, data: PaymentUpdate) -> Payment:
          """Edit a payment record; only provided fields change."""
          payment = db.query(Payment).filter(Payment.id == payment_id).first()
          if payment is None:
               raise NotFoundError(f"Payment with ID {payment_id} not found")
          property_obj = get_property_for_write(db, user_id, payment.property_id)

          if data.rent_bill_amount is not None:
               payment.rent_bill_amount = data.rent_bill_amount
          if data.rent_paid_amount is not None:
               payment.rent_paid_amount = data.rent_paid_amount
          if data.utilities is not None:
               payment.utilities = _utility_rows(data.utilities)
          if data.notes is not None:
               payment.notes = data.notes

          if data.payment_date is not None:
               payment.payment_date = data.payment_date
          elif (data.rent_paid_amount is not None or data.utilities is not None) and _has_paid_amount(payment):
               payment.payment_date = _utcnow()

          PaymentService.rebalance_after(db, property_obj, payment)
          return payment

     @staticmethod
     def delete_payment(db: Session, user_id: int, payment_id: int) -> Optional[Payment]:
          """
          Delete a payment record and re-bill the record that followed it
          against its new nearest predecessor.

          Returns:
               The following record if its bill changed, else None
          """
          payment = db.query(Payment).filter(Payment.id == payment_id).first()
          if payment is None:
               raise NotFoundError(f"Payment with ID {payment_id} not found")
          property_obj = get_property_for_write(db, user_id, payment.property_id)

          db.delete(payment)
          adjusted = PaymentService.rebalance_after(db, property_obj, payment, is_deletion=True)
          return adjusted[0] if adjusted else None
