# services/ledger_engine.py
"""
Ledger Engine - rent balance carry-forward between monthly payment records.

A month's rent bill is the property's base rent plus whatever was left unpaid
on the nearest earlier record that exists. Records are not guaranteed to be
calendar adjacent: if March and April were never recorded, May inherits the
balance from February.

Every function here is pure. Callers pass in fully-loaded records (ORM rows or
any object exposing year / month / rent_bill_amount / rent_paid_amount) and
get back either a value or a RentBillAdjustment to persist. Nothing is mutated
and nothing raises: a missing property, an empty record set or a missing
following record simply yields no adjustment.
"""
import logging
from bisect import bisect_left
from decimal import Decimal
from typing import Any, NamedTuple, Optional, Sequence

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class RentBillAdjustment(NamedTuple):
     """A request to set record.rent_bill_amount to rent_bill_amount."""

     record: Any
     rent_bill_amount: Decimal


def period_key(record: Any) -> tuple:
     """Chronological sort key of a payment record."""
     return (record.year, record.month)


def sort_records(records: Sequence[Any]) -> list:
     """Return records ordered ascending by (year, month)."""
     return sorted(records, key=period_key)


def unpaid_rent(record: Any):
     """Rent left unpaid on a record. Overpayment clamps to zero, it is never a credit."""
     return max(ZERO, record.rent_bill_amount - record.rent_paid_amount)


def carried_balance_before(records: Sequence[Any], year: int, month: int):
     """
     Balance a record for (year, month) inherits from the nearest earlier record.

     Returns 0 when no earlier record exists.
     """
     ordered = sort_records(records)
     position = bisect_left([period_key(r) for r in ordered], (year, month))
     if position == 0:
          return ZERO
     return unpaid_rent(ordered[position - 1])


def expected_rent_bill(base_rent, records: Sequence[Any], year: int, month: int):
     """Base rent plus the balance carried into (year, month)."""
     return base_rent + carried_balance_before(records, year, month)


def recalculate_following_record(
     changed_record: Any,
     records_for_property: Sequence[Any],
     property: Any,
     is_deletion: bool = False,
) -> Optional[RentBillAdjustment]:
     """
     Recompute the rent bill of the record that follows a changed one.

     Args:
          changed_record: Record that was added, edited or deleted; only its
               year and month are read.
          records_for_property: The property's records after the mutation
               (a deleted record is already absent).
          property: Owner of the records; supplies rent_amount (base rent).
          is_deletion: True when changed_record was just deleted.

     Returns:
          RentBillAdjustment for the nearest later record when its bill must
          change, otherwise None.
     """
     if property is None or changed_record is None or not records_for_property:
          return None

     ordered = sort_records(records_for_property)
     keys = [period_key(r) for r in ordered]
     changed_key = period_key(changed_record)
     position = bisect_left(keys, changed_key)

     if is_deletion:
          # Record now sitting just before the gap the deletion left.
          base_index = position - 1
     else:
          if position >= len(keys) or keys[position] != changed_key:
               return None
          base_index = position

     carried = unpaid_rent(ordered[base_index]) if base_index >= 0 else ZERO

     next_index = base_index + 1
     if next_index >= len(ordered):
          return None

     next_record = ordered[next_index]
     new_bill = property.rent_amount + carried
     if next_record.rent_bill_amount == new_bill:
          return None

     logger.debug(
          "Rent bill for %s-%02d changes %s -> %s (carried %s)",
          next_record.year,
          next_record.month,
          next_record.rent_bill_amount,
          new_bill,
          carried,
     )
     return RentBillAdjustment(record=next_record, rent_bill_amount=new_bill)
