# services/health_score.py
"""
Property health score - a 0-100 heuristic of payment compliance and repair backlog.

Penalties are flat per incident: any rent shortfall in a closed month costs
10 points whatever its size, every under-paid utility line costs 2, every
repair that is not complete costs 5. The month still in progress is ignored.
"""
from datetime import date
from typing import Any, Optional, Sequence

NEUTRAL_SCORE = 75
MAX_SCORE = 100
MIN_SCORE = 0

RENT_SHORTFALL_PENALTY = 10
UTILITY_SHORTFALL_PENALTY = 2
OPEN_REPAIR_PENALTY = 5

COMPLETE_STATUS = "Complete"


def _is_complete(repair: Any) -> bool:
     status = getattr(repair.status, "value", repair.status)
     return status == COMPLETE_STATUS


def compute_health_score(
     payments: Sequence[Any],
     repairs: Sequence[Any],
     today: Optional[date] = None,
) -> int:
     """
     Score one property from its payment records and repairs.

     Args:
          payments: All payment records of the property.
          repairs: All repairs of the property.
          today: Reference date deciding which month is still open (default: today).

     Returns:
          Integer in [0, 100]; 75 when the property has no payment records.
     """
     if not payments:
          return NEUTRAL_SCORE

     today = today or date.today()
     current_period = (today.year, today.month)

     score = MAX_SCORE
     for payment in payments:
          if (payment.year, payment.month) >= current_period:
               continue
          if payment.rent_paid_amount < payment.rent_bill_amount:
               score -= RENT_SHORTFALL_PENALTY
          for line in payment.utilities:
               if line.paid_amount < line.bill_amount:
                    score -= UTILITY_SHORTFALL_PENALTY

     open_repairs = sum(1 for repair in repairs if not _is_complete(repair))
     score -= open_repairs * OPEN_REPAIR_PENALTY

     return max(MIN_SCORE, min(MAX_SCORE, score))
