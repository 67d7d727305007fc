# services/report_service.py
"""
Report Service - flattened ledger lines, dashboard totals and reconciliation.

A report line is one billed item: the rent of a monthly record, each of its
utility lines, or a repair. Repairs count as collected once COMPLETE.
"""
import calendar
import logging
from collections import defaultdict
from datetime import date, datetime, time
from decimal import Decimal
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session, selectinload

from models import Payment, Property, Repair, RepairStatus, Tenant
from schemas.report import (
     ReportItem,
     ReportItemType,
     ReportTotals,
     DashboardSummary,
     PropertyScore,
     DuplicateRepairGroup,
     ImportResult,
     ImportRowError,
     BreakdownMonth,
     CategoryAmount,
     MonthlyBreakdown,
)
from schemas.payment import PaymentCreate, PaymentUpdate, UtilityLine
from schemas.repair import RepairCreate, RepairStatusEnum
from .access import get_property_for_read, visible_property_ids
from .csv_io import parse_amount, parse_date, read_rows, write_rows
from .errors import NotFoundError, ValidationError
from .payment_service import PaymentService
from .repair_service import RepairService
from .health_score import compute_health_score

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

CSV_HEADERS = ["Date", "Property Name", "Tenant Name", "Type", "Category", "Bill Amount", "Paid Amount", "Balance"]
LEDGER_IMPORT_HEADERS = ["Date", "Property Name", "Type", "Category", "Bill Amount", "Paid Amount"]


def _first_tenant_name(property_obj: Property) -> Optional[str]:
     return property_obj.tenants[0].name if property_obj.tenants else None


def _payment_items(property_obj: Property, payment: Payment) -> Iterable[ReportItem]:
     period_start = date(payment.year, payment.month, 1)
     tenant_name = _first_tenant_name(property_obj)
     yield ReportItem(
          date=period_start,
          property_id=property_obj.id,
          property_name=property_obj.name,
          tenant_name=tenant_name,
          type=ReportItemType.RENT,
          category="Monthly Rent",
          bill_amount=payment.rent_bill_amount,
          paid_amount=payment.rent_paid_amount,
          balance=payment.rent_bill_amount - payment.rent_paid_amount,
          source_id=payment.id,
     )
     for line in payment.utilities:
          yield ReportItem(
               date=period_start,
               property_id=property_obj.id,
               property_name=property_obj.name,
               tenant_name=tenant_name,
               type=ReportItemType.UTILITY,
               category=line.category,
               bill_amount=line.bill_amount,
               paid_amount=line.paid_amount,
               balance=line.bill_amount - line.paid_amount,
               source_id=payment.id,
          )


def _repair_item(property_obj: Property, repair: Repair) -> ReportItem:
     complete = repair.status == RepairStatus.COMPLETE
     when = repair.repair_date or repair.request_date
     return ReportItem(
          date=when.date(),
          property_id=property_obj.id,
          property_name=property_obj.name,
          tenant_name=_first_tenant_name(property_obj),
          type=ReportItemType.REPAIR,
          category=repair.description[:30],
          bill_amount=repair.cost,
          paid_amount=repair.cost if complete else ZERO,
          balance=ZERO if complete else repair.cost,
          repair_status=repair.status.value,
          source_id=repair.id,
     )


def _load_properties(db: Session, property_ids) -> List[Property]:
     if not property_ids:
          return []
     return (
          db.query(Property)
          .options(
               selectinload(Property.tenants),
               selectinload(Property.payments).selectinload(Payment.utilities),
               selectinload(Property.repairs),
          )
          .filter(Property.id.in_(property_ids))
          .order_by(Property.id)
          .all()
     )


def _matches(
     item: ReportItem,
     item_type: Optional[ReportItemType],
     start_date: Optional[date],
     end_date: Optional[date],
     status: Optional[str],
     repair_status: Optional[str],
     tenant: Optional[Tenant] = None,
) -> bool:
     if item_type is not None and item.type != item_type:
          return False
     # Lines carry the property's first tenant, so another tenant's filter matches nothing
     if tenant is not None and (item.property_id != tenant.property_id or item.tenant_name != tenant.name):
          return False
     if start_date and item.date < start_date:
          return False
     if end_date and item.date > end_date:
          return False
     if status == "outstanding" and item.balance <= 0:
          return False
     if status == "collected" and item.paid_amount <= 0:
          return False
     if item.type == ReportItemType.REPAIR:
          is_complete = item.repair_status == RepairStatus.COMPLETE.value
          if repair_status == "open" and is_complete:
               return False
          if repair_status == "completed" and not is_complete:
               return False
     elif repair_status is not None:
          return False
     return True


def _lease_months(property_obj: Property, today: date) -> List[BreakdownMonth]:
     """Months from lease start up to today or lease end, whichever is first; newest first."""
     if property_obj.lease_start is None:
          return []
     end = today
     if property_obj.lease_end is not None and property_obj.lease_end < end:
          end = property_obj.lease_end

     months = []
     year, month = property_obj.lease_start.year, property_obj.lease_start.month
     while (year, month) <= (end.year, end.month):
          months.append(BreakdownMonth(year=year, month=month, label=f"{calendar.month_abbr[month]} {year}"))
          year, month = (year + 1, 1) if month == 12 else (year, month + 1)
     months.reverse()
     return months


def _import_month(db: Session, user_id: int, property_obj: Property, year: int, month: int, entry: dict) -> None:
     """
     Merge imported Rent/Utility rows into the month's record, creating it when
     missing. Both paths go through PaymentService so later bills are rebalanced.
     """
     rent = entry["rent"]
     existing = (
          db.query(Payment)
          .filter(Payment.property_id == property_obj.id, Payment.year == year, Payment.month == month)
          .first()
     )
     if existing is None:
          PaymentService.create_payment(db, user_id, PaymentCreate(
               property_id=property_obj.id,
               year=year,
               month=month,
               rent_bill_amount=rent[0] if rent else None,
               rent_paid_amount=rent[1] if rent else ZERO,
               utilities=list(entry["utilities"].values()),
          ))
          return

     utilities = None
     if entry["utilities"]:
          lines = {
               u.category: UtilityLine(category=u.category, bill_amount=u.bill_amount, paid_amount=u.paid_amount)
               for u in existing.utilities
          }
          lines.update(entry["utilities"])
          utilities = list(lines.values())
     PaymentService.update_payment(db, user_id, existing.id, PaymentUpdate(
          rent_bill_amount=rent[0] if rent else None,
          rent_paid_amount=rent[1] if rent else None,
          utilities=utilities,
     ))


class ReportService:

     @staticmethod
     def report_items(
          db: Session,
          user_id: int,
          item_type: Optional[ReportItemType] = None,
          property_id: Optional[int] = None,
          start_date: Optional[date] = None,
          end_date: Optional[date] = None,
          status: Optional[str] = None,
          repair_status: Optional[str] = None,
          tenant_id: Optional[int] = None,
     ) -> List[ReportItem]:
          """
          Report lines across the user's visible properties, newest first.

          Args:
               status: "collected" (something paid) or "outstanding" (balance left)
               repair_status: "open" or "completed"; any value drops non-repair lines
               tenant_id: keep lines of that tenant's property billed under their name
          """
          tenant = None
          if tenant_id is not None:
               tenant = db.query(Tenant).filter(Tenant.id == tenant_id).first()
               if tenant is None:
                    raise NotFoundError(f"Tenant with ID {tenant_id} not found")
               get_property_for_read(db, user_id, tenant.property_id)

          if property_id is not None:
               get_property_for_read(db, user_id, property_id)
               ids = {property_id}
          else:
               ids = visible_property_ids(db, user_id)

          items = []
          for property_obj in _load_properties(db, ids):
               for payment in property_obj.payments:
                    items.extend(_payment_items(property_obj, payment))
               for repair in property_obj.repairs:
                    items.append(_repair_item(property_obj, repair))

          filtered = [
               item for item in items
               if _matches(item, item_type, start_date, end_date, status, repair_status, tenant)
          ]
          filtered.sort(key=lambda item: item.date, reverse=True)
          return filtered

     @staticmethod
     def totals(items: List[ReportItem]) -> ReportTotals:
          return ReportTotals(
               bill_amount=sum((item.bill_amount for item in items), ZERO),
               paid_amount=sum((item.paid_amount for item in items), ZERO),
               balance=sum((item.balance for item in items), ZERO),
          )

     @staticmethod
     def to_csv(items: List[ReportItem]) -> str:
          return write_rows(CSV_HEADERS, (
               [
                    item.date.isoformat(),
                    item.property_name,
                    item.tenant_name or "N/A",
                    item.type.value,
                    item.category,
                    item.bill_amount,
                    item.paid_amount,
                    item.balance,
               ]
               for item in items
          ))

     @staticmethod
     def dashboard(db: Session, user_id: int, today: Optional[date] = None) -> DashboardSummary:
          """
          Overall billed/collected totals, this month's collection rate, repair
          backlog and properties ranked by health score (best first).
          """
          today = today or date.today()
          properties = _load_properties(db, visible_property_ids(db, user_id))

          billed = collected = ZERO
          month_billed = month_collected = ZERO
          open_repairs = 0
          completed_cost = ZERO
          scores = []

          for property_obj in properties:
               for payment in property_obj.payments:
                    p_billed = payment.rent_bill_amount + sum((u.bill_amount for u in payment.utilities), ZERO)
                    p_collected = payment.rent_paid_amount + sum((u.paid_amount for u in payment.utilities), ZERO)
                    billed += p_billed
                    collected += p_collected
                    if (payment.year, payment.month) == (today.year, today.month):
                         month_billed += p_billed
                         month_collected += p_collected
               for repair in property_obj.repairs:
                    billed += repair.cost
                    if repair.status == RepairStatus.COMPLETE:
                         collected += repair.cost
                         completed_cost += repair.cost
                    else:
                         open_repairs += 1
               scores.append(PropertyScore(
                    property_id=property_obj.id,
                    name=property_obj.name,
                    score=compute_health_score(property_obj.payments, property_obj.repairs, today=today),
               ))

          rate = float(month_collected / month_billed * 100) if month_billed > 0 else 100.0
          scores.sort(key=lambda s: s.score, reverse=True)

          return DashboardSummary(
               total_billed=billed,
               total_collected=collected,
               total_outstanding=billed - collected,
               current_month_collection_rate=round(rate, 2),
               open_repairs=open_repairs,
               completed_repair_cost=completed_cost,
               properties_by_health=scores,
          )

     @staticmethod
     def duplicate_repairs(db: Session, user_id: int) -> List[DuplicateRepairGroup]:
          """Repairs on the user's own properties sharing property, description and cost."""
          ids = visible_property_ids(db, user_id)
          if not ids:
               return []
          repairs = (
               db.query(Repair)
               .filter(Repair.property_id.in_(ids), Repair.owner_id == user_id)
               .order_by(Repair.id)
               .all()
          )
          groups = defaultdict(list)
          for repair in repairs:
               groups[(repair.property_id, repair.description, Decimal(repair.cost))].append(repair.id)

          return [
               DuplicateRepairGroup(property_id=key[0], description=key[1], cost=key[2], repair_ids=repair_ids)
               for key, repair_ids in groups.items()
               if len(repair_ids) > 1
          ]

     @staticmethod
     def import_ledger_csv(db: Session, user_id: int, text: str) -> ImportResult:
          """
          Import Rent, Utility and Repair lines for the user's own properties.

          Columns: Date, Property Name, Type, Category, Bill Amount, Paid Amount
          (the export's extra columns are ignored). Rows with an unknown
          property, an invalid Type, Date or amount are reported and skipped.
          Rent and Utility rows of the same property and month merge into that
          month's record. A Repair row becomes a repair, Complete when paid
          covers the bill.

          Raises:
               ValidationError: empty file or missing headers
          """
          properties = {
               p.name.lower(): p
               for p in db.query(Property).filter(Property.owner_id == user_id).all()
          }
          item_types = {t.value for t in ReportItemType}

          errors = []
          months = {}
          repairs = []
          imported = 0
          for row_number, row in read_rows(text, LEDGER_IMPORT_HEADERS):
               property_obj = properties.get(row["Property Name"].lower())
               if property_obj is None:
                    errors.append(ImportRowError(row=row_number, message=f"Property '{row['Property Name']}' not found."))
                    continue
               item_type = row["Type"]
               if item_type not in item_types:
                    errors.append(ImportRowError(
                         row=row_number,
                         message=f"Invalid Type '{item_type}'. Must be Rent, Utility, or Repair.",
                    ))
                    continue
               bill = parse_amount(row["Bill Amount"])
               paid = parse_amount(row["Paid Amount"])
               if bill is None or paid is None:
                    errors.append(ImportRowError(row=row_number, message="Bill Amount or Paid Amount is not a valid number."))
                    continue
               when = parse_date(row["Date"])
               if when is None:
                    errors.append(ImportRowError(row=row_number, message=f"Date '{row['Date']}' is not a valid date."))
                    continue
               category = row["Category"]
               if item_type != ReportItemType.RENT.value and not category:
                    errors.append(ImportRowError(row=row_number, message=f"{item_type} rows need a Category."))
                    continue
               if len(category) > 100:
                    errors.append(ImportRowError(row=row_number, message="Category must be at most 100 characters."))
                    continue

               imported += 1
               if item_type == ReportItemType.REPAIR.value:
                    repairs.append((property_obj, category, bill, paid, when))
                    continue
               entry = months.setdefault(
                    (property_obj.id, when.year, when.month),
                    {"property": property_obj, "rent": None, "utilities": {}},
               )
               if item_type == ReportItemType.RENT.value:
                    entry["rent"] = (bill, paid)
               else:
                    entry["utilities"][category] = UtilityLine(category=category, bill_amount=bill, paid_amount=paid)

          for (_, year, month), entry in sorted(months.items(), key=lambda kv: kv[0]):
               _import_month(db, user_id, entry["property"], year, month, entry)

          for property_obj, description, bill, paid, when in repairs:
               complete = paid >= bill
               requested = datetime.combine(when, time())
               repair = RepairService.create_repair(db, user_id, RepairCreate(
                    property_id=property_obj.id,
                    description=description,
                    status=RepairStatusEnum.COMPLETE if complete else RepairStatusEnum.PENDING_REPAIRMEN,
                    cost=bill,
                    request_date=requested,
               ))
               if complete:
                    repair.completion_date = requested
          db.flush()

          logger.info("User %s imported %d ledger rows (%d rejected)", user_id, imported, len(errors))
          return ImportResult(imported=imported, errors=errors)

     @staticmethod
     def monthly_breakdown(
          db: Session,
          user_id: int,
          property_id: int,
          year: Optional[int] = None,
          month: Optional[int] = None,
          today: Optional[date] = None,
     ) -> MonthlyBreakdown:
          """
          Paid and billed amounts of Rent and each tracked utility for one month.

          The month defaults to the newest lease month. A month with no record
          reports zeros for every category.
          """
          if (year is None) != (month is None):
               raise ValidationError("year and month must be given together")
          property_obj = get_property_for_read(db, user_id, property_id)
          months = _lease_months(property_obj, today or date.today())

          if year is None:
               if not months:
                    return MonthlyBreakdown(property_id=property_id, months=[])
               year, month = months[0].year, months[0].month

          payment = (
               db.query(Payment)
               .options(selectinload(Payment.utilities))
               .filter(Payment.property_id == property_id, Payment.year == year, Payment.month == month)
               .first()
          )
          lines = {u.category: u for u in payment.utilities} if payment else {}

          categories = []
          for category in ["Rent"] + list(property_obj.utilities_to_track or []):
               paid = total = ZERO
               if payment is not None and category == "Rent":
                    paid, total = payment.rent_paid_amount, payment.rent_bill_amount
               elif category in lines:
                    paid, total = lines[category].paid_amount, lines[category].bill_amount
               categories.append(CategoryAmount(category=category, paid=paid, total=total))

          return MonthlyBreakdown(
               property_id=property_id,
               months=months,
               year=year,
               month=month,
               has_record=payment is not None,
               categories=categories,
          )
