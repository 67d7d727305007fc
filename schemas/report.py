# schemas/report.py
"""
Pydantic schemas for reporting and dashboard endpoints.
"""
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel

from .repair import RepairStatusEnum


class ReportItemType(str, Enum):
     RENT = "Rent"
     UTILITY = "Utility"
     REPAIR = "Repair"


class ReportItem(BaseModel):
     date: date
     property_id: int
     property_name: str
     tenant_name: Optional[str] = None
     type: ReportItemType
     category: str
     bill_amount: Decimal
     paid_amount: Decimal
     balance: Decimal
     repair_status: Optional[RepairStatusEnum] = None
     source_id: int


class ReportTotals(BaseModel):
     bill_amount: Decimal
     paid_amount: Decimal
     balance: Decimal


class ReportResponse(BaseModel):
     items: List[ReportItem]
     totals: ReportTotals


class PropertyScore(BaseModel):
     property_id: int
     name: str
     score: int


class DashboardSummary(BaseModel):
     total_billed: Decimal
     total_collected: Decimal
     total_outstanding: Decimal
     current_month_collection_rate: float
     open_repairs: int
     completed_repair_cost: Decimal
     properties_by_health: List[PropertyScore]


class DuplicateRepairGroup(BaseModel):
     property_id: int
     description: str
     cost: Decimal
     repair_ids: List[int]


class ImportRowError(BaseModel):
     row: int
     message: str


class ImportResult(BaseModel):
     """Outcome of a CSV import: valid rows are applied, invalid ones reported."""
     imported: int
     errors: List[ImportRowError] = []


class BreakdownMonth(BaseModel):
     year: int
     month: int
     label: str


class CategoryAmount(BaseModel):
     category: str
     paid: Decimal
     total: Decimal


class MonthlyBreakdown(BaseModel):
     """Rent and tracked utilities of one property for one month."""
     property_id: int
     months: List[BreakdownMonth]
     year: Optional[int] = None
     month: Optional[int] = None
     has_record: bool = False
     categories: List[CategoryAmount] = []
