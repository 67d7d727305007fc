# routers/reports.py
"""
Reporting API: filtered ledger lines with totals, CSV export, the dashboard
summary, the per-month category breakdown, duplicate-repair reconciliation
and ledger CSV import.
"""
from datetime import date
from typing import Optional, List, Literal
from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import Response
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user
from models import User
from schemas.report import (
     ReportItemType,
     ReportResponse,
     DashboardSummary,
     DuplicateRepairGroup,
     ImportResult,
     MonthlyBreakdown,
)
from services.csv_io import decode_upload
from services.report_service import ReportService

router = APIRouter(prefix="/api/reports", tags=["reports"])


def _report_filters(
     type: Optional[ReportItemType] = Query(None, description="Rent, Utility or Repair"),
     property_id: Optional[int] = Query(None, gt=0, description="Filter by property"),
     tenant_id: Optional[int] = Query(None, gt=0, description="Filter by tenant"),
     start_date: Optional[date] = Query(None, description="Earliest line date (inclusive)"),
     end_date: Optional[date] = Query(None, description="Latest line date (inclusive)"),
     status: Optional[Literal["collected", "outstanding"]] = Query(None, description="Payment state"),
     repair_status: Optional[Literal["open", "completed"]] = Query(None, description="Repair state; hides other lines"),
) -> dict:
     return {
          "item_type": type,
          "property_id": property_id,
          "tenant_id": tenant_id,
          "start_date": start_date,
          "end_date": end_date,
          "status": status,
          "repair_status": repair_status,
     }


@router.get("", response_model=ReportResponse, summary="Filtered report lines with totals")
def get_report(
     filters: dict = Depends(_report_filters),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     items = ReportService.report_items(db, user.id, **filters)
     return ReportResponse(items=items, totals=ReportService.totals(items))


@router.get("/export", summary="Export report lines as CSV")
def export_report(
     filters: dict = Depends(_report_filters),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     items = ReportService.report_items(db, user.id, **filters)
     filename = f"rentledger_report_{date.today().isoformat()}.csv"
     return Response(
          content=ReportService.to_csv(items),
          media_type="text/csv",
          headers={"Content-Disposition": f'attachment; filename="{filename}"'},
     )


@router.get("/dashboard", response_model=DashboardSummary, summary="Dashboard summary")
def get_dashboard(
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     return ReportService.dashboard(db, user.id)


@router.get(
     "/duplicates/repairs",
     response_model=List[DuplicateRepairGroup],
     summary="Repairs that look like duplicates"
)
def get_duplicate_repairs(
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     """Groups of repairs on the same property with identical description and cost."""
     return ReportService.duplicate_repairs(db, user.id)


@router.get("/dashboard/breakdown", response_model=MonthlyBreakdown, summary="Category breakdown for one month")
def get_monthly_breakdown(
     property_id: int = Query(..., gt=0, description="Property to break down"),
     year: Optional[int] = Query(None, ge=1900, le=2100, description="Defaults to the newest lease month"),
     month: Optional[int] = Query(None, ge=1, le=12, description="Given together with year"),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     """
     Paid and billed amounts for **Rent** and each tracked utility in the chosen
     month, plus the list of lease months to pick from.
     """
     return ReportService.monthly_breakdown(db, user.id, property_id, year=year, month=month)


@router.post("/import", response_model=ImportResult, summary="Import ledger lines from CSV")
def import_ledger(
     file: UploadFile = File(..., description="CSV with Date, Property Name, Type, Category, Bill Amount, Paid Amount"),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     """
     Import Rent, Utility and Repair lines into your own properties.

     - Rows for the same property and month merge into that month's record
     - Later months are re-billed from the imported balances
     - Invalid rows are listed in **errors** and skipped
     """
     result = ReportService.import_ledger_csv(db, user.id, decode_upload(file.file.read()))
     db.commit()
     return result
