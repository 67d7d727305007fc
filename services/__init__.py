# services/__init__.py
from .ledger_engine import (
     RentBillAdjustment,
     recalculate_following_record,
     carried_balance_before,
     expected_rent_bill,
)
from .health_score import compute_health_score
from .payment_service import PaymentService
from .property_service import PropertyService
from .repair_service import RepairService
from .contractor_service import ContractorService
from .share_service import ShareService
from .notification_service import NotificationService
from .report_service import ReportService

__all__ = [
     "RentBillAdjustment",
     "recalculate_following_record",
     "carried_balance_before",
     "expected_rent_bill",
     "compute_health_score",
     "PaymentService",
     "PropertyService",
     "RepairService",
     "ContractorService",
     "ShareService",
     "NotificationService",
     "ReportService",
]
