# models/__init__.py
from .base import Base
from .user import User
from .property import Property
from .tenant import Tenant
from .payment import Payment, UtilityPayment
from .repair import Repair, RepairStatus
from .contractor import Contractor
from .share import Share
from .notification import Notification

__all__ = [
     "Base",
     "User",
     "Property",
     "Tenant",
     "Payment",
     "UtilityPayment",
     "Repair",
     "RepairStatus",
     "Contractor",
     "Share",
     "Notification",
]
