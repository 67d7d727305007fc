# schemas/__init__.py
from .property import (
     PropertyCreate,
     PropertyUpdate,
     PropertyResponse,
     HealthScoreResponse,
)
from .payment import (
     PaymentCreate,
     PaymentUpdate,
     PaymentResponse,
     PaymentListResponse,
)
from .repair import (
     RepairCreate,
     RepairUpdate,
     RepairResponse,
     RepairListResponse,
)

__all__ = [
     "PropertyCreate",
     "PropertyUpdate",
     "PropertyResponse",
     "HealthScoreResponse",
     "PaymentCreate",
     "PaymentUpdate",
     "PaymentResponse",
     "PaymentListResponse",
     "RepairCreate",
     "RepairUpdate",
     "RepairResponse",
     "RepairListResponse",
]
