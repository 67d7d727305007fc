# routers/__init__.py
from . import properties, payments, repairs, contractors, shares, notifications, reports

ROUTERS = [
     properties.router,
     payments.router,
     repairs.router,
     contractors.router,
     shares.router,
     notifications.router,
     reports.router,
]

__all__ = ["ROUTERS"]
