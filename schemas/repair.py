# schemas/repair.py
"""
Pydantic schemas for repairs.
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict


class RepairStatusEnum(str, Enum):
     """Repair progress options."""
     PENDING_REPAIRMEN = "Pending Repairmen"
     PENDING_SUPPLY = "Pending Supply"
     IN_PROGRESS = "In Progress"
     COMPLETE = "Complete"


class RepairCreate(BaseModel):
     property_id: int = Field(..., gt=0)
     description: str = Field(..., min_length=1)
     status: RepairStatusEnum = Field(default=RepairStatusEnum.PENDING_REPAIRMEN)
     contractor_id: Optional[int] = Field(None, gt=0)
     cost: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
     notes: Optional[str] = None
     request_date: Optional[datetime] = None
     repair_date: Optional[datetime] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "property_id": 1,
                    "description": "Leaking kitchen faucet",
                    "status": "Pending Repairmen",
                    "cost": 120.00
               }
          }
     )


class RepairUpdate(BaseModel):
     description: Optional[str] = Field(None, min_length=1)
     status: Optional[RepairStatusEnum] = None
     contractor_id: Optional[int] = Field(None, gt=0)
     cost: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     notes: Optional[str] = None
     repair_date: Optional[datetime] = None


class RepairResponse(BaseModel):
     id: int
     property_id: int
     contractor_id: Optional[int] = None
     description: str
     status: RepairStatusEnum
     cost: Decimal
     notes: Optional[str] = None
     request_date: datetime
     repair_date: Optional[datetime] = None
     completion_date: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class RepairListResponse(BaseModel):
     repairs: List[RepairResponse]
     total: int
