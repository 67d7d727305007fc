# schemas/payment.py
"""
Pydantic schemas for monthly payment records.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict


class UtilityLine(BaseModel):
     """One utility category billed and paid in a month."""
     category: str = Field(..., min_length=1, max_length=100)
     bill_amount: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
     paid_amount: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)

     model_config = ConfigDict(from_attributes=True)


class PaymentCreate(BaseModel):
     """
     Schema for recording a month's payment.

     rent_bill_amount may be omitted: it then defaults to base rent plus the
     balance left unpaid on the nearest earlier record.
     """
     property_id: int = Field(..., gt=0)
     year: int = Field(..., ge=1900, le=9999)
     month: int = Field(..., ge=1, le=12)
     rent_bill_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     rent_paid_amount: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
     utilities: List[UtilityLine] = Field(default_factory=list)
     notes: Optional[str] = None
     payment_date: Optional[datetime] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "property_id": 1,
                    "year": 2026,
                    "month": 9,
                    "rent_paid_amount": 1400.00,
                    "utilities": [
                         {"category": "Water", "bill_amount": 50.00, "paid_amount": 50.00},
                         {"category": "Internet", "bill_amount": 60.00, "paid_amount": 0}
                    ],
                    "notes": "Paid via check #123."
               }
          }
     )


class PaymentUpdate(BaseModel):
     """Schema for editing a payment record. Utilities, when given, replace the lines."""
     rent_bill_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     rent_paid_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     utilities: Optional[List[UtilityLine]] = None
     notes: Optional[str] = None
     payment_date: Optional[datetime] = None


class PaymentResponse(BaseModel):
     id: int
     property_id: int
     year: int
     month: int
     rent_bill_amount: Decimal
     rent_paid_amount: Decimal
     utilities: List[UtilityLine] = []
     notes: Optional[str] = None
     payment_date: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class PaymentListResponse(BaseModel):
     payments: List[PaymentResponse]
     total: int
