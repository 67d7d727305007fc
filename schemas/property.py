# schemas/property.py
"""
Pydantic schemas for Property API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, EmailStr, model_validator


class TenantIn(BaseModel):
     """Tenant listed on a property."""
     name: str = Field(..., min_length=1, max_length=200)
     phone: Optional[str] = Field(None, max_length=50)
     email: Optional[EmailStr] = None


class TenantOut(BaseModel):
     id: int
     name: str
     phone: Optional[str] = None
     email: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)


class PropertyCreate(BaseModel):
     """Schema for creating a new property."""
     name: str = Field(..., min_length=1, max_length=255)
     address: Optional[str] = Field(None, max_length=500)
     tenants: List[TenantIn] = Field(default_factory=list)
     lease_start: Optional[date] = None
     lease_end: Optional[date] = None
     security_deposit: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
     rent_amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2, description="Base monthly rent")
     utilities_to_track: List[str] = Field(default_factory=list, description="Utility categories billed monthly")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Sunset Apartments, Unit 101",
                    "address": "123 Ocean View Dr, Miami, FL",
                    "tenants": [{"name": "John Doe", "phone": "555-1234", "email": "john.doe@email.com"}],
                    "lease_start": "2026-08-01",
                    "lease_end": "2027-07-31",
                    "security_deposit": 1500.00,
                    "rent_amount": 1500.00,
                    "utilities_to_track": ["Water", "Electricity", "Internet"]
               }
          }
     )

     @model_validator(mode="after")
     def check_lease_window(self):
          if self.lease_start and self.lease_end and self.lease_end < self.lease_start:
               raise ValueError("lease_end must not be before lease_start")
          return self


class PropertyUpdate(BaseModel):
     """Schema for updating an existing property. Tenants, when given, replace the list."""
     name: Optional[str] = Field(None, min_length=1, max_length=255)
     address: Optional[str] = Field(None, max_length=500)
     tenants: Optional[List[TenantIn]] = None
     lease_start: Optional[date] = None
     lease_end: Optional[date] = None
     security_deposit: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     rent_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     utilities_to_track: Optional[List[str]] = None


class PropertyResponse(BaseModel):
     """Schema for property response."""
     id: int
     owner_id: int
     name: str
     address: Optional[str] = None
     tenants: List[TenantOut] = []
     lease_start: Optional[date] = None
     lease_end: Optional[date] = None
     security_deposit: Decimal
     rent_amount: Decimal
     utilities_to_track: List[str] = []
     created_at: Optional[datetime] = None

     # True when the caller sees this property through a share
     read_only: bool = False

     model_config = ConfigDict(from_attributes=True)


class HealthScoreResponse(BaseModel):
     property_id: int
     score: int = Field(..., ge=0, le=100)
