# schemas/contractor.py
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, EmailStr


class ContractorCreate(BaseModel):
     name: str = Field(..., min_length=1, max_length=200, description="Contact person")
     contact: str = Field(..., min_length=1, max_length=50, description="Contact phone")
     company_name: Optional[str] = Field(None, max_length=255)
     company_address: Optional[str] = Field(None, max_length=500)
     email: Optional[EmailStr] = None
     comments: Optional[str] = None


class ContractorUpdate(BaseModel):
     name: Optional[str] = Field(None, min_length=1, max_length=200)
     contact: Optional[str] = Field(None, min_length=1, max_length=50)
     company_name: Optional[str] = Field(None, max_length=255)
     company_address: Optional[str] = Field(None, max_length=500)
     email: Optional[EmailStr] = None
     comments: Optional[str] = None


class ContractorResponse(BaseModel):
     id: int
     name: str
     contact: str
     company_name: Optional[str] = None
     company_address: Optional[str] = None
     email: Optional[str] = None
     comments: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)
