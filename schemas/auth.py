# schemas/auth.py
"""
Pydantic schemas for account registration and login.
"""
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, EmailStr


class RegisterRequest(BaseModel):
     firstName: str = Field(..., min_length=1, max_length=100)
     lastName: str = Field(..., min_length=1, max_length=100)
     email: EmailStr
     password: str = Field(..., min_length=8, max_length=72)


class LoginRequest(BaseModel):
     email: EmailStr
     password: str


class UserResponse(BaseModel):
     id: int
     email: str
     first_name: str
     last_name: str

     model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
     token: str
     user: UserResponse
     token_type: Optional[str] = "bearer"
