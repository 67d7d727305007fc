# schemas/share.py
"""
Pydantic schemas for read-only property shares.
"""
from typing import List
from pydantic import BaseModel, Field, EmailStr


class ShareCreate(BaseModel):
     viewer_email: EmailStr
     property_ids: List[int] = Field(..., min_length=1, description="Owned properties to share")


class ShareResponse(BaseModel):
     id: int
     property_id: int
     property_name: str
     owner_id: int
     owner_name: str
     owner_email: str
     viewer_id: int
     viewer_email: str


class ShareCreateResponse(BaseModel):
     created: List[ShareResponse]
     skipped_property_ids: List[int] = []
