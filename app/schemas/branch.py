# app/schemas/branch.py
from pydantic import EmailStr, Field
from typing import Optional, List
from datetime import datetime

from app.schemas.common import CamelModel

class Branch(CamelModel):
    id: str
    name: str = ""
    code: str = ""
    location: str = ""
    address: str = ""
    phone: str = ""
    email: Optional[str] = None
    operating_hours: str = ""
    facilities: List[str] = []
    description: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class BranchCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    code: str = Field(..., min_length=1, max_length=10)
    location: str = ""
    address: str = ""
    phone: str = ""
    email: Optional[EmailStr] = None
    operating_hours: str = ""
    facilities: List[str] = []
    description: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

class BranchUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    location: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    operating_hours: Optional[str] = None
    facilities: Optional[List[str]] = None
    description: Optional[str] = None
