# app/schemas/user.py
from pydantic import EmailStr, Field
from typing import Optional, List
from datetime import datetime

from app.models.all_models import UserRole
from app.schemas.common import CamelModel

class Staff(CamelModel):
    id: str
    name: str = "Unknown Staff"
    role: str = UserRole.STAFF.value
    department: str = "General"
    branch: str = "Main"
    email: Optional[str] = None
    phone: Optional[str] = None
    permissions: List[str] = []
    created_at: Optional[datetime] = None

class UserBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    mobile: str = Field(..., min_length=7, max_length=20)
    role: UserRole = UserRole.PATIENT
    branch: Optional[str] = None
    department: Optional[str] = None
    specialization: Optional[str] = None

class UserCreate(UserBase):
    id: Optional[str] = None

class Availability(CamelModel):
    email_taken: bool
    mobile_taken: bool
