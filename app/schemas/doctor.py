# app/schemas/doctor.py
from pydantic import EmailStr, Field
from typing import Optional, List, Dict
from datetime import datetime

from app.schemas.common import CamelModel

DEFAULT_SPECIALIZATION = "General Physician"

class Doctor(CamelModel):
    id: str
    name: str = "Dr. John Doe"
    specialization: str = DEFAULT_SPECIALIZATION
    branch: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

class DoctorProfile(CamelModel):
    """Extended doctor record kept in the ``doctors`` collection."""
    id: str
    user_id: Optional[str] = None
    name: str = "Dr. John Doe"
    email: Optional[str] = None
    phone: Optional[str] = None
    specialization: str = DEFAULT_SPECIALIZATION
    qualification: Optional[str] = None
    experience: Optional[int] = None
    branch_id: Optional[str] = None
    branch_name: Optional[str] = None
    available_days: List[str] = []
    available_hours: Optional[Dict[str, str]] = None
    unavailable_dates: List[str] = []
    consultation_fee: Optional[float] = None
    bio: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class DoctorCreate(CamelModel):
    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=200)
    specialization: str = DEFAULT_SPECIALIZATION
    branch: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None

class DoctorProfileCreate(CamelModel):
    user_id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    specialization: str = DEFAULT_SPECIALIZATION
    qualification: Optional[str] = None
    experience: Optional[int] = Field(None, ge=0)
    branch_id: Optional[str] = None
    branch_name: Optional[str] = None
    available_days: List[str] = []
    available_hours: Optional[Dict[str, str]] = None
    unavailable_dates: List[str] = []
    consultation_fee: Optional[float] = Field(None, ge=0)
    bio: Optional[str] = None

class DoctorUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    specialization: Optional[str] = None
    branch: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
