# app/schemas/patient.py
from pydantic import EmailStr, Field
from typing import Optional, List, Any
from datetime import date, datetime

from app.models.all_models import Gender, BloodGroup, PatientStatus
from app.schemas.common import CamelModel

class EmergencyContact(CamelModel):
    name: str
    phone: str
    relationship: Optional[str] = None

class Patient(CamelModel):
    id: str
    name: str = "Unknown Patient"
    date_of_birth: Optional[str] = None
    age: Optional[int] = None  # derived from date_of_birth on every read
    gender: Optional[str] = None
    blood_group: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[Any] = None
    medical_history: List[str] = []
    allergies: List[str] = []
    medications: List[str] = []
    registered_date: Optional[str] = None
    last_visit: Optional[str] = None
    next_visit: Optional[str] = None
    total_visits: int = 0
    status: str = PatientStatus.ACTIVE.value
    insurance_id: Optional[str] = None
    branch: Optional[str] = None
    branch_id: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class PatientBase(CamelModel):
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    blood_group: Optional[BloodGroup] = None
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    emergency_contact: Optional[EmergencyContact] = None
    medical_history: Optional[List[str]] = None
    allergies: Optional[List[str]] = None
    medications: Optional[List[str]] = None
    insurance_id: Optional[str] = None
    branch: Optional[str] = None
    branch_id: Optional[str] = None
    user_id: Optional[str] = None

class PatientCreate(PatientBase):
    name: str = Field(..., min_length=1, max_length=200)
    status: PatientStatus = PatientStatus.ACTIVE

class PatientUpdate(PatientBase):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    status: Optional[PatientStatus] = None
    last_visit: Optional[date] = None
