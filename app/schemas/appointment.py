# app/schemas/appointment.py

from pydantic import Field
from typing import Optional, List
from datetime import date as DateType, datetime

from app.models.all_models import AppointmentStatus, AppointmentType, Priority
from app.schemas.common import CamelModel

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

class Appointment(CamelModel):
    id: str
    patient_id: str = ""
    doctor_id: str = ""
    branch_id: Optional[str] = None
    patient_name: str = "Unknown Patient"
    patient_age: Optional[int] = None
    patient_gender: Optional[str] = None
    patient_phone: Optional[str] = None
    doctor_name: Optional[str] = None
    date: str = ""
    time: str = ""
    token: str
    status: str = AppointmentStatus.PENDING.value
    reason: str = "No reason provided"
    type: str = AppointmentType.NEW.value
    priority: str = Priority.MEDIUM.value
    duration: str = "30 mins"
    notes: str = ""
    symptoms: List[str] = []
    lab_reports: List[str] = []
    previous_visits: int = 0
    insurance: str = "None"
    booked_by: Optional[str] = None
    booked_at: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class AppointmentBase(CamelModel):
    reason: Optional[str] = None
    type: AppointmentType = AppointmentType.NEW
    priority: Priority = Priority.MEDIUM
    duration: Optional[str] = "30 mins"
    notes: Optional[str] = None
    symptoms: List[str] = []

class AppointmentCreate(AppointmentBase):
    patient_id: str
    doctor_id: str
    branch_id: Optional[str] = None
    date: DateType
    time: str = Field(..., pattern=TIME_PATTERN)
    status: AppointmentStatus = AppointmentStatus.PENDING
    token: Optional[str] = None
    previous_visits: int = Field(0, ge=0)
    booked_by: Optional[str] = None

class AppointmentUpdate(CamelModel):
    doctor_id: Optional[str] = None
    branch_id: Optional[str] = None
    date: Optional[DateType] = None
    time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    status: Optional[AppointmentStatus] = None
    reason: Optional[str] = None
    type: Optional[AppointmentType] = None
    priority: Optional[Priority] = None
    duration: Optional[str] = None
    notes: Optional[str] = None
    symptoms: Optional[List[str]] = None
    lab_reports: Optional[List[str]] = None

class AppointmentStatusUpdate(CamelModel):
    status: AppointmentStatus

class SlotAvailability(CamelModel):
    doctor_id: str
    branch_id: str
    date: str
    time: str
    available: bool
