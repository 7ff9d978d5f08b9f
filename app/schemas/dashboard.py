# app/schemas/dashboard.py
from typing import Dict, List, Optional

from app.schemas.appointment import Appointment
from app.schemas.billing import BillingRecord
from app.schemas.common import CamelModel
from app.schemas.doctor import Doctor

class AppointmentStats(CamelModel):
    total: int
    by_status: Dict[str, int]
    by_type: Dict[str, int]
    by_priority: Dict[str, int]
    waiting: int
    new_patients: int
    avg_visits: str
    today: Optional[int] = None

class BillingStats(CamelModel):
    total: int
    by_status: Dict[str, int]
    pending_bills: int
    total_revenue: float
    outstanding: float

class PatientStats(CamelModel):
    total_patients: int
    active_patients: int
    new_this_month: int
    appointments_today: int

class WellnessStats(CamelModel):
    total_packages: int
    active_packages: int
    total_sales: int
    average_rating: str
    by_type: Dict[str, int]
    by_category: Dict[str, int]

class DoctorDashboard(CamelModel):
    doctor: Doctor
    stats: AppointmentStats
    todays_appointments: List[Appointment]

class StaffDashboard(CamelModel):
    total_patients: int
    patients_today: int
    waiting_patients: int
    completed_appointments: int
    cancelled_appointments: int
    confirmed_appointments: int
    pending_bills: int
    total_revenue: float
    todays_appointments: List[Appointment]
    waiting_tokens: List[Appointment]
    recent_bills: List[BillingRecord]
