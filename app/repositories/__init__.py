# app/repositories/__init__.py
from app.repositories.appointments import AppointmentRepository
from app.repositories.billing import BillingRepository
from app.repositories.branches import BranchRepository
from app.repositories.doctors import DoctorProfileRepository, DoctorRepository
from app.repositories.patients import PatientRepository
from app.repositories.users import UserRepository
from app.repositories.wellness import WellnessRepository

__all__ = [
    "AppointmentRepository",
    "BillingRepository",
    "BranchRepository",
    "DoctorProfileRepository",
    "DoctorRepository",
    "PatientRepository",
    "UserRepository",
    "WellnessRepository",
]
