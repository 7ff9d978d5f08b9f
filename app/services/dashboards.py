# app/services/dashboards.py
import logging
from typing import Optional

from app.models.all_models import AppointmentStatus, SLOT_HOLDING_STATUSES
from app.repositories import AppointmentRepository, BillingRepository, DoctorRepository, PatientRepository
from app.schemas.dashboard import DoctorDashboard, StaffDashboard
from app.schemas.doctor import Doctor
from app.services.stats import appointment_stats, billing_stats, count_where
from app.store import DocumentStore
from app.utils.dates import today_iso

logger = logging.getLogger(__name__)

UNKNOWN_DOCTOR = "Dr. Unknown"
RECENT_BILLS = 5


def doctor_dashboard(store: DocumentStore, doctor_id: str, today: Optional[str] = None) -> DoctorDashboard:
    today = today or today_iso()
    doctor = DoctorRepository(store).get_or_none(doctor_id)
    if doctor is None:
        logger.warning(f"Doctor {doctor_id} not found, showing dashboard as {UNKNOWN_DOCTOR}")
        doctor = Doctor(id=doctor_id, name=UNKNOWN_DOCTOR)

    appointments = AppointmentRepository(store)
    all_appointments = appointments.list_by_doctor(doctor_id)
    return DoctorDashboard(
        doctor=doctor,
        stats=appointment_stats(all_appointments, today=today),
        todays_appointments=appointments.list_by_doctor(doctor_id, date=today),
    )


def staff_dashboard(store: DocumentStore, branch_id: Optional[str] = None, today: Optional[str] = None) -> StaffDashboard:
    today = today or today_iso()
    appointments = AppointmentRepository(store)
    if branch_id:
        todays = appointments.list_by_branch(branch_id, date=today)
        patients = PatientRepository(store).list_by_branch(branch_id)
    else:
        todays = appointments.list_for_date(today)
        patients = PatientRepository(store).list_all()

    bills = BillingRepository(store).list_all()
    totals = billing_stats(bills)
    waiting = [a for a in todays if a.status in SLOT_HOLDING_STATUSES]

    return StaffDashboard(
        total_patients=len(patients),
        patients_today=len({a.patient_id for a in todays}),
        waiting_patients=len(waiting),
        completed_appointments=count_where(todays, "status", AppointmentStatus.COMPLETED.value),
        cancelled_appointments=count_where(todays, "status", AppointmentStatus.CANCELLED.value),
        confirmed_appointments=count_where(todays, "status", AppointmentStatus.CONFIRMED.value),
        pending_bills=totals["pending_bills"],
        total_revenue=totals["total_revenue"],
        todays_appointments=todays,
        waiting_tokens=sorted(waiting, key=lambda a: a.time),
        recent_bills=bills[:RECENT_BILLS],
    )
