# app/repositories/appointments.py
import logging
import random
from typing import Any, List, Mapping, Optional

from app.exceptions import StoreError
from app.models.all_models import (
    Collection, AppointmentStatus, AppointmentType, Priority, SLOT_HOLDING_STATUSES, clinic_now
)
from app.repositories.base import BaseRepository, canonical, dump_for_create, dump_for_update, new_id
from app.repositories.doctors import DoctorRepository
from app.repositories.patients import PatientRepository
from app.schemas.appointment import Appointment, AppointmentCreate, AppointmentUpdate
from app.store import In
from app.utils.dates import days_from_today, today_iso

logger = logging.getLogger(__name__)


def derive_token(record: Mapping[str, Any]) -> str:
    return f"TK-{str(record.get('id', ''))[:4].upper()}"


APPOINTMENT_DEFAULTS = {
    "patientId": "",
    "doctorId": "",
    "patientName": "Unknown Patient",
    "date": "",
    "time": "",
    "token": derive_token,
    "status": AppointmentStatus.PENDING.value,
    "reason": "No reason provided",
    "priority": Priority.MEDIUM.value,
    "duration": "30 mins",
    "type": AppointmentType.NEW.value,
    "notes": "",
    "symptoms": [],
    "labReports": [],
    "previousVisits": 0,
    "insurance": "None",
    "bookedAt": "",
}

SEARCH_FIELDS = ("patient_name", "id", "token", "doctor_name", "reason", "patient_phone")


def _newest_first(appointments: List[Appointment]) -> List[Appointment]:
    return sorted(appointments, key=lambda a: (a.date, a.time), reverse=True)


def _earliest_first(appointments: List[Appointment]) -> List[Appointment]:
    return sorted(appointments, key=lambda a: (a.date, a.time))


class AppointmentRepository(BaseRepository[Appointment]):
    collection = Collection.APPOINTMENTS.value
    model = Appointment
    defaults = APPOINTMENT_DEFAULTS

    def normalize(self, record: Mapping[str, Any]) -> Appointment:
        data = dict(record)
        data["patientGender"] = canonical(data.get("patientGender"))
        return super().normalize(data)

    def list_all(self, status: Optional[str] = None, branch_id: Optional[str] = None,
                 doctor_id: Optional[str] = None, date: Optional[str] = None) -> List[Appointment]:
        filters = {}
        if status:
            filters["status"] = status
        if branch_id:
            filters["branchId"] = branch_id
        if doctor_id:
            filters["doctorId"] = doctor_id
        if date:
            filters["date"] = date
        return _newest_first(self.list(filters))

    def list_by_patient(self, patient_id: str) -> List[Appointment]:
        return _newest_first(self.list({"patientId": patient_id}))

    def list_by_doctor(self, doctor_id: str, date: Optional[str] = None) -> List[Appointment]:
        if date:
            return _earliest_first(self.list({"doctorId": doctor_id, "date": date}))
        return _newest_first(self.list({"doctorId": doctor_id}))

    def list_by_branch(self, branch_id: str, date: Optional[str] = None) -> List[Appointment]:
        if date:
            return _earliest_first(self.list({"branchId": branch_id, "date": date}))
        return _newest_first(self.list({"branchId": branch_id}))

    def list_for_date(self, date: Optional[str] = None) -> List[Appointment]:
        return _earliest_first(self.list({"date": date or today_iso()}))

    def list_upcoming(self, days: int = 7) -> List[Appointment]:
        start, end = today_iso(), days_from_today(days)
        return _earliest_first([a for a in self.list() if a.date and start <= a.date <= end])

    def check_time_slot_availability(self, doctor_id: str, branch_id: str, date: str, time: str) -> bool:
        """Advisory only: nothing stops a concurrent booking between this check and the write."""
        try:
            clashes = self.store.list_where(self.collection, {
                "doctorId": doctor_id,
                "branchId": branch_id,
                "date": date,
                "time": time,
                "status": In(SLOT_HOLDING_STATUSES),
            })
        except StoreError as e:
            logger.error(f"Error checking availability for {doctor_id} at {date} {time}: {str(e)}")
            return False
        return not clashes

    def create(self, payload: AppointmentCreate, doc_id: Optional[str] = None) -> Appointment:
        patient = PatientRepository(self.store).get(payload.patient_id)
        doctor = DoctorRepository(self.store).get_details(payload.doctor_id)

        fields = dump_for_create(payload)
        fields.update({
            "patientName": patient.name,
            "patientAge": patient.age,
            "patientGender": patient.gender,
            "patientPhone": patient.phone,
            "doctorName": doctor.name,
            "token": payload.token or f"TK-{random.randint(1000, 9999)}",
            "insurance": patient.insurance_id or "None",
            "labReports": [],
            "bookedAt": clinic_now().isoformat(),
        })
        appointment = self._create(fields, doc_id or new_id("APP"))
        logger.info(f"Booked appointment {appointment.id} ({appointment.token}) for patient {payload.patient_id}")
        return appointment

    def update_appointment(self, appointment_id: str, payload: AppointmentUpdate) -> None:
        self.update(appointment_id, dump_for_update(payload))

    def update_status(self, appointment_id: str, status: str) -> None:
        self.update(appointment_id, {"status": status})
        logger.info(f"Appointment {appointment_id} marked {status}")
