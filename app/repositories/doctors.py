# app/repositories/doctors.py
import logging
from typing import List, Optional

from app.models.all_models import Collection, UserRole
from app.repositories.base import BaseRepository, dump_for_create, dump_for_update
from app.schemas.doctor import (
    DEFAULT_SPECIALIZATION, Doctor, DoctorCreate, DoctorProfile, DoctorProfileCreate, DoctorUpdate
)
from app.services.query import filter_records

logger = logging.getLogger(__name__)

DOCTOR_DEFAULTS = {
    "name": "Dr. John Doe",
    "specialization": DEFAULT_SPECIALIZATION,
}

PROFILE_DEFAULTS = {
    "name": "Dr. John Doe",
    "specialization": DEFAULT_SPECIALIZATION,
    "availableDays": [],
    "unavailableDates": [],
}

SEARCH_FIELDS = ("name", "specialization", "email", "branch")


class DoctorRepository(BaseRepository[Doctor]):
    """Doctor identities, stored as ``users`` documents with role ``doctor``."""
    collection = Collection.USERS.value
    model = Doctor
    defaults = DOCTOR_DEFAULTS

    def get_details(self, doctor_id: str) -> Doctor:
        return self.get(doctor_id)

    def list_doctors(self, branch: Optional[str] = None) -> List[Doctor]:
        filters = {"role": UserRole.DOCTOR.value}
        if branch:
            filters["branch"] = branch
        return sorted(self.list(filters), key=lambda d: d.name)

    def search(self, term: str, branch: Optional[str] = None) -> List[Doctor]:
        return filter_records(self.list_doctors(branch), search=term, search_fields=SEARCH_FIELDS)

    def create(self, payload: DoctorCreate) -> Doctor:
        fields = dump_for_create(payload)
        doc_id = fields.pop("id", None)
        fields["role"] = UserRole.DOCTOR.value
        doctor = self._create(fields, doc_id)
        logger.info(f"Added doctor {doctor.id} ({doctor.specialization})")
        return doctor

    def update_doctor(self, doctor_id: str, payload: DoctorUpdate) -> None:
        self.update(doctor_id, dump_for_update(payload))


class DoctorProfileRepository(BaseRepository[DoctorProfile]):
    """Extended profiles (schedule, fees) in the ``doctors`` collection."""
    collection = Collection.DOCTORS.value
    model = DoctorProfile
    defaults = PROFILE_DEFAULTS

    def get_profile_by_user_id(self, user_id: str) -> Optional[DoctorProfile]:
        matches = self.list({"userId": user_id})
        return matches[0] if matches else None

    def list_profiles_by_branch(self, branch_id: str) -> List[DoctorProfile]:
        return sorted(self.list({"branchId": branch_id}), key=lambda p: p.name)

    def create_profile(self, payload: DoctorProfileCreate, doc_id: Optional[str] = None) -> DoctorProfile:
        profile = self._create(dump_for_create(payload), doc_id or payload.user_id)
        logger.info(f"Saved doctor profile {profile.id}")
        return profile
