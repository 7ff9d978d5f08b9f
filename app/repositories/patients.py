# app/repositories/patients.py
import logging
from typing import Any, Dict, List, Mapping, Optional

from app.models.all_models import Collection, PatientStatus
from app.repositories.base import (
    BaseRepository, as_list, canonical, dump_for_create, dump_for_update, first_present, new_id
)
from app.schemas.patient import Patient, PatientCreate, PatientUpdate
from app.services.query import filter_records
from app.utils.dates import age_on, to_iso, today_iso

logger = logging.getLogger(__name__)

PATIENT_DEFAULTS = {
    "name": "Unknown Patient",
    "status": PatientStatus.ACTIVE.value,
}

# Current field name first, then the names older documents were written with
LEGACY_FIELDS = {
    "dateOfBirth": ("dateOfBirth", "dob"),
    "phone": ("phone", "contact"),
    "insuranceId": ("insuranceId", "insurance"),
    "bloodGroup": ("bloodGroup", "bloodType"),
    "medicalHistory": ("medicalHistory", "conditions"),
}

SEARCH_FIELDS = ("name", "id", "phone", "email", "insurance_id", "branch")


class PatientRepository(BaseRepository[Patient]):
    collection = Collection.PATIENTS.value
    model = Patient
    defaults = PATIENT_DEFAULTS

    def normalize(self, record: Mapping[str, Any]) -> Patient:
        data: Dict[str, Any] = dict(record)
        for field, sources in LEGACY_FIELDS.items():
            data[field] = first_present(record, *sources)
        data["gender"] = canonical(data.get("gender"))
        data["bloodGroup"] = canonical(data["bloodGroup"], upper=True)
        for field in ("medicalHistory", "allergies", "medications"):
            data[field] = [str(item) for item in as_list(data.get(field))]
        data["registeredDate"] = to_iso(first_present(record, "registeredDate", "createdAt"))
        data["age"] = age_on(data["dateOfBirth"])
        return super().normalize(data)

    def get_by_email(self, email: str) -> Optional[Patient]:
        matches = self.list({"email": email})
        return matches[0] if matches else None

    def get_by_user_id(self, user_id: str) -> Optional[Patient]:
        matches = self.list({"userId": user_id})
        return matches[0] if matches else None

    def list_all(self, branch_id: Optional[str] = None) -> List[Patient]:
        """Newest registrations first."""
        patients = self.list({"branchId": branch_id} if branch_id else None)
        return sorted(patients, key=lambda p: p.registered_date or "", reverse=True)

    def list_by_branch(self, branch_id: str) -> List[Patient]:
        return self.list_all(branch_id=branch_id)

    def search(self, term: str) -> List[Patient]:
        patients = sorted(self.list(), key=lambda p: p.name)
        return filter_records(patients, search=term, search_fields=("name", "email", "phone"))

    def create(self, payload: PatientCreate, doc_id: Optional[str] = None) -> Patient:
        fields = dump_for_create(payload)
        fields.setdefault("registeredDate", today_iso())
        patient = self._create(fields, doc_id or new_id("PAT"))
        logger.info(f"Registered patient {patient.id}")
        return patient

    def update_patient(self, patient_id: str, payload: PatientUpdate) -> None:
        self.update(patient_id, dump_for_update(payload))

    def deactivate(self, patient_id: str) -> None:
        self.update(patient_id, {"status": PatientStatus.INACTIVE.value})
