# app/routes/patients/router.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.models.all_models import BloodGroup, Gender, PatientStatus, clinic_now
from app.repositories import AppointmentRepository, PatientRepository
from app.repositories.patients import SEARCH_FIELDS
from app.routes.utils.listing import get_store, list_query, not_found, with_filters
from app.schemas.appointment import Appointment
from app.schemas.common import Page
from app.schemas.dashboard import PatientStats
from app.schemas.patient import Patient, PatientCreate, PatientUpdate
from app.services.query import ListQuery, run_query
from app.services.stats import attach_visits, patient_stats
from app.store import DocumentStore
from app.utils.dates import today_iso

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patients", tags=["patients"])

DATE_FIELDS = ("registered_date", "last_visit", "next_visit", "date_of_birth")
NUMERIC_FIELDS = ("age", "total_visits")


@router.get("/", response_model=Page[Patient])
async def list_patients(
    status: Optional[PatientStatus] = Query(None),
    gender: Optional[Gender] = Query(None),
    blood_group: Optional[BloodGroup] = Query(None, alias="bloodGroup"),
    blood_group_snake: Optional[BloodGroup] = Query(None, alias="blood_group", include_in_schema=False),
    branch_id: Optional[str] = Query(None),
    query: ListQuery = Depends(list_query),
    store: DocumentStore = Depends(get_store)
):
    patients = PatientRepository(store).list_all(branch_id=branch_id)
    appointments = AppointmentRepository(store).list()
    patients = attach_visits(patients, appointments, today_iso())
    return run_query(
        patients,
        with_filters(query, status=status, gender=gender, blood_group=blood_group or blood_group_snake),
        search_fields=SEARCH_FIELDS,
        date_fields=DATE_FIELDS,
        numeric_fields=NUMERIC_FIELDS
    )


@router.get("/stats", response_model=PatientStats)
async def get_patient_stats(store: DocumentStore = Depends(get_store)):
    return patient_stats(
        PatientRepository(store).list_all(),
        AppointmentRepository(store).list(),
        clinic_now().date()
    )


@router.get("/search", response_model=List[Patient])
async def search_patients(
    q: str = Query(..., min_length=1, max_length=100),
    store: DocumentStore = Depends(get_store)
):
    return PatientRepository(store).search(q)


@router.get("/by-user/{user_id}", response_model=Patient)
async def get_patient_by_user(user_id: str, store: DocumentStore = Depends(get_store)):
    patient = PatientRepository(store).get_by_user_id(user_id)
    if patient is None:
        raise not_found("Patient")
    return patient


@router.get("/{patient_id}", response_model=Patient)
async def get_patient(patient_id: str, store: DocumentStore = Depends(get_store)):
    patient = PatientRepository(store).get_or_none(patient_id)
    if patient is None:
        raise not_found("Patient")
    return patient


@router.get("/{patient_id}/appointments", response_model=List[Appointment])
async def get_patient_appointments(patient_id: str, store: DocumentStore = Depends(get_store)):
    return AppointmentRepository(store).list_by_patient(patient_id)


@router.post("/", response_model=Patient, status_code=status.HTTP_201_CREATED)
async def create_patient(patient_in: PatientCreate, store: DocumentStore = Depends(get_store)):
    return PatientRepository(store).create(patient_in)


@router.put("/{patient_id}", response_model=Patient)
async def update_patient(
    patient_id: str,
    patient_update: PatientUpdate,
    store: DocumentStore = Depends(get_store)
):
    patients = PatientRepository(store)
    patients.update_patient(patient_id, patient_update)
    return patients.get(patient_id)


@router.post("/{patient_id}/deactivate", response_model=Patient)
async def deactivate_patient(patient_id: str, store: DocumentStore = Depends(get_store)):
    patients = PatientRepository(store)
    patients.deactivate(patient_id)
    logger.info(f"Patient {patient_id} deactivated")
    return patients.get(patient_id)


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_patient(patient_id: str, store: DocumentStore = Depends(get_store)):
    PatientRepository(store).delete(patient_id)
