# app/routes/doctors/router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.repositories import DoctorProfileRepository, DoctorRepository
from app.repositories.doctors import SEARCH_FIELDS
from app.routes.utils.listing import get_store, list_query, not_found, with_filters
from app.schemas.common import Page
from app.schemas.doctor import Doctor, DoctorCreate, DoctorProfile, DoctorProfileCreate, DoctorUpdate
from app.services.query import ListQuery, run_query
from app.store import DocumentStore

router = APIRouter(prefix="/doctors", tags=["doctors"])


@router.get("/", response_model=Page[Doctor])
async def list_doctors(
    branch: Optional[str] = Query(None),
    specialization: Optional[str] = Query(None),
    query: ListQuery = Depends(list_query),
    store: DocumentStore = Depends(get_store)
):
    doctors = DoctorRepository(store).list_doctors(branch)
    return run_query(
        doctors,
        with_filters(query, specialization=specialization),
        search_fields=SEARCH_FIELDS,
        date_fields=("created_at",)
    )


@router.get("/search", response_model=List[Doctor])
async def search_doctors(
    q: str = Query(..., min_length=1, max_length=100),
    branch: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store)
):
    return DoctorRepository(store).search(q, branch)


@router.get("/profiles/branch/{branch_id}", response_model=List[DoctorProfile])
async def list_branch_profiles(branch_id: str, store: DocumentStore = Depends(get_store)):
    return DoctorProfileRepository(store).list_profiles_by_branch(branch_id)


@router.post("/profiles", response_model=DoctorProfile, status_code=status.HTTP_201_CREATED)
async def create_doctor_profile(profile_in: DoctorProfileCreate, store: DocumentStore = Depends(get_store)):
    return DoctorProfileRepository(store).create_profile(profile_in)


@router.get("/{doctor_id}", response_model=Doctor)
async def get_doctor(doctor_id: str, store: DocumentStore = Depends(get_store)):
    """Unknown ids resolve to the default doctor rather than a 404."""
    return DoctorRepository(store).get_details(doctor_id)


@router.get("/{user_id}/profile", response_model=DoctorProfile)
async def get_doctor_profile(user_id: str, store: DocumentStore = Depends(get_store)):
    profile = DoctorProfileRepository(store).get_profile_by_user_id(user_id)
    if profile is None:
        raise not_found("Doctor profile")
    return profile


@router.post("/", response_model=Doctor, status_code=status.HTTP_201_CREATED)
async def create_doctor(doctor_in: DoctorCreate, store: DocumentStore = Depends(get_store)):
    return DoctorRepository(store).create(doctor_in)


@router.put("/{doctor_id}", response_model=Doctor)
async def update_doctor(
    doctor_id: str,
    doctor_update: DoctorUpdate,
    store: DocumentStore = Depends(get_store)
):
    doctors = DoctorRepository(store)
    doctors.update_doctor(doctor_id, doctor_update)
    return doctors.get_details(doctor_id)
