# app/routes/dashboard/router.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.routes.utils.listing import get_store
from app.schemas.dashboard import DoctorDashboard, StaffDashboard
from app.services.dashboards import doctor_dashboard, staff_dashboard
from app.store import DocumentStore

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/doctor/{doctor_id}", response_model=DoctorDashboard)
async def get_doctor_dashboard(doctor_id: str, store: DocumentStore = Depends(get_store)):
    return doctor_dashboard(store, doctor_id)


@router.get("/staff", response_model=StaffDashboard)
async def get_staff_dashboard(
    branch_id: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store)
):
    return staff_dashboard(store, branch_id)
