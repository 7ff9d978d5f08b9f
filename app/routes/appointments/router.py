# app/routes/appointments/router.py
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.config import settings
from app.models.all_models import AppointmentStatus, AppointmentType, Priority
from app.repositories import AppointmentRepository
from app.repositories.appointments import SEARCH_FIELDS
from app.routes.utils.listing import get_store, list_query, not_found, with_filters
from app.schemas.appointment import (
    TIME_PATTERN, Appointment, AppointmentCreate, AppointmentStatusUpdate, AppointmentUpdate, SlotAvailability
)
from app.schemas.common import Page
from app.schemas.dashboard import AppointmentStats
from app.services.query import ListQuery, run_query
from app.services.stats import appointment_stats
from app.store import DocumentStore
from app.utils.dates import today_iso

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["appointments"])

DATE_FIELDS = ("date", "booked_at", "created_at")
NUMERIC_FIELDS = ("previous_visits", "patient_age")


@router.get("/", response_model=Page[Appointment])
async def list_appointments(
    status: Optional[AppointmentStatus] = Query(None),
    type: Optional[AppointmentType] = Query(None),
    priority: Optional[Priority] = Query(None),
    doctor_id: Optional[str] = Query(None),
    branch_id: Optional[str] = Query(None),
    day: Optional[date] = Query(None, alias="date"),
    query: ListQuery = Depends(list_query),
    store: DocumentStore = Depends(get_store)
):
    appointments = AppointmentRepository(store).list_all(
        doctor_id=doctor_id,
        branch_id=branch_id,
        date=day.isoformat() if day else None
    )
    return run_query(
        appointments,
        with_filters(query, status=status, type=type, priority=priority),
        search_fields=SEARCH_FIELDS,
        date_fields=DATE_FIELDS,
        numeric_fields=NUMERIC_FIELDS
    )


@router.get("/stats", response_model=AppointmentStats)
async def get_appointment_stats(
    doctor_id: Optional[str] = Query(None),
    branch_id: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store)
):
    appointments = AppointmentRepository(store).list_all(doctor_id=doctor_id, branch_id=branch_id)
    return appointment_stats(appointments, today=today_iso())


@router.get("/today", response_model=List[Appointment])
async def get_todays_appointments(store: DocumentStore = Depends(get_store)):
    return AppointmentRepository(store).list_for_date()


@router.get("/upcoming", response_model=List[Appointment])
async def get_upcoming_appointments(
    days: int = Query(settings.UPCOMING_DAYS, ge=1, le=90),
    store: DocumentStore = Depends(get_store)
):
    return AppointmentRepository(store).list_upcoming(days)


@router.get("/availability", response_model=SlotAvailability)
async def check_availability(
    doctor_id: str = Query(...),
    branch_id: str = Query(...),
    day: date = Query(..., alias="date"),
    time: str = Query(..., pattern=TIME_PATTERN),
    store: DocumentStore = Depends(get_store)
):
    available = AppointmentRepository(store).check_time_slot_availability(
        doctor_id, branch_id, day.isoformat(), time
    )
    return SlotAvailability(
        doctor_id=doctor_id,
        branch_id=branch_id,
        date=day.isoformat(),
        time=time,
        available=available
    )


@router.get("/{appointment_id}", response_model=Appointment)
async def get_appointment(appointment_id: str, store: DocumentStore = Depends(get_store)):
    appointment = AppointmentRepository(store).get_or_none(appointment_id)
    if appointment is None:
        raise not_found("Appointment")
    return appointment


@router.post("/", response_model=Appointment, status_code=status.HTTP_201_CREATED)
async def create_appointment(appointment_in: AppointmentCreate, store: DocumentStore = Depends(get_store)):
    appointments = AppointmentRepository(store)
    if appointment_in.branch_id and not appointments.check_time_slot_availability(
        appointment_in.doctor_id,
        appointment_in.branch_id,
        appointment_in.date.isoformat(),
        appointment_in.time
    ):
        logger.warning(
            f"Slot clash for doctor {appointment_in.doctor_id} on {appointment_in.date} at {appointment_in.time}"
        )
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Doctor already has an appointment at this time"
        )
    return appointments.create(appointment_in)


@router.put("/{appointment_id}", response_model=Appointment)
async def update_appointment(
    appointment_id: str,
    appointment_update: AppointmentUpdate,
    store: DocumentStore = Depends(get_store)
):
    appointments = AppointmentRepository(store)
    appointments.update_appointment(appointment_id, appointment_update)
    return appointments.get(appointment_id)


@router.patch("/{appointment_id}/status", response_model=Appointment)
async def update_appointment_status(
    appointment_id: str,
    status_update: AppointmentStatusUpdate,
    store: DocumentStore = Depends(get_store)
):
    appointments = AppointmentRepository(store)
    appointments.update_status(appointment_id, status_update.status.value)
    return appointments.get(appointment_id)


@router.delete("/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_appointment(appointment_id: str, store: DocumentStore = Depends(get_store)):
    AppointmentRepository(store).delete(appointment_id)
