# app/routes/billing/router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.models.all_models import PaymentStatus
from app.repositories import BillingRepository
from app.routes.utils.listing import get_store, list_query, not_found, with_filters
from app.schemas.billing import BillingCreate, BillingRecord, BillingStatusUpdate
from app.schemas.common import Page
from app.schemas.dashboard import BillingStats
from app.services.query import ListQuery, run_query
from app.services.stats import billing_stats
from app.store import DocumentStore

router = APIRouter(prefix="/billing", tags=["billing"])

SEARCH_FIELDS = ("id", "patient_name", "patient_id", "appointment_id")


@router.get("/", response_model=Page[BillingRecord])
async def list_bills(
    status: Optional[PaymentStatus] = Query(None),
    patient_id: Optional[str] = Query(None),
    query: ListQuery = Depends(list_query),
    store: DocumentStore = Depends(get_store)
):
    return run_query(
        BillingRepository(store).list_all(),
        with_filters(query, status=status, patient_id=patient_id),
        search_fields=SEARCH_FIELDS,
        date_fields=("created_at", "paid_at"),
        numeric_fields=("subtotal", "discount", "tax", "total")
    )


@router.get("/stats", response_model=BillingStats)
async def get_billing_stats(store: DocumentStore = Depends(get_store)):
    return billing_stats(BillingRepository(store).list_all())


@router.get("/patient/{patient_id}", response_model=List[BillingRecord])
async def get_patient_bills(patient_id: str, store: DocumentStore = Depends(get_store)):
    return BillingRepository(store).list_by_patient(patient_id)


@router.get("/{bill_id}", response_model=BillingRecord)
async def get_bill(bill_id: str, store: DocumentStore = Depends(get_store)):
    bill = BillingRepository(store).get_or_none(bill_id)
    if bill is None:
        raise not_found("Bill")
    return bill


@router.post("/", response_model=BillingRecord, status_code=status.HTTP_201_CREATED)
async def create_bill(bill_in: BillingCreate, store: DocumentStore = Depends(get_store)):
    return BillingRepository(store).create(bill_in)


@router.patch("/{bill_id}/status", response_model=BillingRecord)
async def update_bill_status(
    bill_id: str,
    status_update: BillingStatusUpdate,
    store: DocumentStore = Depends(get_store)
):
    bills = BillingRepository(store)
    bills.update_status(bill_id, status_update.status.value, status_update.payment_method)
    return bills.get(bill_id)


@router.delete("/{bill_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bill(bill_id: str, store: DocumentStore = Depends(get_store)):
    BillingRepository(store).delete(bill_id)
