# app/routes/wellness/router.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.models.all_models import PackageCategory, PackageStatus, PackageType
from app.repositories import WellnessRepository
from app.repositories.wellness import DURATION_BUCKETS, SEARCH_FIELDS, duration_predicate
from app.routes.utils.listing import get_store, list_query, not_found, with_filters
from app.schemas.common import Page
from app.schemas.dashboard import WellnessStats
from app.schemas.wellness import WellnessPackage, WellnessPackageCreate, WellnessPackageUpdate
from app.services.query import ListQuery, run_query
from app.services.stats import wellness_stats
from app.store import DocumentStore

router = APIRouter(prefix="/wellness-packages", tags=["wellness"])

NUMERIC_FIELDS = ("price", "discounted_price", "duration", "rating", "popularity", "sales_count")
DURATION_PATTERN = "^(" + "|".join(DURATION_BUCKETS) + ")$"


@router.get("/", response_model=Page[WellnessPackage])
async def list_packages(
    type: Optional[PackageType] = Query(None),
    category: Optional[PackageCategory] = Query(None),
    status: Optional[PackageStatus] = Query(None),
    duration: Optional[str] = Query(None, pattern=DURATION_PATTERN, description="short, medium or long"),
    query: ListQuery = Depends(list_query),
    store: DocumentStore = Depends(get_store)
):
    predicate = duration_predicate(duration)
    return run_query(
        WellnessRepository(store).list_all(),
        with_filters(query, type=type, category=category, status=status),
        search_fields=SEARCH_FIELDS,
        date_fields=("created_at",),
        numeric_fields=NUMERIC_FIELDS,
        predicates=[predicate] if predicate else []
    )


@router.get("/stats", response_model=WellnessStats)
async def get_package_stats(store: DocumentStore = Depends(get_store)):
    return wellness_stats(WellnessRepository(store).list_all())


@router.get("/{package_id}", response_model=WellnessPackage)
async def get_package(package_id: str, store: DocumentStore = Depends(get_store)):
    package = WellnessRepository(store).get_or_none(package_id)
    if package is None:
        raise not_found("Wellness package")
    return package


@router.post("/", response_model=WellnessPackage, status_code=status.HTTP_201_CREATED)
async def create_package(package_in: WellnessPackageCreate, store: DocumentStore = Depends(get_store)):
    validity = package_in.validity_period
    if validity and validity.end < validity.start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Validity period ends before it starts"
        )
    return WellnessRepository(store).create(package_in)


@router.put("/{package_id}", response_model=WellnessPackage)
async def update_package(
    package_id: str,
    package_update: WellnessPackageUpdate,
    store: DocumentStore = Depends(get_store)
):
    packages = WellnessRepository(store)
    packages.update_package(package_id, package_update)
    return packages.get(package_id)


@router.delete("/{package_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_package(package_id: str, store: DocumentStore = Depends(get_store)):
    WellnessRepository(store).delete(package_id)
