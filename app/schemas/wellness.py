# app/schemas/wellness.py
from pydantic import Field
from typing import Optional, List
from datetime import date, datetime

from app.models.all_models import PackageType, PackageCategory, PackageStatus
from app.schemas.common import CamelModel

class ValidityPeriod(CamelModel):
    start: str = ""
    end: str = ""

class WellnessPackage(CamelModel):
    id: str
    name: str = "Untitled Package"
    description: str = ""
    type: str = PackageType.BASIC.value
    category: str = PackageCategory.COMPREHENSIVE.value
    status: str = PackageStatus.ACTIVE.value
    duration: int = 0  # months
    price: float = 0
    discounted_price: Optional[float] = None
    discount_percentage: Optional[float] = None
    features: List[str] = []
    inclusions: List[str] = []
    target_audience: List[str] = []
    recommended_for: List[str] = []
    max_members: Optional[int] = None
    validity_period: ValidityPeriod = Field(default_factory=ValidityPeriod)
    sales_count: int = 0
    rating: float = 0
    popularity: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class ValidityPeriodIn(CamelModel):
    start: date
    end: date

class WellnessPackageBase(CamelModel):
    description: Optional[str] = None
    discounted_price: Optional[float] = Field(None, ge=0)
    discount_percentage: Optional[float] = Field(None, ge=0, le=100)
    features: Optional[List[str]] = None
    inclusions: Optional[List[str]] = None
    target_audience: Optional[List[str]] = None
    recommended_for: Optional[List[str]] = None
    max_members: Optional[int] = Field(None, ge=1)
    validity_period: Optional[ValidityPeriodIn] = None

class WellnessPackageCreate(WellnessPackageBase):
    name: str = Field(..., min_length=1, max_length=200)
    type: PackageType = PackageType.BASIC
    category: PackageCategory = PackageCategory.COMPREHENSIVE
    status: PackageStatus = PackageStatus.ACTIVE
    duration: int = Field(..., ge=1)
    price: float = Field(..., ge=0)
    popularity: int = Field(1, ge=1, le=5)

class WellnessPackageUpdate(WellnessPackageBase):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[PackageType] = None
    category: Optional[PackageCategory] = None
    status: Optional[PackageStatus] = None
    duration: Optional[int] = Field(None, ge=1)
    price: Optional[float] = Field(None, ge=0)
    popularity: Optional[int] = Field(None, ge=1, le=5)
    sales_count: Optional[int] = Field(None, ge=0)
    rating: Optional[float] = Field(None, ge=0, le=5)
