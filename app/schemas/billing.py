# app/schemas/billing.py
from pydantic import Field
from typing import Optional, List
from datetime import datetime

from app.models.all_models import PaymentStatus
from app.schemas.common import CamelModel

class ServiceItem(CamelModel):
    name: str
    amount: float = Field(..., ge=0)

class BillingRecord(CamelModel):
    id: str
    patient_id: str = ""
    appointment_id: str = ""
    package_id: Optional[str] = None
    patient_name: str = "Unknown Patient"
    services: List[ServiceItem] = []
    subtotal: float = 0
    discount: float = 0
    tax: float = 0
    total: float = 0
    status: str = PaymentStatus.PENDING.value
    payment_method: Optional[str] = None
    paid_at: Optional[str] = None
    created_by: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class BillingCreate(CamelModel):
    patient_id: str
    appointment_id: Optional[str] = None
    package_id: Optional[str] = None
    patient_name: Optional[str] = None
    services: List[ServiceItem] = []
    subtotal: Optional[float] = Field(None, ge=0)
    discount: float = Field(0, ge=0)
    tax: float = Field(0, ge=0)
    status: PaymentStatus = PaymentStatus.PENDING
    payment_method: Optional[str] = None
    created_by: str = ""

class BillingStatusUpdate(CamelModel):
    status: PaymentStatus
    payment_method: Optional[str] = None
