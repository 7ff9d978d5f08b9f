# app/repositories/billing.py
import logging
from typing import Any, Dict, List, Optional

from app.models.all_models import Collection, PaymentStatus, clinic_now
from app.repositories.base import BaseRepository, dump_for_create, new_id
from app.repositories.patients import PatientRepository
from app.schemas.billing import BillingCreate, BillingRecord

logger = logging.getLogger(__name__)

BILLING_DEFAULTS = {
    "patientName": "Unknown Patient",
    "status": PaymentStatus.PENDING.value,
    "services": [],
    "subtotal": 0,
    "discount": 0,
    "tax": 0,
}


def compute_total(subtotal: float, discount: float, tax: float) -> float:
    return round(subtotal - discount + tax, 2)


class BillingRepository(BaseRepository[BillingRecord]):
    collection = Collection.BILLING.value
    model = BillingRecord
    defaults = BILLING_DEFAULTS

    def normalize(self, record) -> BillingRecord:
        data = dict(record)
        if data.get("total") in (None, ""):
            data["total"] = compute_total(
                data.get("subtotal") or 0, data.get("discount") or 0, data.get("tax") or 0
            )
        return super().normalize(data)

    def list_all(self, status: Optional[str] = None) -> List[BillingRecord]:
        bills = self.list({"status": status} if status else None)
        return sorted(bills, key=lambda b: b.created_at.isoformat() if b.created_at else "", reverse=True)

    def list_by_patient(self, patient_id: str) -> List[BillingRecord]:
        bills = self.list({"patientId": patient_id})
        return sorted(bills, key=lambda b: b.created_at.isoformat() if b.created_at else "", reverse=True)

    def create(self, payload: BillingCreate, doc_id: Optional[str] = None) -> BillingRecord:
        fields = dump_for_create(payload)
        if payload.subtotal is None:
            fields["subtotal"] = round(sum(item.amount for item in payload.services), 2)
        fields["total"] = compute_total(fields["subtotal"], payload.discount, payload.tax)
        if not payload.patient_name:
            fields["patientName"] = PatientRepository(self.store).get(payload.patient_id).name
        if payload.status == PaymentStatus.PAID:
            fields["paidAt"] = clinic_now().isoformat()
        bill = self._create(fields, doc_id or new_id("BILL"))
        logger.info(f"Created bill {bill.id} for patient {bill.patient_id}: {bill.total}")
        return bill

    def update_status(self, bill_id: str, status: str, payment_method: Optional[str] = None) -> None:
        fields: Dict[str, Any] = {"status": status}
        if payment_method:
            fields["paymentMethod"] = payment_method
        if status == PaymentStatus.PAID.value:
            fields["paidAt"] = clinic_now().isoformat()
        self.update(bill_id, fields)
        logger.info(f"Bill {bill_id} marked {status}")
