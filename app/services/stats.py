# app/services/stats.py
"""
Dashboard counters derived from repository result sets.

All functions are pure and safe on empty input: counts are 0, sums are 0
and averages come back as the string "0".
"""
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

from app.models.all_models import AppointmentStatus, AppointmentType, PackageStatus, PatientStatus, PaymentStatus
from app.services.query import field_value
from app.utils.dates import parse_datetime


def count_by(records: Iterable[Any], key: str, values: Sequence[str] = ()) -> Dict[str, int]:
    """Count records per value of ``key``; ``values`` seeds zero counts in that order."""
    counts: Dict[str, int] = {v: 0 for v in values}
    for record in records:
        value = field_value(record, key)
        if value is None:
            value = "unknown"
        counts[value] = counts.get(value, 0) + 1
    return dict(counts)


def count_where(records: Iterable[Any], key: str, *values: Any) -> int:
    return sum(1 for r in records if field_value(r, key) in values)


def sum_field(records: Iterable[Any], key: str) -> float:
    total = 0
    for record in records:
        value = field_value(record, key)
        if value:
            total += value
    return total


def average_field(records: Sequence[Any], key: str, digits: int = 1) -> str:
    records = list(records)
    if not records:
        return "0"
    return f"{sum_field(records, key) / len(records):.{digits}f}"


def appointment_stats(appointments: Sequence[Any], today: Optional[str] = None) -> Dict[str, Any]:
    by_status = count_by(appointments, "status", [s.value for s in AppointmentStatus])
    waiting = by_status[AppointmentStatus.CONFIRMED.value] + by_status[AppointmentStatus.PENDING.value]
    stats = {
        "total": len(appointments),
        "by_status": by_status,
        "by_type": count_by(appointments, "type", [t.value for t in AppointmentType]),
        "by_priority": count_by(appointments, "priority"),
        "waiting": waiting,
        "new_patients": count_where(appointments, "type", AppointmentType.NEW.value),
        "avg_visits": average_field(appointments, "previous_visits"),
    }
    if today is not None:
        stats["today"] = count_where(appointments, "date", today)
    return stats


def billing_stats(bills: Sequence[Any]) -> Dict[str, Any]:
    paid = [b for b in bills if field_value(b, "status") == PaymentStatus.PAID.value]
    return {
        "total": len(bills),
        "by_status": count_by(bills, "status", [s.value for s in PaymentStatus]),
        "pending_bills": count_where(bills, "status", PaymentStatus.PENDING.value, PaymentStatus.PARTIAL.value),
        "total_revenue": sum_field(paid, "total"),
        "outstanding": sum_field(
            [b for b in bills if field_value(b, "status") != PaymentStatus.PAID.value], "total"
        ),
    }


def patient_stats(patients: Sequence[Any], appointments: Sequence[Any], today: date) -> Dict[str, Any]:
    def registered_this_month(patient) -> bool:
        registered = parse_datetime(field_value(patient, "registered_date"))
        return registered is not None and (registered.year, registered.month) == (today.year, today.month)

    return {
        "total_patients": len(patients),
        "active_patients": count_where(patients, "status", PatientStatus.ACTIVE.value),
        "new_this_month": sum(1 for p in patients if registered_this_month(p)),
        "appointments_today": count_where(appointments, "date", today.isoformat()),
    }


def wellness_stats(packages: Sequence[Any]) -> Dict[str, Any]:
    return {
        "total_packages": len(packages),
        "active_packages": count_where(packages, "status", PackageStatus.ACTIVE.value),
        "total_sales": int(sum_field(packages, "sales_count")),
        "average_rating": average_field(packages, "rating"),
        "by_type": count_by(packages, "type"),
        "by_category": count_by(packages, "category"),
    }


def attach_visits(patients: Sequence[Any], appointments: Sequence[Any], today: str) -> List[Any]:
    """Copy each patient with total visits, last visit and next pending/confirmed visit filled in."""
    by_patient: Dict[str, List[Any]] = {}
    for appointment in appointments:
        by_patient.setdefault(appointment.patient_id, []).append(appointment)

    enriched = []
    for patient in patients:
        visits = by_patient.get(patient.id, [])
        dates = sorted(a.date for a in visits if a.date)
        upcoming = sorted(
            a.date for a in visits
            if a.date and a.date >= today and a.status in (AppointmentStatus.CONFIRMED.value, AppointmentStatus.PENDING.value)
        )
        enriched.append(patient.model_copy(update={
            "total_visits": len(visits),
            "last_visit": dates[-1] if dates else patient.last_visit,
            "next_visit": upcoming[0] if upcoming else None,
        }))
    return enriched
