from datetime import date

from app.schemas.appointment import Appointment
from app.schemas.patient import Patient
from app.services.stats import (
    appointment_stats, attach_visits, average_field, billing_stats, count_by, patient_stats, sum_field, wellness_stats
)


def test_average_visits():
    assert average_field([], "previousVisits") == "0"
    assert average_field([{"previousVisits": v} for v in (2, 4, 6)], "previousVisits") == "4.0"


def test_sum_field_skips_missing_values():
    assert sum_field([{"total": 100}, {"total": None}, {}, {"total": 50.5}], "total") == 150.5
    assert sum_field([], "total") == 0


def test_count_by_seeds_known_values():
    counts = count_by([{"status": "paid"}, {"status": "paid"}, {}], "status", ["pending", "paid"])

    assert counts == {"pending": 0, "paid": 2, "unknown": 1}


def test_appointment_stats_on_empty_input():
    stats = appointment_stats([])

    assert stats["total"] == 0
    assert stats["waiting"] == 0
    assert stats["avg_visits"] == "0"
    assert stats["by_status"]["pending"] == 0
    assert "today" not in stats


def test_appointment_stats():
    appointments = [
        Appointment(id="a1", token="TK-1", status="pending", type="new", previous_visits=0, date="2024-06-01"),
        Appointment(id="a2", token="TK-2", status="confirmed", type="follow-up", previous_visits=3, date="2024-06-01"),
        Appointment(id="a3", token="TK-3", status="completed", type="new", previous_visits=6, date="2024-05-30"),
    ]

    stats = appointment_stats(appointments, today="2024-06-01")

    assert stats["total"] == 3
    assert stats["waiting"] == 2
    assert stats["new_patients"] == 2
    assert stats["avg_visits"] == "3.0"
    assert stats["by_status"]["completed"] == 1
    assert stats["by_type"]["follow-up"] == 1
    assert stats["today"] == 2


def test_billing_stats():
    bills = [
        {"status": "paid", "total": 1000},
        {"status": "pending", "total": 500},
        {"status": "partial", "total": 250},
    ]

    stats = billing_stats(bills)

    assert stats["total_revenue"] == 1000
    assert stats["outstanding"] == 750
    assert stats["pending_bills"] == 2
    assert stats["by_status"] == {"pending": 1, "partial": 1, "paid": 1}


def test_patient_stats():
    patients = [
        {"status": "active", "registered_date": "2024-06-03"},
        {"status": "inactive", "registered_date": "2024-05-28"},
        {"status": "active", "registered_date": None},
    ]
    appointments = [{"date": "2024-06-10"}, {"date": "2024-06-11"}]

    stats = patient_stats(patients, appointments, date(2024, 6, 10))

    assert stats == {
        "total_patients": 3,
        "active_patients": 2,
        "new_this_month": 1,
        "appointments_today": 1,
    }


def test_wellness_stats():
    packages = [
        {"status": "active", "sales_count": 10, "rating": 4.5, "type": "premium", "category": "fitness"},
        {"status": "upcoming", "sales_count": 0, "rating": 3.5, "type": "basic", "category": "fitness"},
    ]

    stats = wellness_stats(packages)

    assert stats["total_packages"] == 2
    assert stats["active_packages"] == 1
    assert stats["total_sales"] == 10
    assert stats["average_rating"] == "4.0"
    assert stats["by_category"] == {"fitness": 2}


def test_attach_visits():
    patients = [Patient(id="p1", name="John Doe"), Patient(id="p2", name="Kamala Fernando")]
    appointments = [
        Appointment(id="a1", token="TK-1", patient_id="p1", date="2024-05-01", status="completed"),
        Appointment(id="a2", token="TK-2", patient_id="p1", date="2024-06-20", status="confirmed"),
        Appointment(id="a3", token="TK-3", patient_id="p1", date="2024-06-15", status="cancelled"),
    ]

    john, kamala = attach_visits(patients, appointments, "2024-06-10")

    assert john.total_visits == 3
    assert john.last_visit == "2024-06-20"
    assert john.next_visit == "2024-06-20"
    assert kamala.total_visits == 0
    assert kamala.next_visit is None
