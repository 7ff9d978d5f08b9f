"""Normalization defaults and repository operations over the in-memory store."""
from datetime import date

import pytest

from app.exceptions import NotFound
from app.repositories import (
    AppointmentRepository, BillingRepository, BranchRepository, DoctorProfileRepository,
    DoctorRepository, PatientRepository, UserRepository, WellnessRepository
)
from app.repositories.wellness import duration_months, duration_predicate
from app.schemas.appointment import AppointmentCreate
from app.schemas.billing import BillingCreate, ServiceItem
from app.schemas.branch import BranchCreate
from app.schemas.doctor import DoctorCreate, DoctorProfileCreate
from app.schemas.patient import PatientCreate
from app.schemas.user import UserCreate
from app.utils.dates import age_on


# ===== Appointments =====

def test_missing_token_derived_from_id(store):
    store.create("appointments", {"patientId": "p1"}, "ab12cd34")

    appointment = AppointmentRepository(store).get("ab12cd34")

    assert appointment.token == "TK-AB12"


def test_appointment_defaults(store):
    store.create("appointments", {"patientId": "p1", "status": "", "reason": None}, "a1")

    appointment = AppointmentRepository(store).get("a1")

    assert appointment.status == "pending"
    assert appointment.reason == "No reason provided"
    assert appointment.priority == "medium"
    assert appointment.type == "new"
    assert appointment.previous_visits == 0
    assert appointment.insurance == "None"
    assert appointment.duration == "30 mins"
    assert appointment.patient_name == "Unknown Patient"


def test_stored_values_are_kept(store):
    store.create("appointments", {"token": "TK-9999", "status": "completed"}, "a1")

    appointment = AppointmentRepository(store).get("a1")

    assert appointment.token == "TK-9999"
    assert appointment.status == "completed"


def test_missing_appointment_degrades_to_placeholder(store):
    appointments = AppointmentRepository(store)

    assert appointments.get_or_none("zz99") is None
    placeholder = appointments.get("zz99")
    assert placeholder.id == "zz99"
    assert placeholder.token == "TK-ZZ99"


@pytest.mark.parametrize("status", ["pending", "confirmed"])
def test_slot_taken_by_holding_status(store, status):
    store.create("appointments", {
        "doctorId": "d1", "branchId": "b1", "date": "2024-06-01", "time": "10:00", "status": status
    })

    assert AppointmentRepository(store).check_time_slot_availability("d1", "b1", "2024-06-01", "10:00") is False


def test_slot_free_when_clash_is_cancelled_or_elsewhere(store):
    store.create("appointments", {
        "doctorId": "d1", "branchId": "b1", "date": "2024-06-01", "time": "10:00", "status": "cancelled"
    })
    store.create("appointments", {
        "doctorId": "d1", "branchId": "b1", "date": "2024-06-01", "time": "11:00", "status": "pending"
    })
    appointments = AppointmentRepository(store)

    assert appointments.check_time_slot_availability("d1", "b1", "2024-06-01", "10:00") is True
    assert appointments.check_time_slot_availability("d1", "b2", "2024-06-01", "11:00") is True


def test_create_appointment_denormalizes_names(store):
    patient = PatientRepository(store).create(PatientCreate(name="John Doe", phone="0771234567"))
    DoctorRepository(store).create(DoctorCreate(id="d1", name="Dr. Nimal Perera"))

    appointment = AppointmentRepository(store).create(AppointmentCreate(
        patient_id=patient.id, doctor_id="d1", branch_id="b1", date=date(2024, 6, 1), time="09:30"
    ))

    assert appointment.id.startswith("APP-")
    assert appointment.patient_name == "John Doe"
    assert appointment.patient_phone == "0771234567"
    assert appointment.doctor_name == "Dr. Nimal Perera"
    assert appointment.token.startswith("TK-")
    assert appointment.date == "2024-06-01"
    assert appointment.booked_at


def test_list_by_doctor_for_date_is_in_time_order(store):
    for doc_id, time in (("a1", "11:00"), ("a2", "09:00"), ("a3", "10:00")):
        store.create("appointments", {"doctorId": "d1", "date": "2024-06-01", "time": time}, doc_id)
    store.create("appointments", {"doctorId": "d1", "date": "2024-06-02", "time": "08:00"}, "a4")

    todays = AppointmentRepository(store).list_by_doctor("d1", date="2024-06-01")

    assert [a.id for a in todays] == ["a2", "a3", "a1"]


def test_update_status(store):
    store.create("appointments", {"status": "pending"}, "a1")
    appointments = AppointmentRepository(store)

    appointments.update_status("a1", "no-show")

    assert appointments.get("a1").status == "no-show"


# ===== Patients =====

def test_patient_defaults_and_legacy_fields(store):
    store.create("patients", {
        "name": "",
        "dob": "1990-05-20",
        "contact": "0771234567",
        "bloodType": "B+",
        "conditions": "Asthma, Diabetes",
        "insurance": "INS-1",
    }, "p1")

    patient = PatientRepository(store).get("p1")

    assert patient.name == "Unknown Patient"
    assert patient.status == "active"
    assert patient.date_of_birth == "1990-05-20"
    assert patient.phone == "0771234567"
    assert patient.blood_group == "B+"
    assert patient.medical_history == ["Asthma", "Diabetes"]
    assert patient.insurance_id == "INS-1"
    assert patient.registered_date is not None
    assert isinstance(patient.age, int)


def test_age_is_derived_from_date_of_birth():
    assert age_on("1990-05-20", today=date(2024, 5, 19)) == 33
    assert age_on("1990-05-20", today=date(2024, 5, 20)) == 34
    assert age_on(None) is None
    assert age_on("not a date") is None


def test_patient_search_by_name_email_phone(store):
    patients = PatientRepository(store)
    patients.create(PatientCreate(name="John Doe", email="john@example.com"))
    patients.create(PatientCreate(name="Kamala Fernando", phone="0777654321"))

    assert [p.name for p in patients.search("jo")] == ["John Doe"]
    assert [p.name for p in patients.search("0777")] == ["Kamala Fernando"]


def test_deactivate_patient(store):
    patients = PatientRepository(store)
    patient = patients.create(PatientCreate(name="John Doe"))

    patients.deactivate(patient.id)

    assert patients.get(patient.id).status == "inactive"


def test_legacy_capitalized_gender_is_canonical(store):
    store.create("patients", {"name": "John Doe", "gender": "Male", "bloodGroup": "o+"}, "p1")
    store.create("appointments", {"patientId": "p1", "patientGender": "Female "}, "a1")

    patient = PatientRepository(store).get("p1")
    appointment = AppointmentRepository(store).get("a1")

    assert patient.gender == "male"
    assert patient.blood_group == "O+"
    assert appointment.patient_gender == "female"


# ===== Doctors =====

def test_doctor_details_default(store):
    doctor = DoctorRepository(store).get_details("missing")

    assert doctor.name == "Dr. John Doe"
    assert doctor.specialization == "General Physician"


def test_list_doctors_only_returns_doctor_role(store):
    store.create("users", {"name": "Dr. B", "role": "doctor"}, "u1")
    store.create("users", {"name": "Reception", "role": "staff"}, "u2")
    store.create("users", {"name": "Dr. A", "role": "doctor"}, "u3")

    assert [d.name for d in DoctorRepository(store).list_doctors()] == ["Dr. A", "Dr. B"]


def test_doctor_profiles(store):
    profiles = DoctorProfileRepository(store)
    profiles.create_profile(DoctorProfileCreate(user_id="u1", name="Dr. A", branch_id="b1"))

    assert profiles.get_profile_by_user_id("u1").name == "Dr. A"
    assert profiles.get_profile_by_user_id("u2") is None
    assert [p.user_id for p in profiles.list_profiles_by_branch("b1")] == ["u1"]


# ===== Wellness packages =====

def test_legacy_session_pricing(store):
    store.create("wellnessPackages", {"name": "Yoga", "sessions": 10, "pricePerSession": 1500}, "w1")

    package = WellnessRepository(store).get("w1")

    assert package.price == 15000
    assert package.type == "basic"
    assert package.popularity == 1


def test_duration_buckets(store):
    for doc_id, months in (("w1", 3), ("w2", 4), ("w3", 6), ("w4", 12)):
        store.create("wellnessPackages", {"name": doc_id, "duration": months}, doc_id)
    packages = WellnessRepository(store).list()

    def bucket(name):
        return sorted(p.id for p in packages if duration_predicate(name)(p))

    assert bucket("short") == ["w1"]
    assert bucket("medium") == ["w2", "w3"]
    assert bucket("long") == ["w4"]
    assert duration_predicate(None) is None


def test_original_seeded_package_loads(store):
    store.create("wellnessPackages", {
        "name": "Cardiac Wellness Plan",
        "description": "Comprehensive cardiac care package",
        "sessions": 10,
        "pricePerSession": 7500,
        "totalPrice": 75000,
        "membershipDiscounts": 15,
        "duration": "3 months",
        "includes": ["Initial consultation", "ECG tests", "Diet plan"],
    }, "WP-001")

    package = WellnessRepository(store).get("WP-001")

    assert package.duration == 3
    assert package.price == 75000
    assert package.discount_percentage == 15
    assert package.inclusions == ["Initial consultation", "ECG tests", "Diet plan"]
    assert duration_predicate("short")(package)


def test_unreadable_duration_falls_back_to_default(store):
    store.create("wellnessPackages", {"name": "Open ended", "duration": "ongoing"}, "w1")

    assert WellnessRepository(store).get("w1").duration == 0
    assert duration_months("4 months") == 4
    assert duration_months(" 12") == 12
    assert duration_months(6.0) == 6
    assert duration_months(None) is None
    assert duration_months(True) is None


# ===== Billing =====

def test_create_bill_computes_totals(store):
    bill = BillingRepository(store).create(BillingCreate(
        patient_id="p1",
        services=[ServiceItem(name="Consultation", amount=2500), ServiceItem(name="ECG", amount=1500)],
        discount=500,
        tax=200
    ))

    assert bill.subtotal == 4000
    assert bill.total == 3700
    assert bill.status == "pending"
    assert bill.patient_name == "Unknown Patient"


def test_bill_marked_paid_stamps_paid_at(store):
    bills = BillingRepository(store)
    bill = bills.create(BillingCreate(patient_id="p1", subtotal=1000))

    bills.update_status(bill.id, "paid", "card")

    paid = bills.get(bill.id)
    assert paid.status == "paid"
    assert paid.payment_method == "card"
    assert paid.paid_at


def test_missing_total_is_derived(store):
    store.create("billing", {"subtotal": 100, "discount": 10, "tax": 5}, "bill1")

    assert BillingRepository(store).get("bill1").total == 95


# ===== Branches and users =====

def test_branch_lookup_by_code(store):
    branches = BranchRepository(store)
    branches.create(BranchCreate(name="Kandy", code="kdy"))
    branches.create(BranchCreate(name="Colombo", code="CMB"))

    assert branches.get_by_code("KDY").name == "Kandy"
    assert branches.get_by_code("nope") is None
    assert [b.name for b in branches.list_all()] == ["Colombo", "Kandy"]


def test_staff_defaults(store):
    store.create("users", {"role": "staff"}, "s1")

    staff = UserRepository(store).get_staff_details("s1")

    assert staff.name == "Unknown Staff"
    assert staff.department == "General"
    assert staff.branch == "Main"


def test_missing_staff_raises(store):
    with pytest.raises(NotFound):
        UserRepository(store).get_staff_details("ghost")


def test_email_and_mobile_taken(store):
    users = UserRepository(store)
    users.register(UserCreate(name="Front Desk", email="Desk@Clinic.com", mobile="0110000000", role="staff"))

    assert users.email_taken("desk@clinic.com") is True
    assert users.email_taken("other@clinic.com") is False
    assert users.mobile_taken("0110000000") is True
    assert users.mobile_taken("0119999999") is False
