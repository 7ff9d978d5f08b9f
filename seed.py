import argparse
import logging
from datetime import timedelta

from app.database import SessionLocal, engine
from app.models.all_models import Base, UserRole, clinic_now
from app.repositories import (
    AppointmentRepository, BillingRepository, BranchRepository, DoctorProfileRepository,
    DoctorRepository, PatientRepository, UserRepository, WellnessRepository
)
from app.schemas.appointment import AppointmentCreate
from app.schemas.billing import BillingCreate, ServiceItem
from app.schemas.branch import BranchCreate
from app.schemas.doctor import DoctorCreate, DoctorProfileCreate
from app.schemas.patient import PatientCreate
from app.schemas.user import UserCreate
from app.schemas.wellness import WellnessPackageCreate
from app.store import DocumentStore

BRANCHES = [
    {"name": "Colombo Central", "code": "CMB", "location": "Colombo 07", "phone": "0112345678"},
    {"name": "Kandy", "code": "KDY", "location": "Peradeniya Road", "phone": "0812345678"},
]

DOCTORS = [
    {"id": "doc-perera", "name": "Dr. Nimal Perera", "specialization": "Cardiologist", "branch": "CMB"},
    {"id": "doc-silva", "name": "Dr. Anoma Silva", "specialization": "General Physician", "branch": "KDY"},
]

PATIENTS = [
    {"name": "John Doe", "gender": "male", "date_of_birth": "1985-04-12", "phone": "0771234567", "blood_group": "O+"},
    {"name": "Kamala Fernando", "gender": "female", "date_of_birth": "1992-09-30", "phone": "0777654321"},
    {"name": "Ravi Jayasuriya", "gender": "male", "date_of_birth": "1960-01-05", "phone": "0711112222",
     "medical_history": ["Hypertension"]},
]

PACKAGES = [
    {"name": "Heart Health Check", "type": "premium", "category": "preventive", "duration": 3, "price": 25000},
    {"name": "Family Fitness", "type": "family", "category": "fitness", "duration": 12, "price": 90000,
     "discounted_price": 75000},
]


def seed_sample_data(appointments_per_patient: int = 2):
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    store = DocumentStore(db)

    try:
        for branch in BRANCHES:
            BranchRepository(store).create(BranchCreate(**branch))

        for doctor in DOCTORS:
            DoctorRepository(store).create(DoctorCreate(**doctor))
            DoctorProfileRepository(store).create_profile(DoctorProfileCreate(
                user_id=doctor["id"],
                name=doctor["name"],
                specialization=doctor["specialization"],
                branch_id=doctor["branch"].lower(),
                available_days=["Monday", "Wednesday", "Friday"],
                consultation_fee=2500
            ))

        UserRepository(store).register(UserCreate(
            id="staff-reception",
            name="Front Desk",
            email="reception@clinic.example.com",
            mobile="0110000000",
            role=UserRole.STAFF,
            branch="CMB",
            department="Reception"
        ))

        for package in PACKAGES:
            WellnessRepository(store).create(WellnessPackageCreate(**package))

        today = clinic_now().date()
        for i, data in enumerate(PATIENTS):
            patient = PatientRepository(store).create(PatientCreate(**data, branch_id="cmb"))
            for n in range(appointments_per_patient):
                doctor = DOCTORS[(i + n) % len(DOCTORS)]
                appointment = AppointmentRepository(store).create(AppointmentCreate(
                    patient_id=patient.id,
                    doctor_id=doctor["id"],
                    branch_id=doctor["branch"].lower(),
                    date=today + timedelta(days=n),
                    time=f"{9 + i:02d}:{30 * n % 60:02d}",
                    status="confirmed" if n == 0 else "pending",
                    reason="Routine check-up",
                    previous_visits=n
                ))
                BillingRepository(store).create(BillingCreate(
                    patient_id=patient.id,
                    appointment_id=appointment.id,
                    patient_name=patient.name,
                    services=[ServiceItem(name="Consultation", amount=2500)],
                    tax=125
                ))
            print(f"Seeded patient {patient.name} ({patient.id})")

        print("Sample data created successfully")
    except Exception as e:
        db.rollback()
        print(f"Error seeding sample data: {str(e)}")
        raise
    finally:
        db.close()

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Load sample clinic data")
    parser.add_argument("--appointments", type=int, default=2, help="Appointments per patient")
    parser.add_argument("--log-level", default="WARNING", help="Logging level while seeding")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level)

    seed_sample_data(appointments_per_patient=args.appointments)
