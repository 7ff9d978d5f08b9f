# app/models/all_models.py
from sqlalchemy import Column, String, DateTime, JSON, Index, text
from sqlalchemy.ext.declarative import declarative_base
import enum
from datetime import datetime
import pytz

from app.config import settings

Base = declarative_base()

# Timezone setup
CLINIC_TZ = pytz.timezone(settings.TIME_ZONE)

def clinic_now():
    return datetime.now(CLINIC_TZ)

# Collection names as stored in the document store
class Collection(str, enum.Enum):
    USERS = "users"
    PATIENTS = "patients"
    APPOINTMENTS = "appointments"
    DOCTORS = "doctors"
    BRANCHES = "branches"
    WELLNESS_PACKAGES = "wellnessPackages"
    BILLING = "billing"

# Enums
class UserRole(str, enum.Enum):
    PATIENT = "patient"
    DOCTOR = "doctor"
    STAFF = "staff"
    ADMIN = "admin"

class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"

class BloodGroup(str, enum.Enum):
    A_POSITIVE = "A+"
    A_NEGATIVE = "A-"
    B_POSITIVE = "B+"
    B_NEGATIVE = "B-"
    AB_POSITIVE = "AB+"
    AB_NEGATIVE = "AB-"
    O_POSITIVE = "O+"
    O_NEGATIVE = "O-"

class PatientStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"

class AppointmentStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"

class AppointmentType(str, enum.Enum):
    NEW = "new"
    FOLLOW_UP = "follow-up"
    REVIEW = "review"

class Priority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    EMERGENCY = "emergency"

class PackageType(str, enum.Enum):
    BASIC = "basic"
    PREMIUM = "premium"
    CORPORATE = "corporate"
    FAMILY = "family"
    SENIOR = "senior"

class PackageCategory(str, enum.Enum):
    FITNESS = "fitness"
    NUTRITION = "nutrition"
    MENTAL_HEALTH = "mental_health"
    PREVENTIVE = "preventive"
    COMPREHENSIVE = "comprehensive"

class PackageStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    UPCOMING = "upcoming"

class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"

# Statuses that hold a doctor's time slot
SLOT_HOLDING_STATUSES = [AppointmentStatus.CONFIRMED.value, AppointmentStatus.PENDING.value]

# ================================
# DOCUMENT STORE TABLE
# ================================

class Document(Base):
    __tablename__ = "documents"

    collection = Column(String(64), primary_key=True)
    id = Column(String(128), primary_key=True)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), default=clinic_now, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column(DateTime(timezone=True), default=clinic_now, onupdate=clinic_now, server_default=text("CURRENT_TIMESTAMP"))

    __table_args__ = (
        Index("ix_documents_collection_created", "collection", "created_at"),
    )
