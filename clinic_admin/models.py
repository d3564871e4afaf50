# clinic_admin/models.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime, date, timezone
import uuid


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class Admin(SQLModel, table=True):
    __tablename__ = "admins"

    id: str = Field(default_factory=_new_id, primary_key=True)
    username: str = Field(max_length=50, unique=True, index=True)
    password_hash: str = Field(max_length=255)
    created_at: datetime = Field(default_factory=utcnow)


class Patient(SQLModel, table=True):
    __tablename__ = "patients"

    id: str = Field(default_factory=_new_id, primary_key=True)
    user_code: str = Field(max_length=16, unique=True, index=True)  # U001, U002, ...
    name: str = Field(max_length=100, index=True)
    age: int
    gender: str = Field(max_length=20)
    blood_group: str = Field(max_length=5)
    email: Optional[str] = Field(default=None, max_length=100, unique=True, index=True)
    number: Optional[str] = Field(default=None, max_length=20)
    password_hash: str = Field(max_length=255)
    fingerprint_enrolled: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"

    id: str = Field(default_factory=_new_id, primary_key=True)
    # no foreign key constraint: appointments outlive a deleted patient
    patient_id: str = Field(max_length=36, index=True)
    patient_name: str = Field(max_length=100, index=True)
    appointment_date: date
    appointment_time: str = Field(max_length=5)  # HH:MM
    appointment_type: str = Field(max_length=10)  # physical | remote
    remote_link: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Medication(SQLModel, table=True):
    __tablename__ = "medications"

    id: str = Field(default_factory=_new_id, primary_key=True)
    name: str = Field(max_length=100, index=True)
    price: float
    quantity: int
    image_url: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
