# clinic_admin/schemas/patient.py
from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime

from ..common.common import CamelModel


def strip_required(v):
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


def clean_email(v):
    if v is None or v.strip() == "":
        return None
    if "@" not in v:
        raise ValueError("Invalid email address")
    return v.strip()


class PatientBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    age: int = Field(..., ge=0, le=150)
    gender: str = Field(..., min_length=1, max_length=20)
    blood_group: str = Field(..., min_length=1, max_length=5)
    email: Optional[str] = Field(None, max_length=100)
    number: Optional[str] = Field(None, max_length=20)

    @field_validator("name", "gender", "blood_group")
    @classmethod
    def validate_text(cls, v):
        return strip_required(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return clean_email(v)


class PatientCreate(PatientBase):
    password: str = Field(..., min_length=1)


class PatientUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    age: Optional[int] = Field(None, ge=0, le=150)
    gender: Optional[str] = Field(None, min_length=1, max_length=20)
    blood_group: Optional[str] = Field(None, min_length=1, max_length=5)
    email: Optional[str] = Field(None, max_length=100)
    number: Optional[str] = Field(None, max_length=20)
    password: Optional[str] = Field(None, min_length=1)

    @field_validator("name", "gender", "blood_group")
    @classmethod
    def validate_text(cls, v):
        return strip_required(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        # an empty string clears the stored address
        if v is not None and v.strip() == "":
            return ""
        return clean_email(v)


class PatientResponse(PatientBase):
    id: str
    user_code: str
    fingerprint_enrolled: bool
    created_at: datetime
    updated_at: datetime


class PatientCreatedResponse(CamelModel):
    message: str
    patient: PatientResponse
