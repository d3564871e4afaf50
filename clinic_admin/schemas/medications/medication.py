# clinic_admin/schemas/medication.py
from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime

from ..common.common import CamelModel


class MedicationBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=0)
    image_url: Optional[str] = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class MedicationCreate(MedicationBase):
    pass


class MedicationUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[float] = Field(None, ge=0)
    quantity: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class MedicationResponse(MedicationBase):
    id: str
    created_at: datetime
    updated_at: datetime
