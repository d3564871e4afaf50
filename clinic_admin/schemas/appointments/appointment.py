# clinic_admin/schemas/appointment.py
from pydantic import Field
from typing import Optional
from datetime import datetime, date

from ..common.common import CamelModel


class AppointmentCreate(CamelModel):
    patient_id: str = Field(..., min_length=1)
    appointment_date: str = Field(..., alias="date")  # ISO date or datetime
    appointment_time: str = Field(..., alias="time")  # HH:MM
    appointment_type: str  # physical | remote


class AppointmentUpdate(CamelModel):
    patient_id: Optional[str] = Field(None, min_length=1)
    appointment_date: Optional[str] = Field(None, alias="date")
    appointment_time: Optional[str] = Field(None, alias="time")
    appointment_type: Optional[str] = None


class AppointmentLinkUpdate(CamelModel):
    remote_link: Optional[str] = Field(None, max_length=500)


class AppointmentResponse(CamelModel):
    id: str
    patient_id: str
    patient_name: str
    appointment_date: date = Field(..., alias="date")
    appointment_time: str = Field(..., alias="time")
    appointment_type: str
    remote_link: Optional[str] = None
    created_at: datetime
    updated_at: datetime
