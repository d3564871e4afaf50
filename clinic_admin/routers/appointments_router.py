from typing import List
from fastapi import APIRouter, Depends, HTTPException
import logging

from ..application.services.appointments_service import AppointmentsService
from ..dependencies import get_current_admin, get_appointments_service
from ..schemas.common.common import MessageResponse
from ..schemas.appointments.appointment import (
    AppointmentCreate, AppointmentUpdate, AppointmentLinkUpdate, AppointmentResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"], dependencies=[Depends(get_current_admin)])


@router.post("", response_model=AppointmentResponse, status_code=201)
def book_appointment(
    payload: AppointmentCreate,
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        appt = appt_service.book(
            patient_id=payload.patient_id,
            appointment_date=payload.appointment_date,
            appointment_time=payload.appointment_time,
            appointment_type=payload.appointment_type,
        )
        return AppointmentResponse.model_validate(appt)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error booking appointment: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to book appointment")


@router.get("", response_model=List[AppointmentResponse])
def list_appointments(appt_service: AppointmentsService = Depends(get_appointments_service)):
    return [AppointmentResponse.model_validate(a) for a in appt_service.list()]


@router.get("/search/{patient_name}", response_model=List[AppointmentResponse])
def search_appointments(patient_name: str, appt_service: AppointmentsService = Depends(get_appointments_service)):
    return [AppointmentResponse.model_validate(a) for a in appt_service.search(patient_name)]


@router.put("/{appointment_id}/link", response_model=AppointmentResponse)
def update_appointment_link(
    appointment_id: str,
    payload: AppointmentLinkUpdate,
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    appt = appt_service.set_remote_link(appointment_id, payload.remote_link)
    return AppointmentResponse.model_validate(appt)


@router.put("/{appointment_id}", response_model=AppointmentResponse)
def update_appointment(
    appointment_id: str,
    payload: AppointmentUpdate,
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    appt = appt_service.update(appointment_id, payload.model_dump(exclude_unset=True))
    return AppointmentResponse.model_validate(appt)


@router.delete("/{appointment_id}", response_model=MessageResponse)
def delete_appointment(appointment_id: str, appt_service: AppointmentsService = Depends(get_appointments_service)):
    appt_service.delete(appointment_id)
    return MessageResponse(message="Appointment deleted")
