from typing import List
from fastapi import APIRouter, Depends, HTTPException
import logging

from ..application.services.patients_service import PatientsService
from ..dependencies import get_current_admin, get_patients_service
from ..schemas.common.common import MessageResponse
from ..schemas.patients.patient import (
    PatientCreate, PatientUpdate, PatientResponse, PatientCreatedResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patients", tags=["Patients"], dependencies=[Depends(get_current_admin)])


@router.post("", response_model=PatientCreatedResponse, status_code=201)
def register_patient(
    payload: PatientCreate,
    patients: PatientsService = Depends(get_patients_service),
):
    try:
        patient = patients.register(
            name=payload.name,
            age=payload.age,
            gender=payload.gender,
            blood_group=payload.blood_group,
            password=payload.password,
            email=payload.email,
            number=payload.number,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error registering patient: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error registering patient")
    return PatientCreatedResponse(
        message="Patient registered successfully",
        patient=PatientResponse.model_validate(patient),
    )


@router.get("", response_model=List[PatientResponse])
def list_patients(patients: PatientsService = Depends(get_patients_service)):
    return [PatientResponse.model_validate(p) for p in patients.list()]


@router.get("/search/{name}", response_model=List[PatientResponse])
def search_patients(name: str, patients: PatientsService = Depends(get_patients_service)):
    return [PatientResponse.model_validate(p) for p in patients.search(name)]


@router.put("/{patient_id}", response_model=PatientResponse)
def update_patient(
    patient_id: str,
    payload: PatientUpdate,
    patients: PatientsService = Depends(get_patients_service),
):
    patient = patients.update(patient_id, payload.model_dump(exclude_unset=True))
    return PatientResponse.model_validate(patient)


@router.delete("/{patient_id}", response_model=MessageResponse)
def delete_patient(patient_id: str, patients: PatientsService = Depends(get_patients_service)):
    patients.delete(patient_id)
    return MessageResponse(message="Patient deleted")
