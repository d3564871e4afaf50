from typing import List
from fastapi import APIRouter, Depends

from ..application.services.medications_service import MedicationsService
from ..dependencies import get_current_admin, get_medications_service
from ..schemas.common.common import MessageResponse
from ..schemas.medications.medication import MedicationCreate, MedicationUpdate, MedicationResponse

router = APIRouter(prefix="/medications", tags=["Medications"], dependencies=[Depends(get_current_admin)])


@router.post("", response_model=MedicationResponse, status_code=201)
def add_medication(payload: MedicationCreate, meds: MedicationsService = Depends(get_medications_service)):
    med = meds.add(payload.name, payload.price, payload.quantity, payload.image_url)
    return MedicationResponse.model_validate(med)


@router.get("", response_model=List[MedicationResponse])
def list_medications(meds: MedicationsService = Depends(get_medications_service)):
    return [MedicationResponse.model_validate(m) for m in meds.list()]


@router.get("/search/{name}", response_model=List[MedicationResponse])
def search_medications(name: str, meds: MedicationsService = Depends(get_medications_service)):
    return [MedicationResponse.model_validate(m) for m in meds.search(name)]


@router.put("/{medication_id}", response_model=MedicationResponse)
def update_medication(
    medication_id: str,
    payload: MedicationUpdate,
    meds: MedicationsService = Depends(get_medications_service),
):
    med = meds.update(medication_id, payload.model_dump(exclude_unset=True))
    return MedicationResponse.model_validate(med)


@router.delete("/{medication_id}", response_model=MessageResponse)
def delete_medication(medication_id: str, meds: MedicationsService = Depends(get_medications_service)):
    meds.delete(medication_id)
    return MessageResponse(message="Medication deleted")
