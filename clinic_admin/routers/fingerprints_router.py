from fastapi import APIRouter, Depends

from ..application.services.enrollment_service import EnrollmentService
from ..dependencies import get_current_admin, get_enrollment_service, verify_device_key
from ..schemas.common.common import MessageResponse
from ..schemas.fingerprints.fingerprint import (
    EnrollmentResponse, DeviceStatusResponse, EnrollmentCallback
)

router = APIRouter(prefix="/fingerprints", tags=["Fingerprints"])


@router.post(
    "/{patient_id}/enroll",
    response_model=EnrollmentResponse,
    status_code=202,
    dependencies=[Depends(get_current_admin)],
)
def enroll_fingerprint(patient_id: str, enrollment: EnrollmentService = Depends(get_enrollment_service)):
    """
    Put the scanner into signup mode for this patient's slot
    """
    patient, slot = enrollment.start(patient_id)
    return EnrollmentResponse(
        message="Place the finger on the scanner",
        slot=slot,
        user_code=patient.user_code,
    )


@router.get("/status", response_model=DeviceStatusResponse, dependencies=[Depends(get_current_admin)])
def device_status(enrollment: EnrollmentService = Depends(get_enrollment_service)):
    mode, ready = enrollment.status()
    return DeviceStatusResponse(device_mode=mode, ready=ready)


@router.post("/callback", response_model=MessageResponse, dependencies=[Depends(verify_device_key)])
def enrollment_callback(payload: EnrollmentCallback, enrollment: EnrollmentService = Depends(get_enrollment_service)):
    """
    Called by the scanner once an enrollment attempt finishes
    """
    enrollment.complete(payload.user_code, payload.success)
    if payload.success:
        return MessageResponse(message="Fingerprint enrolled")
    return MessageResponse(message="Fingerprint enrollment failed")
