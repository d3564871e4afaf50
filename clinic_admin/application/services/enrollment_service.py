from dataclasses import dataclass
from typing import Tuple
import logging

from ..ports.device_registry import DeviceRegistry, AUTH_MODE
from ..ports.patients_repo import PatientDto
from .patients_service import PatientsService, user_code_slot

logger = logging.getLogger(__name__)


@dataclass
class EnrollmentService:
    """Hands enrollment requests to the scanner and records its outcome.

    The scanner reports back through ``complete``; callers read ``status``
    once instead of polling the registry.
    """
    patients: PatientsService
    registry: DeviceRegistry

    def start(self, patient_id: str) -> Tuple[PatientDto, int]:
        patient = self.patients.get(patient_id)
        slot = user_code_slot(patient.user_code)
        self.registry.request_enrollment(patient.user_code, slot)
        patient = self.patients.set_fingerprint_enrolled(patient.id, False)
        logger.info(f"Fingerprint enrollment requested for {patient.user_code} (slot {slot})")
        return patient, slot

    def status(self) -> Tuple[str, bool]:
        mode = self.registry.get_mode()
        return mode, mode == AUTH_MODE

    def complete(self, user_code: str, success: bool) -> PatientDto:
        patient = self.patients.get_by_user_code(user_code)
        if success:
            patient = self.patients.set_fingerprint_enrolled(patient.id, True)
            logger.info(f"Fingerprint enrolled for {user_code}")
        else:
            logger.warning(f"Scanner reported failed enrollment for {user_code}")
        self.registry.reset()
        return patient
