from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from datetime import datetime, date
import logging

from ..ports.appointments_repo import AppointmentsRepository, AppointmentDto
from ..ports.patients_repo import PatientsRepository
from ...exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

PHYSICAL = "physical"
REMOTE = "remote"
APPOINTMENT_TYPES = (PHYSICAL, REMOTE)


def parse_appointment_date(value: Any) -> date:
    """Accept an ISO date (``2024-05-01``) or an ISO datetime and keep the day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Invalid date format")
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError("Invalid date format")


def validate_appointment_time(value: str) -> str:
    try:
        return datetime.strptime(value.strip(), "%H:%M").strftime("%H:%M")
    except (ValueError, AttributeError):
        raise ValidationError("Invalid time format. Use HH:MM")


def validate_appointment_type(value: str) -> str:
    if value not in APPOINTMENT_TYPES:
        raise ValidationError("Invalid appointment type")
    return value


@dataclass
class AppointmentsService:
    repo: AppointmentsRepository
    patients_repo: PatientsRepository

    def _patient_name(self, patient_id: str) -> str:
        patient = self.patients_repo.get_by_id(patient_id)
        if not patient:
            raise ValidationError("Patient not found")
        return patient.name

    def book(self, patient_id: str, appointment_date: Any, appointment_time: str,
             appointment_type: str) -> AppointmentDto:
        parsed_date = parse_appointment_date(appointment_date)
        parsed_time = validate_appointment_time(appointment_time)
        validate_appointment_type(appointment_type)
        patient_name = self._patient_name(patient_id)

        appt = self.repo.create(patient_id, patient_name, parsed_date, parsed_time, appointment_type)
        logger.info(f"Booked {appointment_type} appointment {appt.id} for patient {patient_id}")
        return appt

    def list(self) -> List[AppointmentDto]:
        return self.repo.list_all()

    def search(self, patient_name: str) -> List[AppointmentDto]:
        return self.repo.search_by_patient_name(patient_name.strip())

    def update(self, appointment_id: str, fields: Dict[str, Any]) -> AppointmentDto:
        changes = {k: v for k, v in fields.items() if v is not None}

        if "appointment_date" in changes:
            changes["appointment_date"] = parse_appointment_date(changes["appointment_date"])
        if "appointment_time" in changes:
            changes["appointment_time"] = validate_appointment_time(changes["appointment_time"])
        if "appointment_type" in changes:
            validate_appointment_type(changes["appointment_type"])
            if changes["appointment_type"] == PHYSICAL:
                # a physical visit has no meeting link
                changes["remote_link"] = None
        if "patient_id" in changes:
            changes["patient_name"] = self._patient_name(changes["patient_id"])

        appt = self.repo.update(appointment_id, changes)
        if not appt:
            raise NotFoundError("Appointment not found")
        logger.info(f"Updated appointment {appointment_id}: {sorted(changes)}")
        return appt

    def set_remote_link(self, appointment_id: str, remote_link: Optional[str]) -> AppointmentDto:
        appt = self.repo.get_by_id(appointment_id)
        if not appt:
            raise NotFoundError("Appointment not found")
        if remote_link and appt.appointment_type != REMOTE:
            raise ValidationError("Remote links can only be set on remote appointments")
        return self.repo.update(appointment_id, {"remote_link": remote_link or None})

    def delete(self, appointment_id: str) -> None:
        if not self.repo.delete(appointment_id):
            raise NotFoundError("Appointment not found")
        logger.info(f"Deleted appointment {appointment_id}")
