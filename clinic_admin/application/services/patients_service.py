from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

from ..ports.patients_repo import PatientsRepository, PatientDto
from ...exceptions import DuplicateError, NotFoundError, UserCodeTakenError, ValidationError
from ...utils import hash_password

logger = logging.getLogger(__name__)

USER_CODE_PREFIX = "U"
USER_CODE_ATTEMPTS = 3


def format_user_code(number: int) -> str:
    return f"{USER_CODE_PREFIX}{number:03d}"


def user_code_slot(user_code: str) -> int:
    """Scanner slot encoded in a patient code, e.g. ``U007`` -> 7."""
    if not user_code or not user_code.startswith(USER_CODE_PREFIX) or not user_code[1:].isdigit():
        raise ValidationError(f"Malformed patient code: {user_code}")
    return int(user_code[1:])


def _normalize_email(email: Optional[str]) -> Optional[str]:
    if email is None:
        return None
    email = email.strip().lower()
    if email and "@" not in email:
        raise ValidationError("Invalid email address")
    return email or None


def _require_text(value: str, label: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{label} must not be blank")
    return value


@dataclass
class PatientsService:
    repo: PatientsRepository

    def register(self, name: str, age: int, gender: str, blood_group: str, password: str,
                 email: Optional[str] = None, number: Optional[str] = None) -> PatientDto:
        email = _normalize_email(email)
        if email and self.repo.get_by_email(email):
            raise DuplicateError("Email already registered")

        name = _require_text(name, "Name")
        password_hash = hash_password(password)
        for attempt in range(USER_CODE_ATTEMPTS):
            user_code = format_user_code(self.repo.max_user_number() + 1)
            try:
                patient = self.repo.create(
                    user_code=user_code,
                    name=name,
                    age=age,
                    gender=gender,
                    blood_group=blood_group,
                    email=email,
                    number=number,
                    password_hash=password_hash,
                )
                break
            except UserCodeTakenError:
                # another registration claimed the same code
                logger.warning(f"Patient code {user_code} taken, retrying ({attempt + 1}/{USER_CODE_ATTEMPTS})")
        else:
            raise UserCodeTakenError()
        logger.info(f"Registered patient {patient.id} ({patient.user_code})")
        return patient

    def list(self) -> List[PatientDto]:
        return self.repo.list_all()

    def search(self, term: str) -> List[PatientDto]:
        return self.repo.search_by_name(term.strip())

    def get(self, patient_id: str) -> PatientDto:
        patient = self.repo.get_by_id(patient_id)
        if not patient:
            raise NotFoundError("Patient not found")
        return patient

    def get_by_user_code(self, user_code: str) -> PatientDto:
        patient = self.repo.get_by_user_code(user_code)
        if not patient:
            raise NotFoundError("Patient not found")
        return patient

    def update(self, patient_id: str, fields: Dict[str, Any]) -> PatientDto:
        changes = {k: v for k, v in fields.items() if v is not None}

        if "password" in changes:
            changes["password_hash"] = hash_password(changes.pop("password"))

        if "email" in changes:
            changes["email"] = _normalize_email(changes["email"])
            other = self.repo.get_by_email(changes["email"]) if changes["email"] else None
            if other and other.id != patient_id:
                raise DuplicateError("Email already registered")

        if "name" in changes:
            changes["name"] = _require_text(changes["name"], "Name")

        patient = self.repo.update(patient_id, changes)
        if not patient:
            raise NotFoundError("Patient not found")
        logger.info(f"Updated patient {patient_id}: {sorted(changes)}")
        return patient

    def set_fingerprint_enrolled(self, patient_id: str, enrolled: bool) -> PatientDto:
        patient = self.repo.update(patient_id, {"fingerprint_enrolled": enrolled})
        if not patient:
            raise NotFoundError("Patient not found")
        return patient

    def delete(self, patient_id: str) -> None:
        if not self.repo.delete(patient_id):
            raise NotFoundError("Patient not found")
        logger.info(f"Deleted patient {patient_id}")
