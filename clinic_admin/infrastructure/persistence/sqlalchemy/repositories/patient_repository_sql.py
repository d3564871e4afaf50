from typing import Any, Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .....models import Patient, utcnow
from .....application.ports.patients_repo import PatientsRepository, PatientDto
from .....exceptions import DuplicateError, UserCodeTakenError


class SqlPatientsRepository(PatientsRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, p: Patient) -> PatientDto:
        return PatientDto(
            id=p.id,
            user_code=p.user_code,
            name=p.name,
            age=p.age,
            gender=p.gender,
            blood_group=p.blood_group,
            email=p.email,
            number=p.number,
            fingerprint_enrolled=bool(p.fingerprint_enrolled),
            created_at=p.created_at,
            updated_at=p.updated_at,
        )

    def _commit(self, patient: Patient) -> Patient:
        self.session.add(patient)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            # sqlite names the column, postgres the ix_patients_* index
            if "user_code" in str(e.orig):
                raise UserCodeTakenError()
            if "email" in str(e.orig):
                raise DuplicateError("Email already registered")
            raise
        self.session.refresh(patient)
        return patient

    def _get(self, patient_id: str) -> Optional[Patient]:
        return self.session.exec(select(Patient).where(Patient.id == patient_id)).first()

    def create(self, user_code: str, name: str, age: int, gender: str, blood_group: str,
               email: Optional[str], number: Optional[str], password_hash: str) -> PatientDto:
        patient = Patient(
            user_code=user_code,
            name=name,
            age=age,
            gender=gender,
            blood_group=blood_group,
            email=email,
            number=number,
            password_hash=password_hash,
        )
        return self._to_dto(self._commit(patient))

    def list_all(self) -> List[PatientDto]:
        rows = self.session.exec(select(Patient).order_by(Patient.created_at)).all()
        return [self._to_dto(r) for r in rows]

    def search_by_name(self, term: str) -> List[PatientDto]:
        rows = self.session.exec(
            select(Patient)
            .where(func.lower(Patient.name).contains(term.lower(), autoescape=True))
            .order_by(Patient.created_at)
        ).all()
        return [self._to_dto(r) for r in rows]

    def get_by_id(self, patient_id: str) -> Optional[PatientDto]:
        p = self._get(patient_id)
        return self._to_dto(p) if p else None

    def get_by_email(self, email: str) -> Optional[PatientDto]:
        p = self.session.exec(select(Patient).where(Patient.email == email)).first()
        return self._to_dto(p) if p else None

    def get_by_user_code(self, user_code: str) -> Optional[PatientDto]:
        p = self.session.exec(select(Patient).where(Patient.user_code == user_code)).first()
        return self._to_dto(p) if p else None

    def max_user_number(self) -> int:
        codes = self.session.exec(select(Patient.user_code)).all()
        numbers = [int(c[1:]) for c in codes if c and c[1:].isdigit()]
        return max(numbers, default=0)

    def update(self, patient_id: str, fields: Dict[str, Any]) -> Optional[PatientDto]:
        p = self._get(patient_id)
        if not p:
            return None
        for key, value in fields.items():
            if hasattr(p, key):
                setattr(p, key, value)
        p.updated_at = utcnow()
        return self._to_dto(self._commit(p))

    def delete(self, patient_id: str) -> bool:
        p = self._get(patient_id)
        if not p:
            return False
        self.session.delete(p)
        self.session.commit()
        return True
