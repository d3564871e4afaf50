from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol
from datetime import datetime


@dataclass
class PatientDto:
    id: str
    user_code: str
    name: str
    age: int
    gender: str
    blood_group: str
    email: Optional[str]
    number: Optional[str]
    fingerprint_enrolled: bool
    created_at: datetime
    updated_at: datetime


class PatientsRepository(Protocol):
    def create(self, user_code: str, name: str, age: int, gender: str, blood_group: str,
               email: Optional[str], number: Optional[str], password_hash: str) -> PatientDto:
        ...

    def list_all(self) -> List[PatientDto]:
        ...

    def search_by_name(self, term: str) -> List[PatientDto]:
        ...

    def get_by_id(self, patient_id: str) -> Optional[PatientDto]:
        ...

    def get_by_email(self, email: str) -> Optional[PatientDto]:
        ...

    def get_by_user_code(self, user_code: str) -> Optional[PatientDto]:
        ...

    def max_user_number(self) -> int:
        ...

    def update(self, patient_id: str, fields: Dict[str, Any]) -> Optional[PatientDto]:
        ...

    def delete(self, patient_id: str) -> bool:
        ...
