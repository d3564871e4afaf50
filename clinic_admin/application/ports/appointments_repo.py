from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol
from datetime import datetime, date


@dataclass
class AppointmentDto:
    id: str
    patient_id: str
    patient_name: str
    appointment_date: date
    appointment_time: str
    appointment_type: str
    remote_link: Optional[str]
    created_at: datetime
    updated_at: datetime


class AppointmentsRepository(Protocol):
    def create(self, patient_id: str, patient_name: str, appointment_date: date,
               appointment_time: str, appointment_type: str) -> AppointmentDto:
        ...

    def list_all(self) -> List[AppointmentDto]:
        ...

    def search_by_patient_name(self, term: str) -> List[AppointmentDto]:
        ...

    def get_by_id(self, appointment_id: str) -> Optional[AppointmentDto]:
        ...

    def update(self, appointment_id: str, fields: Dict[str, Any]) -> Optional[AppointmentDto]:
        ...

    def delete(self, appointment_id: str) -> bool:
        ...
