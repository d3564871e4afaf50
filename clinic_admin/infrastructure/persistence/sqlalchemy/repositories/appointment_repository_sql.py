from typing import Any, Dict, List, Optional
from datetime import date
from sqlalchemy import func
from sqlmodel import Session, select

from .....models import Appointment, utcnow
from .....application.ports.appointments_repo import AppointmentsRepository, AppointmentDto


class SqlAppointmentsRepository(AppointmentsRepository):
    def __init__(self, session: Session):
        self.session = session

    def _appt_to_dto(self, a: Appointment) -> AppointmentDto:
        return AppointmentDto(
            id=a.id,
            patient_id=a.patient_id,
            patient_name=a.patient_name,
            appointment_date=a.appointment_date,
            appointment_time=a.appointment_time,
            appointment_type=a.appointment_type,
            remote_link=a.remote_link,
            created_at=a.created_at,
            updated_at=a.updated_at,
        )

    def _get(self, appointment_id: str) -> Optional[Appointment]:
        return self.session.exec(select(Appointment).where(Appointment.id == appointment_id)).first()

    def create(self, patient_id: str, patient_name: str, appointment_date: date,
               appointment_time: str, appointment_type: str) -> AppointmentDto:
        appt = Appointment(
            patient_id=patient_id,
            patient_name=patient_name,
            appointment_date=appointment_date,
            appointment_time=appointment_time,
            appointment_type=appointment_type,
        )
        self.session.add(appt)
        self.session.commit()
        self.session.refresh(appt)
        return self._appt_to_dto(appt)

    def list_all(self) -> List[AppointmentDto]:
        rows = self.session.exec(
            select(Appointment)
            .order_by(Appointment.appointment_date, Appointment.appointment_time)
        ).all()
        return [self._appt_to_dto(r) for r in rows]

    def search_by_patient_name(self, term: str) -> List[AppointmentDto]:
        rows = self.session.exec(
            select(Appointment)
            .where(func.lower(Appointment.patient_name).contains(term.lower(), autoescape=True))
            .order_by(Appointment.appointment_date, Appointment.appointment_time)
        ).all()
        return [self._appt_to_dto(r) for r in rows]

    def get_by_id(self, appointment_id: str) -> Optional[AppointmentDto]:
        a = self._get(appointment_id)
        return self._appt_to_dto(a) if a else None

    def update(self, appointment_id: str, fields: Dict[str, Any]) -> Optional[AppointmentDto]:
        a = self._get(appointment_id)
        if not a:
            return None
        for key, value in fields.items():
            if hasattr(a, key):
                setattr(a, key, value)
        a.updated_at = utcnow()
        self.session.add(a)
        self.session.commit()
        self.session.refresh(a)
        return self._appt_to_dto(a)

    def delete(self, appointment_id: str) -> bool:
        a = self._get(appointment_id)
        if not a:
            return False
        self.session.delete(a)
        self.session.commit()
        return True
