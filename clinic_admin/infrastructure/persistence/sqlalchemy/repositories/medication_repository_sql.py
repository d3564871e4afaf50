from typing import Any, Dict, List, Optional
from sqlalchemy import func
from sqlmodel import Session, select

from .....models import Medication, utcnow
from .....application.ports.medications_repo import MedicationsRepository, MedicationDto


class SqlMedicationsRepository(MedicationsRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, m: Medication) -> MedicationDto:
        return MedicationDto(
            id=m.id,
            name=m.name,
            price=m.price,
            quantity=m.quantity,
            image_url=m.image_url,
            created_at=m.created_at,
            updated_at=m.updated_at,
        )

    def create(self, name: str, price: float, quantity: int, image_url: Optional[str]) -> MedicationDto:
        med = Medication(name=name, price=price, quantity=quantity, image_url=image_url)
        self.session.add(med)
        self.session.commit()
        self.session.refresh(med)
        return self._to_dto(med)

    def list_all(self) -> List[MedicationDto]:
        rows = self.session.exec(select(Medication).order_by(Medication.created_at)).all()
        return [self._to_dto(r) for r in rows]

    def search_by_name(self, term: str) -> List[MedicationDto]:
        rows = self.session.exec(
            select(Medication)
            .where(func.lower(Medication.name).contains(term.lower(), autoescape=True))
            .order_by(Medication.created_at)
        ).all()
        return [self._to_dto(r) for r in rows]

    def update(self, medication_id: str, fields: Dict[str, Any]) -> Optional[MedicationDto]:
        m = self.session.exec(select(Medication).where(Medication.id == medication_id)).first()
        if not m:
            return None
        for key, value in fields.items():
            if hasattr(m, key):
                setattr(m, key, value)
        m.updated_at = utcnow()
        self.session.add(m)
        self.session.commit()
        self.session.refresh(m)
        return self._to_dto(m)

    def delete(self, medication_id: str) -> bool:
        m = self.session.exec(select(Medication).where(Medication.id == medication_id)).first()
        if not m:
            return False
        self.session.delete(m)
        self.session.commit()
        return True
