from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

from ..ports.medications_repo import MedicationsRepository, MedicationDto
from ...exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _require_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Name must not be blank")
    return name


@dataclass
class MedicationsService:
    repo: MedicationsRepository

    def add(self, name: str, price: float, quantity: int, image_url: Optional[str] = None) -> MedicationDto:
        med = self.repo.create(_require_name(name), price, quantity, image_url)
        logger.info(f"Added medication {med.id} ({med.name})")
        return med

    def list(self) -> List[MedicationDto]:
        return self.repo.list_all()

    def search(self, term: str) -> List[MedicationDto]:
        return self.repo.search_by_name(term.strip())

    def update(self, medication_id: str, fields: Dict[str, Any]) -> MedicationDto:
        changes = {k: v for k, v in fields.items() if v is not None}
        if "name" in changes:
            changes["name"] = _require_name(changes["name"])
        med = self.repo.update(medication_id, changes)
        if not med:
            raise NotFoundError("Medication not found")
        return med

    def delete(self, medication_id: str) -> None:
        if not self.repo.delete(medication_id):
            raise NotFoundError("Medication not found")
        logger.info(f"Deleted medication {medication_id}")
